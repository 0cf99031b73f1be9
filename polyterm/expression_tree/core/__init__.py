"""Core term components."""

from .scalar import Scalar, as_scalar, is_number
from .symbol import (
    Symbol, UnboundSymbolError,
    strict_binder, default_binder, constant_binder, mapping_binder, make_binder
)
from .term import (
    Term, ConstantTerm, PowerTerm, as_term,
    try_add, try_subtract, try_multiply, try_divide, multiply_terms, divide_terms
)
from .operators import (
    TermType, DEFAULT_DECIMALS, format_number,
    evaluate_terms_batch, evaluate_terms_batch_safe
)

__all__ = [
    'Scalar', 'as_scalar', 'is_number',
    'Symbol', 'UnboundSymbolError',
    'strict_binder', 'default_binder', 'constant_binder', 'mapping_binder', 'make_binder',
    'Term', 'ConstantTerm', 'PowerTerm', 'as_term',
    'try_add', 'try_subtract', 'try_multiply', 'try_divide', 'multiply_terms', 'divide_terms',
    'TermType', 'DEFAULT_DECIMALS', 'format_number',
    'evaluate_terms_batch', 'evaluate_terms_batch_safe'
]
