"""Utilities for terms and expressions."""

from .sympy_utils import SymPyCompiler, CompiledExpression
from .term_utils import (
    get_symbols, get_terms_by_symbol, get_powers, get_coefficients,
    get_constant_value, count_zero_terms, term_arrays
)
from .validator import ExpressionValidator

__all__ = [
    'SymPyCompiler', 'CompiledExpression',
    'get_symbols', 'get_terms_by_symbol', 'get_powers', 'get_coefficients',
    'get_constant_value', 'count_zero_terms', 'term_arrays',
    'ExpressionValidator'
]
