"""Expression Tree Module

Terms, canonical expressions and the compiled evaluator bridge.
"""

from .expression import Expression, as_expression
from .core import (
    Scalar,
    Symbol,
    UnboundSymbolError,
    Term,
    ConstantTerm,
    PowerTerm,
    TermType,
    as_scalar,
    as_term,
    make_binder,
    default_binder
)
from .utils import SymPyCompiler, CompiledExpression, ExpressionValidator

__all__ = [
    "Expression", "as_expression",
    "Scalar", "Symbol", "UnboundSymbolError",
    "Term", "ConstantTerm", "PowerTerm", "TermType",
    "as_scalar", "as_term", "make_binder", "default_binder",
    "SymPyCompiler", "CompiledExpression", "ExpressionValidator"
]
