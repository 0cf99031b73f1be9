"""polyterm

Symbolic sums of power terms in canonical form, evaluated directly or
through compiled closures.
"""

from .expression_tree import (
  Expression, Scalar, Symbol, UnboundSymbolError,
  Term, ConstantTerm, PowerTerm,
  SymPyCompiler, CompiledExpression, ExpressionValidator
)
from .logging_system import LogLevel, configure_logging, get_logger, set_log_level

__version__ = "0.1.0"
__all__ = [
  "Expression", "Scalar", "Symbol", "UnboundSymbolError",
  "Term", "ConstantTerm", "PowerTerm",
  "SymPyCompiler", "CompiledExpression", "ExpressionValidator",
  "LogLevel", "configure_logging", "get_logger", "set_log_level"
]
