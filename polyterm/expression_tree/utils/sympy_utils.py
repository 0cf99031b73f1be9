import inspect
import numpy as np
import sympy as sp
from typing import Callable, Union
from ..core.scalar import Scalar, is_number
from ..core.symbol import Symbol
from ...logging_system import log_debug

DEFAULT_ARGUMENT_NAME = 'x'
DEFAULT_MODULES = 'numpy'


class CompiledExpression:
  """Closure built once from a term or expression.

  Calling it with a number or Scalar returns a Scalar; calling it with an
  array-like returns a float64 array of the same shape. Domain errors come
  back as NaN or inf, never as exceptions or warnings.
  """

  __slots__ = ('sympy_expr', 'argument', 'source', '_func')

  def __init__(self, sympy_expr: sp.Expr, argument: sp.Symbol, func: Callable):
    self.sympy_expr = sympy_expr
    self.argument = argument
    self._func = func
    self.source = inspect.getsource(func)

  def __call__(self, value) -> Union[Scalar, np.ndarray]:
    if is_number(value):
      x = np.float64(float(value))
      with np.errstate(all='ignore'):
        return Scalar(np.float64(self._func(x)))
    samples = np.asarray(value, dtype=np.float64)
    with np.errstate(all='ignore'):
      result = np.asarray(self._func(samples), dtype=np.float64)
    if result.shape != samples.shape:
      result = np.broadcast_to(result, samples.shape).copy()
    return result

  def __repr__(self) -> str:
    return f"CompiledExpression({self.argument} -> {self.sympy_expr})"


class SymPyCompiler:
  """Builds SymPy trees from terms and lambdifies them into closures"""

  def __init__(self, argument_name: str = DEFAULT_ARGUMENT_NAME,
               modules: str = DEFAULT_MODULES):
    self.argument = sp.Symbol(argument_name)
    self.modules = modules

  def shared_provider(self) -> Callable[[Symbol], sp.Expr]:
    """Every symbol becomes the single input argument"""
    return lambda symbol: self.argument

  def unset_provider(self) -> Callable[[Symbol], Union[sp.Expr, Scalar]]:
    """Bound symbols become literals, unbound ones the input argument"""
    def provide(symbol: Symbol):
      return symbol.value if symbol.has_value else self.argument
    return provide

  def build(self, item, provider) -> CompiledExpression:
    sympy_expr = item.to_compilable(provider)
    func = sp.lambdify((self.argument,), sympy_expr, modules=self.modules)
    compiled = CompiledExpression(sympy_expr, self.argument, func)
    log_debug(f"Compiled '{item}' into {sympy_expr} ({self.modules})")
    return compiled

  def compile(self, item) -> CompiledExpression:
    return self.build(item, self.shared_provider())

  def compile_unset(self, item) -> CompiledExpression:
    return self.build(item, self.unset_provider())
