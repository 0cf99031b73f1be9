from collections.abc import Mapping
from typing import Callable, Optional, Union
from .scalar import Scalar, as_scalar, is_number
from ...logging_system import log_debug

Binder = Callable[['Symbol'], Scalar]


class UnboundSymbolError(ValueError):
  """Raised by strict evaluation when a symbol carries no value"""

  def __init__(self, symbol: 'Symbol'):
    super().__init__(f"Symbol '{symbol}' has no bound value")
    self.symbol = symbol


class Symbol:
  """Named unknown, optionally bound to a value.

  Identity is the identifier alone: two symbols with the same identifier are
  the same unknown whatever value each carries.
  """

  __slots__ = ('identifier', '_value')

  INVALID: 'Symbol'

  def __init__(self, identifier: Optional[str], value: Union[Scalar, float] = Scalar.NAN):
    if identifier is not None:
      if not isinstance(identifier, str):
        raise TypeError(f"Symbol identifier must be a string, got {type(identifier).__name__}")
      if not identifier:
        raise ValueError("Symbol identifier must not be empty")
    self.identifier = identifier
    self._value = Scalar.ONE if identifier is None else as_scalar(value)

  @property
  def is_valid(self) -> bool:
    return self.identifier is not None

  @property
  def has_value(self) -> bool:
    return not self._value.is_nan

  @property
  def value(self) -> Scalar:
    return self._value

  def bind(self, value: Union[Scalar, float]) -> 'Symbol':
    if not self.is_valid:
      raise ValueError("Cannot bind a value to the invalid symbol")
    self._value = as_scalar(value)
    return self

  def unbind(self) -> 'Symbol':
    if self.is_valid:
      self._value = Scalar.NAN
    return self

  def evaluate(self, binder=None) -> Scalar:
    return make_binder(binder)(self)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Symbol):
      return NotImplemented
    return self.identifier == other.identifier

  def __ne__(self, other) -> bool:
    if not isinstance(other, Symbol):
      return NotImplemented
    return self.identifier != other.identifier

  def __hash__(self) -> int:
    return hash(('symbol', self.identifier))

  def __str__(self) -> str:
    return self.identifier if self.is_valid else ''

  def __repr__(self) -> str:
    if not self.is_valid:
      return "Symbol.INVALID"
    if self.has_value:
      return f"Symbol({self.identifier!r}, {float(self._value)!r})"
    return f"Symbol({self.identifier!r})"

  # Operators build terms and expressions
  def _as_term(self):
    from .term import PowerTerm
    return PowerTerm(Scalar.ONE, self, Scalar.ONE)

  def __neg__(self):
    from .term import PowerTerm
    return PowerTerm(-Scalar.ONE, self, Scalar.ONE)

  def __pos__(self):
    return self._as_term()

  def __add__(self, other):
    return self._as_term() + other

  def __radd__(self, other):
    return other + self._as_term()

  def __sub__(self, other):
    return self._as_term() - other

  def __rsub__(self, other):
    return other - self._as_term()

  def __mul__(self, other):
    return self._as_term() * other

  def __rmul__(self, other):
    return other * self._as_term()

  def __truediv__(self, other):
    return self._as_term() / other

  def __rtruediv__(self, other):
    return other / self._as_term()

  def __pow__(self, other):
    if not is_number(other):
      return NotImplemented
    from .term import PowerTerm
    return PowerTerm(Scalar.ONE, self, as_scalar(other))


Symbol.INVALID = Symbol(None)


def strict_binder() -> Binder:
  """Binder that reads each symbol's own value"""
  def bind(symbol: Symbol) -> Scalar:
    if not symbol.has_value:
      log_debug(f"Strict evaluation hit unbound symbol '{symbol}'")
      raise UnboundSymbolError(symbol)
    return symbol.value
  return bind


def default_binder(default) -> Binder:
  """Binder that falls back to `default` for unbound symbols"""
  fallback = as_scalar(default)

  def bind(symbol: Symbol) -> Scalar:
    return symbol.value if symbol.has_value else fallback
  return bind


def constant_binder(value) -> Binder:
  """Binder that gives every symbol the same value"""
  shared = as_scalar(value)
  return lambda symbol: shared


def mapping_binder(mapping: Mapping) -> Binder:
  """Binder reading from a symbol -> value mapping, then from bound values"""
  values = {symbol: as_scalar(v) for symbol, v in mapping.items()}
  strict = strict_binder()

  def bind(symbol: Symbol) -> Scalar:
    if symbol in values:
      return values[symbol]
    return strict(symbol)
  return bind


def make_binder(source=None) -> Binder:
  """Turn None, a number, a mapping or a callable into a binder"""
  if source is None:
    return strict_binder()
  if is_number(source):
    return constant_binder(source)
  if isinstance(source, Mapping):
    return mapping_binder(source)
  if callable(source):
    return lambda symbol: as_scalar(source(symbol))
  raise TypeError(f"Cannot build a binder from {type(source).__name__}")
