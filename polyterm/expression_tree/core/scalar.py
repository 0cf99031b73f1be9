import numpy as np
from typing import Union

Number = Union[int, float, np.floating, np.integer]


def _coerce(other):
  if isinstance(other, Scalar):
    return other.value
  if isinstance(other, (bool, np.bool_)):
    return NotImplemented
  if isinstance(other, (int, float, np.floating, np.integer)):
    return np.float64(other)
  return NotImplemented


class Scalar:
  """Immutable double precision value with IEEE-754 semantics"""

  __slots__ = ('value',)

  ZERO: 'Scalar'
  ONE: 'Scalar'
  NAN: 'Scalar'

  def __init__(self, value: Union['Scalar', Number] = 0.0):
    if isinstance(value, Scalar):
      value = value.value
    self.value = np.float64(value)

  @property
  def is_nan(self) -> bool:
    return bool(np.isnan(self.value))

  @property
  def is_finite(self) -> bool:
    return bool(np.isfinite(self.value))

  def __float__(self) -> float:
    return float(self.value)

  def __int__(self) -> int:
    return int(self.value)

  def __bool__(self) -> bool:
    return bool(self.value != 0)

  def __hash__(self) -> int:
    return hash(float(self.value))

  def __repr__(self) -> str:
    return f"Scalar({float(self.value)!r})"

  def __str__(self) -> str:
    return str(float(self.value))

  def __format__(self, spec: str) -> str:
    return format(float(self.value), spec)

  # Comparisons: NaN compares false against everything
  def __eq__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    return bool(self.value == o)

  def __ne__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    return bool(self.value != o)

  def __lt__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    return bool(self.value < o)

  def __le__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    return bool(self.value <= o)

  def __gt__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    return bool(self.value > o)

  def __ge__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    return bool(self.value >= o)

  # Arithmetic
  def __neg__(self) -> 'Scalar':
    return Scalar(-self.value)

  def __pos__(self) -> 'Scalar':
    return self

  def __abs__(self) -> 'Scalar':
    return Scalar(np.abs(self.value))

  def __add__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    with np.errstate(all='ignore'):
      return Scalar(self.value + o)

  def __radd__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    with np.errstate(all='ignore'):
      return Scalar(o + self.value)

  def __sub__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    with np.errstate(all='ignore'):
      return Scalar(self.value - o)

  def __rsub__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    with np.errstate(all='ignore'):
      return Scalar(o - self.value)

  def __mul__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    with np.errstate(all='ignore'):
      return Scalar(self.value * o)

  def __rmul__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    with np.errstate(all='ignore'):
      return Scalar(o * self.value)

  def __truediv__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    with np.errstate(all='ignore'):
      return Scalar(np.divide(self.value, o))

  def __rtruediv__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    with np.errstate(all='ignore'):
      return Scalar(np.divide(o, self.value))

  def __pow__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    with np.errstate(all='ignore'):
      return Scalar(np.power(self.value, o))

  def __rpow__(self, other):
    o = _coerce(other)
    if o is NotImplemented:
      return NotImplemented
    with np.errstate(all='ignore'):
      return Scalar(np.power(o, self.value))


Scalar.ZERO = Scalar(0.0)
Scalar.ONE = Scalar(1.0)
Scalar.NAN = Scalar(np.nan)


def as_scalar(value) -> Scalar:
  """Convert a number or Scalar to Scalar, raising TypeError otherwise"""
  if isinstance(value, Scalar):
    return value
  if _coerce(value) is NotImplemented:
    raise TypeError(f"Expected a number, got {type(value).__name__}")
  return Scalar(value)


def is_number(value) -> bool:
  return isinstance(value, Scalar) or _coerce(value) is not NotImplemented
