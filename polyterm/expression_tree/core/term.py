import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional, Union
from .operators import TermType, DEFAULT_DECIMALS, format_number, signed
from .scalar import Scalar, as_scalar, is_number
from .symbol import Symbol, make_binder


class Term(ABC):
  """Base term: either a constant or coefficient * symbol ^ power"""

  __slots__ = ('_hash_cache',)

  term_type: TermType

  def __init__(self):
    self._hash_cache: Optional[int] = None

  @property
  @abstractmethod
  def coefficient(self) -> Scalar:
    pass

  @property
  @abstractmethod
  def power(self) -> Scalar:
    pass

  @property
  @abstractmethod
  def symbol(self) -> Symbol:
    pass

  @abstractmethod
  def is_constant(self) -> bool:
    pass

  @abstractmethod
  def with_coefficient(self, coefficient: Scalar) -> 'Term':
    pass

  @abstractmethod
  def evaluate(self, binder=None) -> Scalar:
    pass

  @abstractmethod
  def to_string(self, decimals: int = DEFAULT_DECIMALS) -> str:
    pass

  @abstractmethod
  def to_compilable(self, provider) -> sp.Expr:
    pass

  @property
  def rank(self) -> Scalar:
    """Ordering power; every constant-like term ranks as power 0"""
    return Scalar.ZERO if self.is_constant() else self.power

  def is_evaluatable(self) -> bool:
    return self.is_constant() or self.symbol.has_value

  def can_combine(self, other: 'Term') -> bool:
    if self.is_constant() or other.is_constant():
      return self.is_constant() and other.is_constant()
    return self.symbol == other.symbol and self.power == other.power

  def negate(self) -> 'Term':
    return self.with_coefficient(-self.coefficient)

  def scale(self, factor) -> 'Term':
    return self.with_coefficient(self.coefficient * as_scalar(factor))

  def raise_to(self, exponent) -> 'Term':
    exponent = as_scalar(exponent)
    if self.is_constant():
      return ConstantTerm(self.coefficient ** exponent)
    return PowerTerm(self.coefficient ** exponent, self.symbol, self.power * exponent)

  def try_evaluate(self) -> Optional[Scalar]:
    if not self.is_evaluatable():
      return None
    return self.evaluate()

  def compile(self, **kwargs):
    from ..utils.sympy_utils import SymPyCompiler
    return SymPyCompiler(**kwargs).compile(self)

  def compile_unset(self, **kwargs):
    from ..utils.sympy_utils import SymPyCompiler
    return SymPyCompiler(**kwargs).compile_unset(self)

  # Ordering looks at rank only and is independent of combinability
  def __lt__(self, other):
    if not isinstance(other, Term):
      return NotImplemented
    return self.rank < other.rank

  def __le__(self, other):
    if not isinstance(other, Term):
      return NotImplemented
    return self.rank <= other.rank

  def __gt__(self, other):
    if not isinstance(other, Term):
      return NotImplemented
    return self.rank > other.rank

  def __ge__(self, other):
    if not isinstance(other, Term):
      return NotImplemented
    return self.rank >= other.rank

  def __eq__(self, other):
    if not isinstance(other, Term):
      return NotImplemented
    if self.is_constant() or other.is_constant():
      return (self.is_constant() and other.is_constant()
              and self.coefficient == other.coefficient)
    return (self.symbol == other.symbol
            and self.coefficient == other.coefficient
            and self.power == other.power)

  def __hash__(self) -> int:
    if self._hash_cache is None:
      if self.is_constant():
        self._hash_cache = hash((TermType.CONSTANT, self.coefficient))
      else:
        self._hash_cache = hash((TermType.POWER, self.symbol, self.coefficient, self.power))
    return self._hash_cache

  def __str__(self) -> str:
    return self.to_string()

  # Operators
  def __neg__(self) -> 'Term':
    return self.negate()

  def __pos__(self) -> 'Term':
    return self

  def __add__(self, other):
    from ..expression import Expression
    if not _is_operand(other):
      return NotImplemented
    return Expression(self, other)

  def __radd__(self, other):
    from ..expression import Expression
    if not _is_operand(other):
      return NotImplemented
    return Expression(other, self)

  def __sub__(self, other):
    from ..expression import Expression
    if not _is_operand(other):
      return NotImplemented
    return Expression(self) - other

  def __rsub__(self, other):
    from ..expression import Expression
    if not _is_operand(other):
      return NotImplemented
    return Expression(other) - self

  def __mul__(self, other):
    from ..expression import Expression
    if isinstance(other, Expression):
      return Expression(self) * other
    if is_number(other):
      return self.scale(other)
    if not isinstance(other, (Term, Symbol)):
      return NotImplemented
    return multiply_terms(self, as_term(other))

  def __rmul__(self, other):
    if is_number(other):
      return self.scale(other)
    if isinstance(other, Symbol):
      return multiply_terms(as_term(other), self)
    return NotImplemented

  def __truediv__(self, other):
    if is_number(other):
      return self.with_coefficient(self.coefficient / as_scalar(other))
    if not isinstance(other, (Term, Symbol)):
      return NotImplemented
    return divide_terms(self, as_term(other))

  def __rtruediv__(self, other):
    if is_number(other):
      numerator = as_scalar(other)
      if self.is_constant():
        return ConstantTerm(numerator / self.coefficient)
      return PowerTerm(numerator / self.coefficient, self.symbol, -self.power)
    if isinstance(other, Symbol):
      return divide_terms(as_term(other), self)
    return NotImplemented

  def __pow__(self, other):
    if not is_number(other):
      return NotImplemented
    return self.raise_to(other)


class ConstantTerm(Term):
  __slots__ = ('value',)

  term_type = TermType.CONSTANT

  def __init__(self, value: Union[Scalar, float] = Scalar.ZERO):
    super().__init__()
    self.value = as_scalar(value)

  @property
  def coefficient(self) -> Scalar:
    return self.value

  @property
  def power(self) -> Scalar:
    return Scalar.ZERO

  @property
  def symbol(self) -> Symbol:
    return Symbol.INVALID

  def is_constant(self) -> bool:
    return True

  def with_coefficient(self, coefficient: Scalar) -> 'ConstantTerm':
    return ConstantTerm(coefficient)

  def evaluate(self, binder=None) -> Scalar:
    return self.value

  def to_string(self, decimals: int = DEFAULT_DECIMALS) -> str:
    if self.value == 0:
      return "+0"
    return signed(format_number(self.value, decimals))

  def to_compilable(self, provider) -> sp.Expr:
    return _literal(self.value)

  def __repr__(self) -> str:
    return f"ConstantTerm({float(self.value)!r})"


class PowerTerm(Term):
  """coefficient * symbol ^ power.

  A zero coefficient, a zero power or an invalid symbol at construction
  invalidates the symbol, so the term behaves as a constant.
  """

  __slots__ = ('_coefficient', '_symbol', '_power')

  term_type = TermType.POWER

  def __init__(self, coefficient: Union[Scalar, float], symbol: Symbol,
               power: Union[Scalar, float] = Scalar.ONE):
    super().__init__()
    if not isinstance(symbol, Symbol):
      raise TypeError(f"PowerTerm needs a Symbol, got {type(symbol).__name__}")
    self._coefficient = as_scalar(coefficient)
    self._power = as_scalar(power)
    if self._coefficient == 0 or self._power == 0 or not symbol.is_valid:
      symbol = Symbol.INVALID
    self._symbol = symbol

  @classmethod
  def _merged(cls, coefficient: Scalar, symbol: Symbol, power: Scalar) -> 'PowerTerm':
    # Merge results keep their symbol even when the coefficient cancels to 0
    term = cls.__new__(cls)
    term._hash_cache = None
    term._coefficient = coefficient
    term._symbol = symbol
    term._power = power
    return term

  @property
  def coefficient(self) -> Scalar:
    return self._coefficient

  @property
  def power(self) -> Scalar:
    return self._power

  @property
  def symbol(self) -> Symbol:
    return self._symbol

  def is_constant(self) -> bool:
    return not self._symbol.is_valid

  def with_coefficient(self, coefficient: Scalar) -> Term:
    if self.is_constant():
      return ConstantTerm(coefficient)
    return PowerTerm._merged(as_scalar(coefficient), self._symbol, self._power)

  def evaluate(self, binder=None) -> Scalar:
    if self.is_constant():
      return self._coefficient
    base = make_binder(binder)(self._symbol)
    return self._coefficient * (base ** self._power)

  def to_string(self, decimals: int = DEFAULT_DECIMALS) -> str:
    coefficient = self._coefficient
    if coefficient == 0:
      return "+0"
    if self.is_constant():
      return signed(format_number(coefficient, decimals))
    name = str(self._symbol)
    power = self._power
    if power < 0:
      magnitude = -power
      denominator = name if magnitude == 1 else f"{name}^{format_number(magnitude, decimals)}"
      return f"{signed(format_number(coefficient, decimals))}/{denominator}"
    body = name if power == 1 else f"{name}^{format_number(power, decimals)}"
    if coefficient == 1:
      return f"+{body}"
    if coefficient == -1:
      return f"-{body}"
    return f"{signed(format_number(coefficient, decimals))}{body}"

  def to_compilable(self, provider) -> sp.Expr:
    if self.is_constant():
      return _literal(self._coefficient)
    base = provider(self._symbol)
    if isinstance(base, Scalar) or is_number(base):
      return _literal(self._coefficient * (as_scalar(base) ** self._power))
    if self._coefficient.is_nan:
      return sp.nan
    # Unevaluated: a zero coefficient must still reach numpy as 0*x^p
    power = sp.Pow(base, _literal(self._power), evaluate=False)
    return sp.Mul(_literal(self._coefficient), power, evaluate=False)

  def __repr__(self) -> str:
    return (f"PowerTerm({float(self._coefficient)!r}, {self._symbol!r}, "
            f"{float(self._power)!r})")


def _literal(value: Scalar) -> sp.Expr:
  if value.is_nan:
    return sp.nan
  if not value.is_finite:
    return sp.oo if value > 0 else -sp.oo
  return sp.Float(float(value))


def _is_operand(value) -> bool:
  from ..expression import Expression
  return is_number(value) or isinstance(value, (Term, Symbol, Expression))


def as_term(value) -> Term:
  """Coerce a number, Scalar, Symbol or Term into a Term"""
  if isinstance(value, Term):
    return value
  if isinstance(value, Symbol):
    return PowerTerm(Scalar.ONE, value, Scalar.ONE)
  if is_number(value):
    return ConstantTerm(as_scalar(value))
  raise TypeError(f"Cannot convert {type(value).__name__} to a term")


def try_add(a: Term, b: Term) -> Optional[Term]:
  """Sum of two combinable terms keeping a's symbol and power, else None"""
  if not a.can_combine(b):
    return None
  if a.is_constant():
    return ConstantTerm(a.coefficient + b.coefficient)
  return PowerTerm._merged(a.coefficient + b.coefficient, a.symbol, a.power)


def try_subtract(a: Term, b: Term) -> Optional[Term]:
  if not a.can_combine(b):
    return None
  if a.is_constant():
    return ConstantTerm(a.coefficient - b.coefficient)
  return PowerTerm._merged(a.coefficient - b.coefficient, a.symbol, a.power)


def try_multiply(a: Term, b: Term) -> Optional[Term]:
  """Product when both are constant or share a symbol: powers add"""
  if a.is_constant() and b.is_constant():
    return ConstantTerm(a.coefficient * b.coefficient)
  if a.is_constant() or b.is_constant() or a.symbol != b.symbol:
    return None
  return PowerTerm(a.coefficient * b.coefficient, a.symbol, a.power + b.power)


def try_divide(a: Term, b: Term) -> Optional[Term]:
  """Quotient when both are constant or share a symbol: powers subtract"""
  if a.is_constant() and b.is_constant():
    return ConstantTerm(a.coefficient / b.coefficient)
  if a.is_constant() or b.is_constant() or a.symbol != b.symbol:
    return None
  return PowerTerm(a.coefficient / b.coefficient, a.symbol, a.power - b.power)


def multiply_terms(a: Term, b: Term) -> Term:
  """Product of two terms; a constant factor scales the other term"""
  product = try_multiply(a, b)
  if product is not None:
    return product
  if a.is_constant():
    return b.scale(a.coefficient)
  if b.is_constant():
    return a.scale(b.coefficient)
  raise ValueError(f"Cannot multiply terms on different symbols: {a} and {b}")


def divide_terms(a: Term, b: Term) -> Term:
  """Quotient of two terms; a constant divisor scales the dividend"""
  quotient = try_divide(a, b)
  if quotient is not None:
    return quotient
  if b.is_constant():
    return a.with_coefficient(a.coefficient / b.coefficient)
  if a.is_constant():
    return PowerTerm(a.coefficient / b.coefficient, b.symbol, -b.power)
  raise ValueError(f"Cannot divide terms on different symbols: {a} and {b}")
