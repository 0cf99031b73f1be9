import numpy as np
import sympy as sp
from typing import Iterator, List, Optional, Tuple
from .core.operators import DEFAULT_DECIMALS, evaluate_terms_batch_safe
from .core.scalar import Scalar, as_scalar, is_number
from .core.symbol import Symbol, UnboundSymbolError, default_binder, make_binder
from .core.term import (
  Term, ConstantTerm, as_term, try_add, multiply_terms, divide_terms
)


class Expression:
  """Canonical sum of terms.

  Terms are kept sorted ascending by rank around a single constant slot and no
  two stored terms are combinable. Public operators always return a new
  Expression; only construction mutates one.
  """

  __slots__ = ('_terms', '_constant_index', '_string_cache')

  def __init__(self, *items):
    self._terms: List[Term] = [ConstantTerm(Scalar.ZERO)]
    self._constant_index = 0
    self._string_cache: Optional[str] = None
    for item in items:
      self._add(item)

  # Construction
  def _add(self, item):
    self._string_cache = None
    if isinstance(item, Expression):
      self._add_expression(item)
    else:
      self._add_term(as_term(item))

  def _add_term(self, term: Term) -> int:
    """Merge or insert a term, searching outward from the constant slot"""
    index = self._constant_index
    constant = self._terms[index]
    merged = try_add(constant, term)
    if merged is not None:
      self._terms[index] = merged
      return index
    if term < constant:
      return self._walk_left(term, index)
    return self._walk_right(term, index)

  def _walk_left(self, term: Term, index: int) -> int:
    terms = self._terms
    while True:
      node = terms[index]
      merged = try_add(node, term)
      if merged is not None:
        terms[index] = merged
        return index
      if node.rank < term.rank:
        return self._insert(index + 1, term)
      if index == 0:
        return self._insert(index, term)
      index -= 1

  def _walk_right(self, term: Term, index: int) -> int:
    terms = self._terms
    while True:
      node = terms[index]
      merged = try_add(node, term)
      if merged is not None:
        terms[index] = merged
        return index
      if node.rank > term.rank:
        return self._insert(index, term)
      if index == len(terms) - 1:
        return self._insert(index + 1, term)
      index += 1

  def _insert(self, position: int, term: Term) -> int:
    self._terms.insert(position, term)
    if position <= self._constant_index:
      self._constant_index += 1
    return position

  def _place(self, term: Term, start: int) -> int:
    """Insert starting the search at an arbitrary index"""
    terms = self._terms
    if term < terms[start]:
      return self._walk_left(term, start)
    # Equal-rank terms on other symbols (and NaN powers) may sit left of start
    while start > 0 and not terms[start - 1].rank < term.rank:
      start -= 1
    return self._walk_right(term, start)

  def _add_expression(self, other: 'Expression'):
    cursor = self._constant_index
    for term in other._terms:
      if term.is_constant():
        self._add_term(term)
        cursor = self._constant_index
      else:
        cursor = self._place(term, cursor)

  # Accessors
  @property
  def terms(self) -> Tuple[Term, ...]:
    return tuple(self._terms)

  @property
  def constant(self) -> Term:
    return self._terms[self._constant_index]

  @property
  def constant_index(self) -> int:
    return self._constant_index

  def symbols(self) -> List[Symbol]:
    from .utils.term_utils import get_symbols
    return get_symbols(self)

  def copy(self) -> 'Expression':
    result = Expression.__new__(Expression)
    result._terms = list(self._terms)
    result._constant_index = self._constant_index
    result._string_cache = self._string_cache
    return result

  def __len__(self) -> int:
    return len(self._terms)

  def __iter__(self) -> Iterator[Term]:
    return iter(self._terms)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return NotImplemented
    return (self._constant_index == other._constant_index
            and len(self._terms) == len(other._terms)
            and all(a == b for a, b in zip(self._terms, other._terms)))

  def __hash__(self) -> int:
    return hash(tuple(self._terms))

  # Arithmetic
  def _map_terms(self, fn) -> 'Expression':
    result = Expression.__new__(Expression)
    result._terms = [fn(term) for term in self._terms]
    result._constant_index = self._constant_index
    result._string_cache = None
    return result

  def negate(self) -> 'Expression':
    return self._map_terms(lambda term: term.negate())

  def __neg__(self) -> 'Expression':
    return self.negate()

  def __pos__(self) -> 'Expression':
    return self

  def __add__(self, other):
    if not _is_operand(other):
      return NotImplemented
    result = self.copy()
    result._add(other)
    return result

  def __radd__(self, other):
    if not _is_operand(other):
      return NotImplemented
    result = Expression(other)
    result._add_expression(self)
    return result

  def __sub__(self, other):
    if not _is_operand(other):
      return NotImplemented
    result = as_expression(other).negate()
    result._add_expression(self)
    return result

  def __rsub__(self, other):
    if not _is_operand(other):
      return NotImplemented
    result = self.negate()
    result._add(other)
    return result

  def scale(self, factor) -> 'Expression':
    factor = as_scalar(factor)
    return self._map_terms(lambda term: term.scale(factor))

  def _distribute(self, factors, combine) -> 'Expression':
    result = Expression()
    for term in self._terms:
      if term.coefficient == 0:
        continue
      for factor in factors:
        if factor.coefficient == 0:
          continue
        result._add_term(combine(term, factor))
    return result

  def __mul__(self, other):
    if is_number(other):
      return self.scale(other)
    if isinstance(other, Expression):
      return self._distribute(other._terms, multiply_terms)
    if isinstance(other, (Term, Symbol)):
      return self._distribute([as_term(other)], multiply_terms)
    return NotImplemented

  def __rmul__(self, other):
    if is_number(other):
      return self.scale(other)
    return NotImplemented

  def __truediv__(self, other):
    if is_number(other):
      divisor = as_scalar(other)
      return self._map_terms(lambda term: term.with_coefficient(term.coefficient / divisor))
    if isinstance(other, Expression):
      nonzero = [term for term in other._terms if term.coefficient != 0]
      if not nonzero:
        nonzero = [other.constant]
      if len(nonzero) != 1:
        raise ValueError(f"Cannot divide by the sum '{other}'")
      other = nonzero[0]
    if isinstance(other, (Term, Symbol)):
      divisor = as_term(other)
      if divisor.is_constant():
        return self / divisor.coefficient
      return self._distribute([divisor], divide_terms)
    return NotImplemented

  # Evaluation
  def evaluate(self, binder=None) -> Scalar:
    """Sum every term's value, left to right.

    binder may be None (strict: symbols must carry values), a number bound to
    every symbol, a mapping of symbols to values or a callable.
    """
    bind = make_binder(binder)
    total = Scalar.ZERO
    for term in self._terms:
      total = total + term.evaluate(bind)
    return total

  def evaluate_or_default(self, default) -> Scalar:
    return self.evaluate(default_binder(default))

  def try_evaluate(self) -> Optional[Scalar]:
    try:
      return self.evaluate()
    except UnboundSymbolError:
      return None

  def evaluate_many(self, values, bound: bool = False) -> np.ndarray:
    """Vectorised evaluation of every symbol at each element of `values`.

    With bound=True symbols carrying a value keep it and only unbound symbols
    take the sample values.
    """
    from .utils.term_utils import term_arrays
    samples = np.asarray(values, dtype=np.float64)
    flat = samples.reshape(-1)
    coefficients, powers, bases = term_arrays(self, flat, bound=bound)
    return evaluate_terms_batch_safe(coefficients, powers, bases).reshape(samples.shape)

  # Evaluator bridge
  def to_compilable(self, provider) -> sp.Expr:
    """Unevaluated sum with one SymPy node per stored term"""
    return sp.Add(*[term.to_compilable(provider) for term in self._terms], evaluate=False)

  def to_sympy(self) -> sp.Expr:
    placeholders = {}

    def provider(symbol: Symbol):
      if symbol not in placeholders:
        placeholders[symbol] = sp.Symbol(symbol.identifier)
      return placeholders[symbol]
    return self.to_compilable(provider)

  def compile(self, **kwargs):
    from .utils.sympy_utils import SymPyCompiler
    return SymPyCompiler(**kwargs).compile(self)

  def compile_unset(self, **kwargs):
    from .utils.sympy_utils import SymPyCompiler
    return SymPyCompiler(**kwargs).compile_unset(self)

  # Text
  def to_string(self, decimals: int = DEFAULT_DECIMALS) -> str:
    if decimals == DEFAULT_DECIMALS and self._string_cache is not None:
      return self._string_cache
    parts = []
    for term in self._terms:
      if term.coefficient == 0:
        continue
      parts.append(term.to_string(decimals))
    text = "".join(parts).lstrip('+') if parts else "0"
    if decimals == DEFAULT_DECIMALS:
      self._string_cache = text
    return text

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r})"


def _is_operand(value) -> bool:
  return is_number(value) or isinstance(value, (Term, Symbol, Expression))


def as_expression(value) -> Expression:
  if isinstance(value, Expression):
    return value
  return Expression(value)
