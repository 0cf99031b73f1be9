"""
Term Utility Functions

Read-only queries over terms and expressions, shared by the evaluator,
the validator and the batch kernel.
"""

import numpy as np
from typing import Dict, List, Tuple

from ..core.scalar import Scalar
from ..core.symbol import Symbol
from ..core.term import Term


def _iter_terms(item) -> List[Term]:
    if isinstance(item, Term):
        return [item]
    return list(item)


def get_symbols(item) -> List[Symbol]:
    """
    Get the distinct valid symbols referenced by a term or expression.

    Args:
        item: Term or Expression

    Returns:
        Symbols in order of first appearance
    """
    seen: Dict[Symbol, Symbol] = {}
    for term in _iter_terms(item):
        if not term.is_constant() and term.symbol not in seen:
            seen[term.symbol] = term.symbol
    return list(seen.values())


def get_terms_by_symbol(expr, symbol: Symbol) -> List[Term]:
    """Non-constant terms of `expr` on `symbol`, in stored order"""
    return [term for term in _iter_terms(expr)
            if not term.is_constant() and term.symbol == symbol]


def get_powers(expr) -> List[float]:
    """Ranks of all stored terms (constants report 0)"""
    return [float(term.rank) for term in _iter_terms(expr)]


def get_coefficients(expr) -> List[float]:
    return [float(term.coefficient) for term in _iter_terms(expr)]


def get_constant_value(expr) -> Scalar:
    """Sum of the constant terms (a canonical expression has exactly one)"""
    total = Scalar.ZERO
    for term in _iter_terms(expr):
        if term.is_constant():
            total = total + term.coefficient
    return total


def count_zero_terms(expr) -> int:
    """Number of non-constant terms whose coefficient cancelled to zero"""
    return sum(1 for term in _iter_terms(expr)
               if not term.is_constant() and term.coefficient == 0)


def term_arrays(expr, samples: np.ndarray,
                bound: bool = False) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Lay out an expression for the batch kernel.

    Args:
        expr: Term or Expression
        samples: 1-D float64 array of input values
        bound: keep bound symbols at their own value instead of the samples

    Returns:
        (coefficients, powers, bases) where bases has shape
        (n_samples, n_terms). Constant terms get base 1 and power 0.
    """
    terms = _iter_terms(expr)
    samples = np.asarray(samples, dtype=np.float64).reshape(-1)
    n_terms = len(terms)
    coefficients = np.empty(n_terms, dtype=np.float64)
    powers = np.zeros(n_terms, dtype=np.float64)
    bases = np.ones((samples.shape[0], n_terms), dtype=np.float64)

    for j, term in enumerate(terms):
        coefficients[j] = term.coefficient.value
        if term.is_constant():
            continue
        powers[j] = term.power.value
        if bound and term.symbol.has_value:
            bases[:, j] = term.symbol.value.value
        else:
            bases[:, j] = samples

    return coefficients, powers, bases
