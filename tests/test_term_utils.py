import numpy as np

from polyterm import Expression, Symbol
from polyterm.expression_tree.core.term import PowerTerm
from polyterm.expression_tree.utils.term_utils import (
    count_zero_terms, get_coefficients, get_constant_value, get_powers,
    get_symbols, get_terms_by_symbol, term_arrays
)


def test_queries():
    x, y = Symbol("x"), Symbol("y")
    e = Expression(3 * x ** 2, y, 4, -x)
    assert get_symbols(e) == [y, x]
    assert get_powers(e) == [0.0, 1.0, 1.0, 2.0]
    assert sorted(get_coefficients(e)) == [-1.0, 1.0, 3.0, 4.0]
    assert get_constant_value(e) == 4
    assert len(get_terms_by_symbol(e, x)) == 2
    assert get_symbols(PowerTerm(2, x, 3)) == [x]


def test_count_zero_terms():
    x = Symbol("x")
    e = Expression(x, x ** 2) - Expression(x)
    assert count_zero_terms(e) == 1


def test_term_arrays_layout():
    x, y = Symbol("x"), Symbol("y", 5.0)
    e = Expression(2 * x ** 3, y, 1)
    coefficients, powers, bases = term_arrays(e, np.array([1.0, 2.0]), bound=True)
    assert bases.shape == (2, 3)
    np.testing.assert_allclose(coefficients, [1.0, 1.0, 2.0])
    np.testing.assert_allclose(powers, [0.0, 1.0, 3.0])
    np.testing.assert_allclose(bases, [[1.0, 5.0, 1.0], [1.0, 5.0, 2.0]])
