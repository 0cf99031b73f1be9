import numpy as np
import pytest

from polyterm.expression_tree.core.scalar import Scalar
from polyterm.expression_tree.core.symbol import Symbol
from polyterm.expression_tree.core.term import (
    ConstantTerm, PowerTerm, as_term, divide_terms, multiply_terms,
    try_add, try_divide, try_multiply, try_subtract
)


@pytest.fixture
def x():
    return Symbol("x")


@pytest.fixture
def y():
    return Symbol("y")


def test_degenerate_power_terms_are_constant(x):
    assert PowerTerm(0, x, 2).is_constant()
    assert PowerTerm(3, x, 0).is_constant()
    assert PowerTerm(3, Symbol.INVALID, 2).is_constant()
    assert not PowerTerm(3, x, 2).is_constant()
    assert PowerTerm(3, x, 0).rank == 0
    assert PowerTerm(3, x, 0) == ConstantTerm(3)


def test_power_term_needs_a_symbol():
    with pytest.raises(TypeError):
        PowerTerm(1, "x", 2)


def test_can_combine(x, y):
    assert PowerTerm(3, x, 2).can_combine(PowerTerm(4, x, 2))
    assert not PowerTerm(3, x, 2).can_combine(PowerTerm(3, x, 3))
    assert not PowerTerm(3, x, 2).can_combine(PowerTerm(3, y, 2))
    assert not PowerTerm(3, x, 2).can_combine(ConstantTerm(3))
    assert ConstantTerm(1).can_combine(ConstantTerm(2))
    assert ConstantTerm(1).can_combine(PowerTerm(0, x, 4))
    assert not PowerTerm(1, x, np.nan).can_combine(PowerTerm(1, x, np.nan))


def test_try_add_and_subtract(x, y):
    merged = try_add(PowerTerm(3, x, 2), PowerTerm(4, x, 2))
    assert merged.coefficient == 7
    assert merged.power == 2
    assert merged.symbol is x

    cancelled = try_add(PowerTerm(3, x, 2), PowerTerm(-3, x, 2))
    assert cancelled.coefficient == 0
    assert not cancelled.is_constant()
    assert cancelled.symbol == x

    assert try_subtract(PowerTerm(3, x, 2), PowerTerm(1, x, 2)).coefficient == 2
    assert try_add(PowerTerm(3, x, 2), PowerTerm(3, y, 2)) is None
    assert try_add(ConstantTerm(1), ConstantTerm(2)) == ConstantTerm(3)


def test_try_multiply_and_divide(x, y):
    product = try_multiply(PowerTerm(2, x, 2), PowerTerm(3, x, -1))
    assert product == PowerTerm(6, x, 1)
    assert try_multiply(PowerTerm(2, x, 1), PowerTerm(3, y, 1)) is None
    assert try_multiply(ConstantTerm(2), ConstantTerm(3)) == ConstantTerm(6)

    assert try_divide(PowerTerm(6, x, 3), PowerTerm(2, x, 1)) == PowerTerm(3, x, 2)
    assert try_divide(PowerTerm(6, x, 1), PowerTerm(2, x, 1)).is_constant()
    assert try_divide(ConstantTerm(1), ConstantTerm(4)) == ConstantTerm(0.25)


def test_constant_factors_scale(x, y):
    assert multiply_terms(ConstantTerm(2), PowerTerm(3, x, 2)) == PowerTerm(6, x, 2)
    assert divide_terms(PowerTerm(3, x, 2), ConstantTerm(2)) == PowerTerm(1.5, x, 2)
    assert divide_terms(ConstantTerm(3), PowerTerm(2, x, 2)) == PowerTerm(1.5, x, -2)
    with pytest.raises(ValueError):
        multiply_terms(PowerTerm(1, x, 1), PowerTerm(1, y, 1))
    with pytest.raises(ValueError):
        divide_terms(PowerTerm(1, x, 1), PowerTerm(1, y, 1))


def test_symbol_operators_build_terms(x, y):
    assert x * x == PowerTerm(1, x, 2)
    assert (x / x).is_constant()
    assert (x / x).coefficient == 1
    assert 2 / x == PowerTerm(2, x, -1)
    assert x / 4 == PowerTerm(0.25, x, 1)
    assert 3 * x == PowerTerm(3, x, 1)
    assert -x == PowerTerm(-1, x, 1)
    assert x ** 0.25 == PowerTerm(1, x, 0.25)
    with pytest.raises(ValueError):
        x * y


def test_raise_to(x):
    assert (3 * x ** 2) ** 2 == PowerTerm(9, x, 4)
    assert ConstantTerm(2) ** 3 == ConstantTerm(8)


def test_negate_and_scale(x):
    term = PowerTerm(3, x, 2)
    assert term.negate() == PowerTerm(-3, x, 2)
    assert -term == PowerTerm(-3, x, 2)
    assert term.scale(2) == PowerTerm(6, x, 2)
    assert term.scale(0).coefficient == 0
    assert term == PowerTerm(3, x, 2)


def test_ordering_is_by_rank_only(x, y):
    assert PowerTerm(1, x, -1) < ConstantTerm(5) < PowerTerm(1, y, 2)
    assert PowerTerm(1, x, 2) <= PowerTerm(5, y, 2)
    assert PowerTerm(1, x, 2) >= PowerTerm(5, y, 2)
    assert not PowerTerm(1, x, 2) < PowerTerm(5, y, 2)
    assert PowerTerm(1, x, 3) > PowerTerm(1, x, 2)


def test_evaluate(x):
    assert PowerTerm(2, x, 3).evaluate(2.0) == 16
    assert PowerTerm(1, x, 0.5).evaluate(-4).is_nan
    assert PowerTerm(1, x, -1).evaluate(0.0) == np.inf
    assert ConstantTerm(5).evaluate() == 5
    assert PowerTerm(3, x, 0).evaluate() == 3

    assert PowerTerm(2, x, 1).try_evaluate() is None
    x.bind(4)
    assert PowerTerm(2, x, 1).try_evaluate() == 8
    assert PowerTerm(2, x, 1).is_evaluatable()


def test_as_term(x):
    assert as_term(3) == ConstantTerm(3)
    assert as_term(Scalar(3)) == ConstantTerm(3)
    assert as_term(x) == PowerTerm(1, x, 1)
    with pytest.raises(TypeError):
        as_term("x")


def test_hash_matches_equality(x):
    assert hash(PowerTerm(3, x, 2)) == hash(PowerTerm(3, Symbol("x"), 2))
    assert hash(PowerTerm(0, x, 2)) == hash(ConstantTerm(0))
