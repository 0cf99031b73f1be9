import numpy as np
import pytest

from polyterm import Expression, Symbol
from polyterm.expression_tree.core.operators import evaluate_terms_batch_safe


def test_batch_matches_interpreted_on_positive_inputs():
    x, y = Symbol("x"), Symbol("y")
    e = 2 + 1 / (x ** 2) + 6 * x + 6 - 10 * (x ** -3) + x ** 0.25 + 3 * y ** 1.5
    values = np.array([0.1, 0.5, 1.0, 2.0, 3.7, 10.0])
    expected = [float(e.evaluate(v)) for v in values]
    np.testing.assert_allclose(e.evaluate_many(values), expected, rtol=1e-9)


def test_batch_preserves_shape():
    x = Symbol("x")
    out = Expression(x ** 2, 1).evaluate_many(np.array([[1.0, 2.0], [3.0, 4.0]]))
    assert out.shape == (2, 2)
    np.testing.assert_allclose(out, [[2.0, 5.0], [10.0, 17.0]])


def test_batch_bound_symbols_keep_their_value():
    x, y = Symbol("x", 2.0), Symbol("y")
    e = x ** 2 + y
    np.testing.assert_allclose(e.evaluate_many([1.0, 3.0], bound=True), [5.0, 7.0])
    np.testing.assert_allclose(e.evaluate_many([1.0, 3.0]), [2.0, 12.0])


def test_batch_domain_errors():
    x = Symbol("x")
    out = Expression(x ** 0.5, 1 / x).evaluate_many([-1.0, 0.0, 4.0])
    assert np.isnan(out[0])
    assert out[1] == np.inf
    assert out[2] == pytest.approx(2.25)


def test_batch_constant_only():
    np.testing.assert_allclose(Expression().evaluate_many([1.0, 2.0]), [0.0, 0.0])
    np.testing.assert_allclose(Expression(3.5).evaluate_many([1.0, 2.0]), [3.5, 3.5])


def test_batch_kernel_checks_shapes():
    with pytest.raises(ValueError):
        evaluate_terms_batch_safe(np.ones(2), np.ones(2), np.ones((4, 3)))
