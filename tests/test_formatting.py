from polyterm import Expression, Symbol
from polyterm.expression_tree.core.operators import format_number
from polyterm.expression_tree.core.term import ConstantTerm, PowerTerm


def test_format_number():
    assert format_number(2.0) == "2"
    assert format_number(2.5) == "2.5"
    assert format_number(1 / 3) == "0.33"
    assert format_number(1 / 3, 4) == "0.3333"
    assert format_number(-0.001) == "0"
    assert format_number(float("nan")) == "NaN"
    assert format_number(float("-inf")) == "-inf"


def test_power_term_strings():
    x = Symbol("x")
    assert str(PowerTerm(3, x, 2)) == "+3x^2"
    assert str(PowerTerm(-2, x, -3)) == "-2/x^3"
    assert str(PowerTerm(3, x, -1)) == "+3/x"
    assert str(PowerTerm(1, x, 1)) == "+x"
    assert str(PowerTerm(-1, x, 1)) == "-x"
    assert str(PowerTerm(1, x, 2)) == "+x^2"
    assert str(PowerTerm(-2.5, x, 1)) == "-2.5x"
    assert str(PowerTerm(0.5, x, 0.25)) == "+0.5x^0.25"
    assert str(PowerTerm(0, x, 2)) == "+0"
    assert str(PowerTerm(4, x, 0)) == "+4"


def test_constant_term_strings():
    assert str(ConstantTerm(0)) == "+0"
    assert str(ConstantTerm(-2.5)) == "-2.5"
    assert str(ConstantTerm(1 / 3)) == "+0.33"
    assert ConstantTerm(1 / 3).to_string(4) == "+0.3333"


def test_expression_strings():
    x, y = Symbol("x"), Symbol("y")
    e = 2 + 1 / (x ** 2) + 6 * x + 6 - 10 * (x ** -3) + x ** 0.25
    assert str(e) == "-10/x^3+1/x^2+8+x^0.25+6x"
    assert str(Expression(x, 3)) == "3+x"
    assert str(Expression(-5 * y)) == "-5y"
    assert repr(Expression(x, 3)) == "Expression('3+x')"
    assert Expression(x / 3).to_string(3) == "0.333x"
