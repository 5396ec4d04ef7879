import pytest

from intexpr import ArithmeticOverflowError, EvalConfig, Number, Plus
from intexpr.interp import Evaluation, evaluate, evaluate_source


def test_number_value() -> None:
    assert Number(42).value() == 42
    assert evaluate(Number(0)) == 0


def test_plus_value() -> None:
    assert Plus(Number(2), Number(3)).value() == 5


def test_value_is_left_to_right_sum_of_literals() -> None:
    literals = [3, 14, 15, 92, 65]
    text = f"{literals[0]}+({literals[1]}+{literals[2]})+(({literals[3]}))+{literals[4]}"
    assert evaluate_source(text).value == sum(literals)


def test_value_is_idempotent() -> None:
    expr = Plus(Plus(Number(1), Number(2)), Plus(Number(3), Number(4)))
    results = {expr.value() for _ in range(5)}
    assert results == {10}
    assert expr == Plus(Plus(Number(1), Number(2)), Plus(Number(3), Number(4)))


def test_negative_numbers_allowed_at_tree_level() -> None:
    assert Plus(Number(-5), Number(2)).value() == -3


def test_overflow_fails_by_default() -> None:
    expr = Plus(Number(2147483647), Number(1))
    with pytest.raises(ArithmeticOverflowError) as info:
        expr.value()
    err = info.value
    assert err.code == "E-ARITH-OVERFLOW"
    assert (err.left, err.right, err.bits) == (2147483647, 1, 32)
    assert isinstance(err, ArithmeticError)


def test_overflow_reported_at_inner_plus() -> None:
    # the inner sum overflows even though the outer operand is small
    expr = Plus(Number(1), Plus(Number(2147483647), Number(2147483647)))
    with pytest.raises(ArithmeticOverflowError) as info:
        evaluate(expr)
    assert (info.value.left, info.value.right) == (2147483647, 2147483647)


def test_overflow_wraps_when_configured() -> None:
    config = EvalConfig(overflow="wrap")
    assert evaluate(Plus(Number(2147483647), Number(1)), config) == -2147483648
    assert evaluate_source("2147483647+2147483647+2", config).value == 0


def test_eight_bit_range() -> None:
    assert evaluate_source("100+27", EvalConfig(int_bits=8)).value == 127
    with pytest.raises(ArithmeticOverflowError):
        evaluate_source("100+28", EvalConfig(int_bits=8))
    assert evaluate_source("100+100", EvalConfig(int_bits=8, overflow="wrap")).value == -56


def test_sixty_four_bit_range() -> None:
    config = EvalConfig(int_bits=64)
    assert evaluate_source("2147483647+1", config).value == 2147483648
    with pytest.raises(ArithmeticOverflowError):
        evaluate_source("9223372036854775807+1", config)


def test_evaluate_rejects_foreign_nodes() -> None:
    with pytest.raises(TypeError):
        evaluate(Plus(Number(1), 2))  # type: ignore[arg-type]


def test_evaluate_source_returns_tree_and_value() -> None:
    result = evaluate_source("54+(2+89)")
    assert isinstance(result, Evaluation)
    assert result.source == "54+(2+89)"
    assert result.expr == Plus(Number(54), Plus(Number(2), Number(89)))
    assert result.value == 145


def test_deep_right_nesting_evaluates() -> None:
    expr = Number(1)
    for _ in range(3000):
        expr = Plus(Number(1), expr)
    assert evaluate(expr) == 3001
