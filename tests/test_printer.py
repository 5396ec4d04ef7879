import pytest

from intexpr import Number, Plus, parse_expression
from intexpr.printer import format_expr, format_tree


def test_format_tree_sample() -> None:
    expr = parse_expression("54+(2+89)")
    assert format_tree(expr) == "Plus(Number(54), Plus(Number(2), Number(89)))"


def test_format_expr_minimal_parens() -> None:
    assert format_expr(parse_expression("((1+2))+3")) == "1 + 2 + 3"
    assert format_expr(parse_expression("1+(2+3)")) == "1 + (2 + 3)"
    assert format_expr(Number(7)) == "7"


def test_str_uses_infix_form() -> None:
    assert str(Plus(Number(54), Plus(Number(2), Number(89)))) == "54 + (2 + 89)"
    assert str(Number(3)) == "3"


@pytest.mark.parametrize(
    "text",
    ["1", "1+2+3", "54+(2+89)", "(1+2)+(3+(4+5))", "((((1))))+(2+(3+(4+5)))"],
)
def test_format_expr_reparses_to_same_tree(text: str) -> None:
    expr = parse_expression(text)
    assert parse_expression(format_expr(expr)) == expr


def test_format_rejects_foreign_nodes() -> None:
    with pytest.raises(TypeError):
        format_tree("1")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        format_expr(Plus(Number(1), None))  # type: ignore[arg-type]


def test_format_long_chain() -> None:
    expr = parse_expression("+".join(["2"] * 3000))
    assert format_expr(expr) == " + ".join(["2"] * 3000)


def test_format_tree_long_chain() -> None:
    expr = parse_expression("+".join(["1"] * 5000))
    text = format_tree(expr)
    assert text.startswith("Plus(" * 4999 + "Number(1), Number(1))")
    assert text.endswith(", Number(1))")


def test_format_deep_right_nesting() -> None:
    expr = parse_expression("1+(" * 3000 + "2" + ")" * 3000)
    # the innermost group is a bare literal, so it needs no parentheses
    assert format_expr(expr) == "1 + (" * 2999 + "1 + 2" + ")" * 2999
    assert format_tree(expr).count("Plus(") == 3000


def test_repr_is_structural() -> None:
    assert repr(Plus(Number(1), Number(2))) == "Plus(Number(1), Number(2))"
    long_chain = parse_expression("+".join(["3"] * 5000))
    assert repr(long_chain) == format_tree(long_chain)
