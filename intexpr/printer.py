from __future__ import annotations

from typing import Callable, List, Tuple

from .ast import Expression, Number, Plus


def _render(expr: Expression, number: Callable[[Number], str], plus: Callable[[Plus, str, str], str]) -> str:
    # post-order with an explicit stack, like interp.evaluate, so deep trees
    # in either direction render without recursing
    rendered: List[str] = []
    work: List[Tuple[Expression, bool]] = [(expr, False)]
    while work:
        node, children_done = work.pop()
        if isinstance(node, Number):
            rendered.append(number(node))
        elif isinstance(node, Plus):
            if children_done:
                right = rendered.pop()
                left = rendered.pop()
                rendered.append(plus(node, left, right))
            else:
                work.append((node, True))
                work.append((node.right, False))
                work.append((node.left, False))
        else:
            raise TypeError(f"Unexpected expression node: {type(node).__name__}")
    return rendered.pop()


def _infix_plus(node: Plus, left: str, right: str) -> str:
    # sums lean left, so only a right-nested sum needs parentheses
    if isinstance(node.right, Plus):
        right = f"({right})"
    return f"{left} + {right}"


def format_expr(expr: Expression) -> str:
    """Infix form with only the parentheses needed to re-parse to the same tree."""
    return _render(expr, lambda node: str(node.n), _infix_plus)


def format_tree(expr: Expression) -> str:
    return _render(
        expr,
        lambda node: f"Number({node.n})",
        lambda node, left, right: f"Plus({left}, {right})",
    )


__all__ = ["format_expr", "format_tree"]
