from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class Located:
    line: int
    column: int


@dataclass(frozen=True, repr=False)
class Number:
    n: int
    loc: Optional[Located] = field(default=None, compare=False, repr=False)

    def value(self) -> int:
        from .interp import evaluate

        return evaluate(self)

    def __str__(self) -> str:
        from .printer import format_expr

        return format_expr(self)

    def __repr__(self) -> str:
        from .printer import format_tree

        return format_tree(self)


@dataclass(frozen=True, repr=False)
class Plus:
    left: "Expression"
    right: "Expression"
    loc: Optional[Located] = field(default=None, compare=False, repr=False)

    def value(self) -> int:
        from .interp import evaluate

        return evaluate(self)

    def __str__(self) -> str:
        from .printer import format_expr

        return format_expr(self)

    def __repr__(self) -> str:
        from .printer import format_tree

        return format_tree(self)


# Closed union: every consumer matches exactly these two variants.
Expression = Union[Number, Plus]
EXPRESSION_TYPES = (Number, Plus)


__all__ = ["Located", "Number", "Plus", "Expression", "EXPRESSION_TYPES"]
