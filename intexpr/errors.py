from __future__ import annotations

from typing import Any, Dict, Optional


class IntExprError(Exception):
    """
    Base class for every error raised by intexpr.

    Each subclass carries a stable `code` so tooling (and `--json` output) can
    tell rejections apart without matching on message text.
    """

    code = "E-INTEXPR"

    def __init__(self, message: str, *, line: Optional[int] = None, column: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return self.format_human()

    def format_human(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.line is not None and self.column is not None:
            parts.append(f"at {self.line}:{self.column}")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "line": self.line,
            "column": self.column,
        }


class ExprSyntaxError(IntExprError, ValueError):
    """Input text does not match the expression grammar."""

    code = "E-SYNTAX"

    def __init__(
        self,
        message: str,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
        found: Optional[str] = None,
    ) -> None:
        super().__init__(message, line=line, column=column)
        self.found = found

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["found"] = self.found
        return data


class LiteralOverflowError(IntExprError, ValueError):
    """A NUMBER literal does not fit the configured integer range."""

    code = "E-LITERAL-OVERFLOW"

    def __init__(
        self,
        literal: str,
        bits: int,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(
            f"integer literal {literal} does not fit in {bits}-bit signed range",
            line=line,
            column=column,
        )
        self.literal = literal
        self.bits = bits

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["literal"] = self.literal
        data["bits"] = self.bits
        return data


class ArithmeticOverflowError(IntExprError, ArithmeticError):
    """Addition left the configured integer range under the `fail` policy."""

    code = "E-ARITH-OVERFLOW"

    def __init__(self, left: int, right: int, bits: int) -> None:
        super().__init__(f"{left} + {right} overflows {bits}-bit signed range")
        self.left = left
        self.right = right
        self.bits = bits

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["operands"] = [self.left, self.right]
        data["bits"] = self.bits
        return data


class PreconditionViolation(IntExprError, RuntimeError):
    """Builder used out of order or its stack invariant broke; a bug, not bad input."""

    code = "E-PRECONDITION"


__all__ = [
    "IntExprError",
    "ExprSyntaxError",
    "LiteralOverflowError",
    "ArithmeticOverflowError",
    "PreconditionViolation",
]
