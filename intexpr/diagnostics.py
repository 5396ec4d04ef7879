"""
Diagnostic records for rejected input.

The library raises IntExprError subclasses; front ends (the CLI) turn them
into Diagnostics so every rejection renders and serializes the same way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import IntExprError


@dataclass(frozen=True)
class Span:
    """Best-effort source position (1-based) plus the raw parser object."""

    line: Optional[int] = None
    column: Optional[int] = None
    end_line: Optional[int] = None
    end_column: Optional[int] = None
    raw: Any = field(default=None, compare=False, repr=False)

    @classmethod
    def from_loc(cls, loc: Any) -> "Span":
        if loc is None:
            return cls()
        if isinstance(loc, cls):
            return loc
        return cls(
            line=getattr(loc, "line", None),
            column=getattr(loc, "column", None),
            end_line=getattr(loc, "end_line", None),
            end_column=getattr(loc, "end_column", None),
            raw=loc,
        )


@dataclass
class Diagnostic:
    message: str
    code: Optional[str] = None
    severity: str = "error"
    span: Span = field(default_factory=Span)
    source: Optional[str] = None

    @classmethod
    def from_error(cls, err: IntExprError, source: Optional[str] = None) -> "Diagnostic":
        return cls(
            message=err.message,
            code=err.code,
            span=Span.from_loc(err),
            source=source,
        )

    def format_human(self) -> str:
        where = ""
        if self.span.line is not None and self.span.column is not None:
            where = f"{self.span.line}:{self.span.column}: "
        text = f"{self.severity}: {where}{self.message}"
        if self.code:
            text += f" [{self.code}]"
        caret = self._caret()
        if caret:
            text += "\n" + caret
        return text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity,
            "code": self.code,
            "message": self.message,
            "line": self.span.line,
            "column": self.span.column,
        }

    def _caret(self) -> str:
        # Point at the offending column of single-line sources.
        if self.source is None or self.span.column is None or self.span.line != 1:
            return ""
        if "\n" in self.source:
            return ""
        return f"  {self.source}\n  {' ' * (self.span.column - 1)}^"


__all__ = ["Diagnostic", "Span"]
