"""
intexpr: parse integer addition expressions into immutable trees and evaluate them.

    >>> from intexpr import parse_expression
    >>> expr = parse_expression("54+(2+89)")
    >>> expr.value()
    145
"""

from __future__ import annotations

from .ast import Expression, Located, Number, Plus
from .builder import ExpressionBuilder, build_with_stack, walk
from .config import DEFAULT_CONFIG, EvalConfig
from .errors import (
    ArithmeticOverflowError,
    ExprSyntaxError,
    IntExprError,
    LiteralOverflowError,
    PreconditionViolation,
)
from .interp import Evaluation, evaluate, evaluate_source
from .parser import build_expression, parse_expression, parse_tree
from .printer import format_expr, format_tree

__all__ = [
    "Expression",
    "Located",
    "Number",
    "Plus",
    "ExpressionBuilder",
    "build_with_stack",
    "walk",
    "DEFAULT_CONFIG",
    "EvalConfig",
    "ArithmeticOverflowError",
    "ExprSyntaxError",
    "IntExprError",
    "LiteralOverflowError",
    "PreconditionViolation",
    "Evaluation",
    "evaluate",
    "evaluate_source",
    "build_expression",
    "parse_expression",
    "parse_tree",
    "format_expr",
    "format_tree",
]
