from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from .ast import Expression, Located, Number, Plus
from .config import DEFAULT_CONFIG, EvalConfig
from .errors import ExprSyntaxError, LiteralOverflowError

logger = logging.getLogger(__name__)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
    _GRAMMAR_SRC,
    parser="lalr",
    start="root",
    propagate_positions=True,
    maybe_placeholders=False,
)


def parse_tree(source: str) -> Tree:
    """Run the lark lexer and parser; the result has `root`, `sum` and `primitive` nodes."""
    try:
        return _PARSER.parse(source)
    except UnexpectedInput as err:
        raise _syntax_error(err) from err


def parse_expression(source: str, config: EvalConfig = DEFAULT_CONFIG) -> Expression:
    tree = parse_tree(source)
    if config.builder == "stack":
        from .builder import build_with_stack

        expr = build_with_stack(tree, config)
    else:
        expr = build_expression(tree, config)
    logger.debug("parsed %r with %s builder", source, config.builder)
    return expr


def build_expression(tree: Tree, config: EvalConfig = DEFAULT_CONFIG) -> Expression:
    kind = rule_name(tree)
    if kind == "root":
        return _build_sum(_subtrees(tree)[0], config)
    if kind == "sum":
        return _build_sum(tree, config)
    if kind == "primitive":
        number = primitive_number(tree)
        if number is not None:
            return make_number(number, config)
        return _build_sum(_grouped_sum(tree), config)
    raise ValueError(f"Unsupported parse node: {kind}")


class _SumFrame:
    """One `sum` being folded left; grouped primitives open a nested frame."""

    def __init__(self, tree: Tree) -> None:
        self.addends = _subtrees(tree)
        if not self.addends:
            raise ValueError("sum requires at least one primitive")
        self.index = 0
        self.acc: Optional[Expression] = None

    def next_addend(self) -> Optional[Tree]:
        if self.index >= len(self.addends):
            return None
        addend = self.addends[self.index]
        self.index += 1
        return addend

    def add(self, expr: Expression) -> None:
        if self.acc is None:
            self.acc = expr
        else:
            self.acc = Plus(self.acc, expr, loc=self.acc.loc)


def _build_sum(tree: Tree, config: EvalConfig) -> Expression:
    # Open sums live on an explicit stack so parenthesis depth is not
    # limited by the interpreter's recursion limit.
    frames: List[_SumFrame] = [_SumFrame(tree)]
    while True:
        frame = frames[-1]
        addend = frame.next_addend()
        if addend is None:
            frames.pop()
            assert frame.acc is not None
            if not frames:
                return frame.acc
            frames[-1].add(frame.acc)
            continue
        number = primitive_number(addend)
        if number is not None:
            frame.add(make_number(number, config))
        else:
            # '(' sum ')': the grouping adds no node of its own
            frames.append(_SumFrame(_grouped_sum(addend)))


def _grouped_sum(tree: Tree) -> Tree:
    inner = _subtrees(tree)
    if len(inner) != 1 or rule_name(inner[0]) != "sum":
        raise ValueError("parenthesized primitive must wrap exactly one sum")
    return inner[0]


def primitive_number(tree: Tree) -> Optional[Token]:
    """Return the NUMBER token when `tree` matched the literal alternative."""
    for child in tree.children:
        if isinstance(child, Token) and child.type == "NUMBER":
            return child
    return None


def make_number(token: Token, config: EvalConfig = DEFAULT_CONFIG) -> Number:
    loc = _loc_from_token(token)
    # compare digit counts first: int() refuses very long digit strings
    digits = token.value.lstrip("0") or "0"
    if len(digits) > len(str(config.max_int)) or not config.fits(int(digits)):
        raise LiteralOverflowError(token.value, config.int_bits, line=loc.line, column=loc.column)
    return Number(int(digits), loc=loc)


def _syntax_error(err: UnexpectedInput) -> ExprSyntaxError:
    line = _position(getattr(err, "line", None))
    column = _position(getattr(err, "column", None))
    if isinstance(err, UnexpectedCharacters):
        found = err.char
        message = f"unexpected character {found!r}"
    elif isinstance(err, UnexpectedToken):
        token = err.token
        if token.type == "$END":
            found = None
            message = "unexpected end of input"
        else:
            found = token.value
            message = f"unexpected {token.type} {token.value!r}"
        expected = sorted(err.expected or ())
        if expected:
            message += f", expected one of: {', '.join(expected)}"
    elif isinstance(err, UnexpectedEOF):
        found = None
        message = "unexpected end of input"
    else:
        found = None
        message = str(err).strip()
    return ExprSyntaxError(message, line=line, column=column, found=found)


def _position(value: object) -> Optional[int]:
    # lark reports -1 when the position is unknown (e.g. UnexpectedEOF)
    if isinstance(value, int) and value > 0:
        return value
    return None


def _subtrees(tree: Tree) -> List[Tree]:
    return [child for child in tree.children if isinstance(child, Tree)]


def _loc_from_token(token: Token) -> Located:
    return Located(line=token.line, column=token.column)


def rule_name(node: Tree | Token) -> str:
    if isinstance(node, Tree):
        data = node.data
        if isinstance(data, Token):
            return data.value
        return data
    if isinstance(node, Token):
        return node.type
    return str(node)


__all__ = ["parse_tree", "parse_expression", "build_expression", "make_number", "primitive_number", "rule_name"]
