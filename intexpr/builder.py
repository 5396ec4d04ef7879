"""
Stack-driven Expression builder.

The builder reacts to completion events fired by a post-order walk over the
lark parse tree (children before parents, left to right). It keeps one stack
of Expression values with the following invariant:

The stack holds the Expression of every parse subtree that has been fully
walked but whose parent has not yet completed, ordered by recency so the most
recently completed subtree is on top.

Before the walk the stack is empty. When a node completes, the Expressions of
its children are on top of the stack with the last child on top; the builder
pops them and pushes one Expression for the whole subtree. After the root
completes, the only subtree satisfying the invariant is the whole input, so
the stack holds exactly one element.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from lark import Tree

from .ast import Expression, Plus
from .config import DEFAULT_CONFIG, EvalConfig
from .errors import PreconditionViolation
from .parser import make_number, primitive_number, rule_name

logger = logging.getLogger(__name__)


class ExpressionBuilder:
    def __init__(self, config: EvalConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self._stack: List[Expression] = []
        self._finished = False

    @property
    def depth(self) -> int:
        return len(self._stack)

    def exit_primitive(self, tree: Tree) -> None:
        self._require_open()
        number = primitive_number(tree)
        if number is not None:
            self._stack.append(make_number(number, self.config))
        # '(' sum ')': the inner sum already pushed its Expression

    def exit_sum(self, tree: Tree) -> None:
        self._require_open()
        addends = [child for child in tree.children if isinstance(child, Tree)]
        if not addends:
            raise PreconditionViolation("sum completed without any primitive")
        if len(self._stack) < len(addends):
            raise PreconditionViolation(
                f"sum of {len(addends)} primitives completed with only {len(self._stack)} values on the stack"
            )
        # last addend is on top; take all k off, then fold left so that
        # a+b+c becomes Plus(Plus(a, b), c)
        operands = self._stack[-len(addends):]
        del self._stack[-len(addends):]
        acc = operands[0]
        for operand in operands[1:]:
            acc = Plus(acc, operand, loc=acc.loc)
        self._stack.append(acc)

    def finish(self) -> None:
        self._require_open()
        if len(self._stack) != 1:
            raise PreconditionViolation(f"walk ended with {len(self._stack)} values on the stack, expected 1")
        self._finished = True

    def get_expression(self) -> Expression:
        """
        Return the Expression for the walked tree.

        Requires a completed walk (see `walk`); a builder that was never walked,
        or whose walk stopped early, raises PreconditionViolation instead of
        handing back a partial tree.
        """
        if not self._finished:
            raise PreconditionViolation("get_expression() called before the walk completed")
        return self._stack[0]

    def _require_open(self) -> None:
        if self._finished:
            raise PreconditionViolation("builder already completed a walk")


def walk(tree: Tree, builder: ExpressionBuilder) -> None:
    """
    Fire `exit_<rule>` on `builder` for every subtree in left-to-right post-order.

    lark's Visitor iterates subtrees bottom-up but not in this order, which the
    stack discipline depends on. The walk keeps its own stack so nesting depth
    is not bounded by the recursion limit.
    """
    work: List[Tuple[Tree, bool]] = [(tree, False)]
    while work:
        node, children_done = work.pop()
        if children_done:
            handler = getattr(builder, f"exit_{rule_name(node)}", None)
            if handler is not None:
                handler(node)
            continue
        work.append((node, True))
        for child in reversed(node.children):
            if isinstance(child, Tree):
                work.append((child, False))
    builder.finish()


def build_with_stack(tree: Tree, config: EvalConfig = DEFAULT_CONFIG) -> Expression:
    builder = ExpressionBuilder(config)
    walk(tree, builder)
    logger.debug("stack builder finished")
    return builder.get_expression()


__all__ = ["ExpressionBuilder", "walk", "build_with_stack"]
