from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .ast import Expression, Number, Plus
from .config import DEFAULT_CONFIG, EvalConfig
from .parser import parse_expression

logger = logging.getLogger(__name__)


def evaluate(expr: Expression, config: EvalConfig = DEFAULT_CONFIG) -> int:
    """
    Compute the integer value of `expr`.

    Number(n) is n and Plus(l, r) is l + r, with every Plus result passed
    through `config.add` (fail or wrap on overflow). The walk keeps its own
    work stack so a long left-leaning chain of additions does not recurse
    once per `+`.
    """
    values: List[int] = []
    work: List[Tuple[Expression, bool]] = [(expr, False)]
    while work:
        node, children_done = work.pop()
        if isinstance(node, Number):
            values.append(node.n)
        elif isinstance(node, Plus):
            if children_done:
                right = values.pop()
                left = values.pop()
                values.append(config.add(left, right))
            else:
                work.append((node, True))
                work.append((node.right, False))
                work.append((node.left, False))
        else:
            raise TypeError(f"Unexpected expression node: {type(node).__name__}")
    result = values.pop()
    if values:
        raise RuntimeError("evaluation left unused operands")
    return result


@dataclass(frozen=True)
class Evaluation:
    source: str
    expr: Expression
    value: int


def evaluate_source(source: str, config: EvalConfig = DEFAULT_CONFIG) -> Evaluation:
    expr = parse_expression(source, config)
    value = evaluate(expr, config)
    logger.debug("evaluated %r to %d", source, value)
    return Evaluation(source=source, expr=expr, value=value)


__all__ = ["evaluate", "evaluate_source", "Evaluation"]
