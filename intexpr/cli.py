from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import BUILDER_CHOICES, INT_BITS_CHOICES, OVERFLOW_CHOICES, EvalConfig
from .diagnostics import Diagnostic
from .errors import IntExprError
from .interp import evaluate_source
from .printer import format_expr, format_tree

logger = logging.getLogger(__name__)

SAMPLE_INPUT = "54+(2+89)"


def _build_parser(defaults: EvalConfig) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="intexpr", description="Parse and evaluate integer addition expressions")
    ap.add_argument("exprs", nargs="*", metavar="EXPR", help=f"Expression to evaluate (default: {SAMPLE_INPUT})")
    ap.add_argument("--file", type=Path, default=None, help="Read one expression per non-blank line")
    ap.add_argument(
        "--int-bits",
        type=int,
        choices=INT_BITS_CHOICES,
        default=defaults.int_bits,
        help=f"Signed integer width for literals and sums (default: {defaults.int_bits})",
    )
    ap.add_argument(
        "--overflow",
        choices=OVERFLOW_CHOICES,
        default=defaults.overflow,
        help="On addition overflow: fail with an error or wrap (two's complement)",
    )
    ap.add_argument(
        "--builder",
        choices=BUILDER_CHOICES,
        default=defaults.builder,
        help="Tree builder: recursive (default) or the post-order stack builder",
    )
    ap.add_argument(
        "--format",
        choices=("infix", "tree"),
        default="infix",
        help="How to render the expression tree",
    )
    ap.add_argument("--json", action="store_true", help="Emit one JSON object per input")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr")
    return ap


def _collect_inputs(args: argparse.Namespace) -> List[str]:
    inputs = list(args.exprs)
    if args.file is not None:
        inputs.extend(line.strip() for line in args.file.read_text().splitlines() if line.strip())
    if not inputs:
        inputs.append(SAMPLE_INPUT)
    return inputs


def run(inputs: List[str], config: EvalConfig, fmt: str = "infix", as_json: bool = False, out=None, err=None) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    render = format_tree if fmt == "tree" else format_expr
    failures = 0
    for source in inputs:
        try:
            result = evaluate_source(source, config)
        except IntExprError as exc:
            failures += 1
            diag = Diagnostic.from_error(exc, source=source)
            if as_json:
                print(json.dumps({"input": source, "error": diag.to_dict()}, sort_keys=True), file=out)
            else:
                print(f"{source}: {diag.format_human()}", file=err)
            continue
        rendered = render(result.expr)
        if as_json:
            print(json.dumps({"input": source, "expr": rendered, "value": result.value}, sort_keys=True), file=out)
        else:
            print(f"{source}={rendered}={result.value}", file=out)
    return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> int:
    try:
        defaults = EvalConfig.from_env()
    except ValueError as exc:
        print(f"intexpr: {exc}", file=sys.stderr)
        return 2
    ap = _build_parser(defaults)
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    config = EvalConfig(int_bits=args.int_bits, overflow=args.overflow, builder=args.builder)
    try:
        inputs = _collect_inputs(args)
    except OSError as exc:
        ap.error(str(exc))
    logger.debug("evaluating %d input(s) with %s", len(inputs), config)
    return run(inputs, config, fmt=args.format, as_json=args.json)


if __name__ == "__main__":
    raise SystemExit(main())
