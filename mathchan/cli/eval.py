"""Evaluate a math channel expression against variable bindings."""

from __future__ import annotations

import argparse

from mathchan.channels.format import format_measurement_value
from mathchan.cli._args import parse_assignments
from mathchan.core.allowlist import MATH_VARIABLES
from mathchan.core.errors import IdentifierRejected
from mathchan.expr.evaluate import evaluate_with_error
from mathchan.solve.sympy_bridge import simplify_expression
from mathchan.trace import SafeTraceLogger, TraceEventKind, new_event


def _parse_bindings(items: list[str]) -> dict[str, float]:
    bindings: dict[str, float] = {}
    for name, raw in parse_assignments(items, option="--var").items():
        try:
            bindings[name] = float(raw)
        except ValueError as exc:
            raise ValueError(f"--var {name} is not a number: {raw!r}") from exc
    return bindings


def main(argv: list[str] | None = None) -> int:
    """Run the expression evaluation CLI."""

    parser = argparse.ArgumentParser(description="Evaluate a math channel expression.")
    parser.add_argument("expression", help="Expression, e.g. 'sqrt(a^2 + b^2)'.")
    parser.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Bind a variable (repeatable).",
    )
    parser.add_argument("--precision", type=int, help="Fixed number of decimals in the output.")
    parser.add_argument(
        "--simplify",
        action="store_true",
        help="Also print the SymPy-simplified expression.",
    )
    parser.add_argument("--trace", help="Append JSONL trace events to this path.")
    args = parser.parse_args(argv)

    try:
        bindings = _parse_bindings(args.var)
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return 1

    for name in sorted(bindings):
        if name not in MATH_VARIABLES:
            print(f"WARNING: variable {name!r} is outside the a..h alphabet")

    tracer = SafeTraceLogger(args.trace)
    try:
        value, error = evaluate_with_error(args.expression, bindings)
        reason = str(error) if error is not None else None
        if isinstance(error, IdentifierRejected):
            kind = TraceEventKind.REJECT
        else:
            kind = TraceEventKind.EVALUATE
        tracer.append(
            new_event(
                kind,
                args.expression,
                data={"bindings": bindings, "value": value, "reason": reason},
            )
        )

        if args.simplify:
            simplified, warnings = simplify_expression(args.expression)
            for warning in warnings:
                print(f"WARNING: {warning}")
            if simplified is not None:
                print(f"SIMPLIFIED: {simplified}")

        if value is None:
            print(format_measurement_value(None))
            print(f"ERROR: {reason}")
            return 1
        print(f"OK: {format_measurement_value(value, args.precision)}")
        return 0
    finally:
        tracer.close()


if __name__ == "__main__":
    raise SystemExit(main())
