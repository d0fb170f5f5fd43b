"""Render the LaTeX preview of a math channel expression."""

from __future__ import annotations

import argparse
from pathlib import Path

from mathchan.cli._args import parse_assignments
from mathchan.latex.preview import create_expression_preview
from mathchan.trace import SafeTraceLogger, TraceEventKind, new_event


def main(argv: list[str] | None = None) -> int:
    """Run the preview CLI."""

    parser = argparse.ArgumentParser(description="Render a math channel expression as LaTeX.")
    parser.add_argument("expression", help="Expression, e.g. 'a - (b + c)'.")
    parser.add_argument(
        "--color",
        action="append",
        default=[],
        metavar="NAME=COLOR",
        help="Color for a variable (repeatable), e.g. a=#e74c3c.",
    )
    parser.add_argument("--lhs", default="y", help="Left-hand side label (default: y).")
    parser.add_argument("--no-lhs", action="store_true", help="Omit the 'y = ' prefix.")
    parser.add_argument("--out", help="Write the markup to this path instead of stdout.")
    parser.add_argument("--trace", help="Append JSONL trace events to this path.")
    args = parser.parse_args(argv)

    try:
        colors = parse_assignments(args.color, option="--color")
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return 1

    tracer = SafeTraceLogger(args.trace)
    try:
        preview = create_expression_preview(
            args.expression,
            colors,
            lhs=None if args.no_lhs else args.lhs,
        )
        kind = TraceEventKind.FALLBACK if preview.mode == "fallback" else TraceEventKind.RENDER
        tracer.append(
            new_event(
                kind,
                args.expression,
                data={
                    "markup": preview.markup,
                    "error": preview.error,
                    "warnings": list(preview.warnings),
                },
            )
        )

        if preview.error is not None:
            print(f"ERROR: {preview.error}")
            return 1
        for warning in preview.warnings:
            print(f"WARNING: {warning}")

        if args.out:
            out_path = Path(args.out)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(preview.markup + "\n", encoding="utf-8")
            print(f"OK: {preview.mode} -> {out_path}")
        else:
            print(preview.markup)
        return 0
    except OSError as exc:
        print(f"ERROR: {exc}")
        return 1
    finally:
        tracer.close()


if __name__ == "__main__":
    raise SystemExit(main())
