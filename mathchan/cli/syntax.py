"""Print the math channel expression syntax reference."""

from __future__ import annotations

import argparse

from mathchan.core.allowlist import MATH_CONSTANT_LABEL, MATH_FUNCTION_LABEL, MATH_VARIABLES


def syntax_help() -> str:
    """Return the plain-text syntax reference shown next to the editor."""

    return "\n".join(
        [
            "Math syntax",
            f"- Variables {MATH_VARIABLES[0]} to {MATH_VARIABLES[-1]} map to the selected device channels.",
            "- Operators: +, -, *, /, parentheses, and ^ for powers (the legacy ** form is still accepted).",
            "  A leading sign binds tighter than ^, so -2^2 is (-2)^2.",
            f"- Functions: call fn(...) or Math.fn(...). Available functions: {MATH_FUNCTION_LABEL}.",
            f"- Constants: NAME or Math.NAME. Available constants: {MATH_CONSTANT_LABEL}.",
            "- Average two traces: (a + b) / 2",
            "- Convert degC to degF: (a * 9 / 5) + 32",
            "- Compute vector magnitude: sqrt(a^2 + b^2)",
        ]
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show the math channel expression syntax.")
    parser.parse_args(argv)
    print(syntax_help())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
