"""String-level rewrites applied before tokenizing an expression."""

from __future__ import annotations

import re

from mathchan.core.allowlist import MATH_CONSTANT_NAMES, MATH_FUNCTION_NAMES, MATH_NAMESPACE


_FUNCTION_PATTERN = re.compile(
    r"(?<![\w.])(" + "|".join(MATH_FUNCTION_NAMES) + r")\s*(?=\()",
    re.ASCII,
)
_CONSTANT_PATTERN = re.compile(
    r"(?<![\w.])(" + "|".join(MATH_CONSTANT_NAMES) + r")(?![\w.])",
    re.ASCII,
)


def attach_math_namespace(expression: str) -> str:
    """Prefix bare allow-listed function and constant names with ``Math.``."""

    with_functions = _FUNCTION_PATTERN.sub(rf"{MATH_NAMESPACE}.\1", expression)
    return _CONSTANT_PATTERN.sub(rf"{MATH_NAMESPACE}.\1", with_functions)


def normalize_exponent_operator(expression: str) -> str:
    """Rewrite ``^`` to the legacy ``**`` spelling."""

    return expression.replace("^", "**")


def convert_double_star_to_caret(expression: str) -> str:
    """Rewrite the legacy ``**`` spelling to ``^``."""

    return expression.replace("**", "^")
