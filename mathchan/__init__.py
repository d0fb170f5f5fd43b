"""Math channel expression engine: safe evaluation and LaTeX preview."""

from mathchan.core.allowlist import (
    MATH_CONSTANT_NAMES,
    MATH_FUNCTION_NAMES,
    MATH_VARIABLES,
)
from mathchan.expr.evaluate import evaluate, evaluate_math_expression
from mathchan.latex.preview import ExpressionPreview, create_expression_preview, render

__version__ = "0.1.0"

__all__ = [
    "MATH_CONSTANT_NAMES",
    "MATH_FUNCTION_NAMES",
    "MATH_VARIABLES",
    "ExpressionPreview",
    "create_expression_preview",
    "evaluate",
    "evaluate_math_expression",
    "render",
]
