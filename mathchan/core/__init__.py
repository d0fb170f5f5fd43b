"""Core math channel expression tables, tokens and AST."""

from mathchan.core.allowlist import (
    ALLOWED_MATH_IDENTIFIERS,
    CONSTANT_VALUES,
    DEFAULT_FUNCTIONS,
    MATH_CONSTANT_LABEL,
    MATH_CONSTANT_NAMES,
    MATH_FUNCTION_LABEL,
    MATH_FUNCTION_NAMES,
    MATH_VARIABLES,
    FunctionRegistry,
    FunctionSpec,
)
from mathchan.core.errors import (
    EvaluationError,
    ExpressionError,
    ExpressionSyntaxError,
    IdentifierRejected,
)
from mathchan.core.tokens import Token, TokenKind

__all__ = [
    "ALLOWED_MATH_IDENTIFIERS",
    "CONSTANT_VALUES",
    "DEFAULT_FUNCTIONS",
    "MATH_CONSTANT_LABEL",
    "MATH_CONSTANT_NAMES",
    "MATH_FUNCTION_LABEL",
    "MATH_FUNCTION_NAMES",
    "MATH_VARIABLES",
    "FunctionRegistry",
    "FunctionSpec",
    "EvaluationError",
    "ExpressionError",
    "ExpressionSyntaxError",
    "IdentifierRejected",
    "Token",
    "TokenKind",
]
