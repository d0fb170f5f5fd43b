"""Expression engine: lexer, namespace resolver, parser, guard and evaluator."""

from mathchan.expr.evaluate import (
    evaluate,
    evaluate_math_expression,
    evaluate_node,
    evaluate_with_error,
    try_evaluate,
)
from mathchan.expr.guard import check_identifiers, find_identifiers
from mathchan.expr.lexer import tokenize
from mathchan.expr.namespace import (
    attach_math_namespace,
    convert_double_star_to_caret,
    normalize_exponent_operator,
)
from mathchan.expr.parser import ExpressionParser, parse_expression, parse_tokens

__all__ = [
    "ExpressionParser",
    "attach_math_namespace",
    "check_identifiers",
    "convert_double_star_to_caret",
    "evaluate",
    "evaluate_math_expression",
    "evaluate_node",
    "evaluate_with_error",
    "find_identifiers",
    "normalize_exponent_operator",
    "parse_expression",
    "parse_tokens",
    "tokenize",
    "try_evaluate",
]
