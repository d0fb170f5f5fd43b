"""Sandboxed numeric evaluation of math channel expressions.

Expressions are never handed to ``eval``; the parsed AST is walked directly
with the caller's variable bindings and the allow-listed function and
constant tables as the only reachable names.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Real

from mathchan.core.allowlist import CONSTANT_VALUES, DEFAULT_FUNCTIONS, FunctionRegistry
from mathchan.core.ast import BinaryOp, Call, Constant, Expr, Number, UnaryOp, Variable
from mathchan.core.errors import EvaluationError, ExpressionError
from mathchan.expr.guard import check_identifiers
from mathchan.expr.lexer import tokenize
from mathchan.expr.namespace import attach_math_namespace, convert_double_star_to_caret
from mathchan.expr.parser import parse_tokens


_NUMERIC_ERRORS = (ArithmeticError, ValueError, TypeError)


def _coerce_binding(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise EvaluationError(f"variable {name} is bound to a non-numeric value")
    try:
        number = float(value)
    except OverflowError as exc:
        raise EvaluationError(f"variable {name} is out of range") from exc
    if not math.isfinite(number):
        raise EvaluationError(f"variable {name} is bound to {number}")
    return number


def _binary(op: str, left: float, right: float) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if op == "/":
        if right == 0:
            raise EvaluationError("division by zero")
        return left / right
    if op == "^":
        try:
            return math.pow(left, right)
        except _NUMERIC_ERRORS as exc:
            raise EvaluationError(f"power {left}^{right} failed: {exc}") from exc
    raise EvaluationError(f"unsupported operator {op!r}")


def evaluate_node(
    expr: Expr,
    bindings: Mapping[str, object],
    *,
    functions: FunctionRegistry = DEFAULT_FUNCTIONS,
) -> float:
    """Evaluate a parsed expression tree; raise EvaluationError on failure."""

    def _rec(node: Expr) -> float:
        if isinstance(node, Number):
            try:
                return float(node.text)
            except ValueError as exc:
                raise EvaluationError(f"malformed number {node.text!r}") from exc

        if isinstance(node, Variable):
            if node.name not in bindings:
                raise EvaluationError(f"unbound variable {node.name!r}")
            return _coerce_binding(node.name, bindings[node.name])

        if isinstance(node, Constant):
            value = CONSTANT_VALUES.get(node.name)
            if value is None:
                raise EvaluationError(f"unknown constant {node.name!r}")
            return value

        if isinstance(node, UnaryOp):
            operand = _rec(node.operand)
            return -operand if node.sign == "-" else operand

        if isinstance(node, BinaryOp):
            return _binary(node.op, _rec(node.left), _rec(node.right))

        if isinstance(node, Call):
            spec = functions.lookup(node.fn)
            if spec is None:
                raise EvaluationError(f"unknown function {node.fn!r}")
            if not spec.accepts(len(node.args)):
                raise EvaluationError(
                    f"function {node.fn} does not accept {len(node.args)} argument(s)"
                )
            args = [_rec(arg) for arg in node.args]
            try:
                return float(spec.impl(*args))
            except _NUMERIC_ERRORS as exc:
                raise EvaluationError(f"{node.fn} failed: {exc}") from exc

        raise EvaluationError(f"unsupported node={node.__class__.__name__}")

    result = _rec(expr)
    if not math.isfinite(result):
        raise EvaluationError(f"result {result} is not finite")
    return result


def evaluate_with_error(
    expression: str,
    bindings: Mapping[str, object],
) -> tuple[float | None, ExpressionError | None]:
    """Evaluate an expression string; return (value, None) or (None, error)."""

    trimmed = expression.strip()
    if not trimmed:
        return None, ExpressionError("empty expression")

    namespaced = attach_math_namespace(trimmed)
    rejected = check_identifiers(namespaced, bindings.keys())
    if rejected is not None:
        return None, rejected

    try:
        tree = parse_tokens(tokenize(convert_double_star_to_caret(namespaced)))
        if tree is None:
            return None, ExpressionError("empty expression")
        return evaluate_node(tree, bindings), None
    except ExpressionError as exc:
        return None, exc
    except RecursionError:
        return None, EvaluationError("expression nesting too deep")


def try_evaluate(expression: str, bindings: Mapping[str, object]) -> tuple[float | None, str | None]:
    """Evaluate an expression string; return (value, None) or (None, reason)."""

    value, error = evaluate_with_error(expression, bindings)
    return value, (str(error) if error is not None else None)


def evaluate_math_expression(expression: str, bindings: Mapping[str, object]) -> float | None:
    """Evaluate ``expression`` against ``bindings``; every failure yields None."""

    value, _reason = try_evaluate(expression, bindings)
    return value


evaluate = evaluate_math_expression
