"""Tests for sandboxed expression evaluation."""

from __future__ import annotations

import math
from fractions import Fraction

import pytest

from mathchan import evaluate
from mathchan.core.ast import BinaryOp, Call, Number, Variable
from mathchan.core.errors import EvaluationError, ExpressionError, IdentifierRejected
from mathchan.expr.evaluate import evaluate_node, evaluate_with_error, try_evaluate


@pytest.mark.parametrize(
    ("expression", "bindings", "expected"),
    [
        ("2 + 3 * 4", {}, 14.0),
        ("(2 + 3) * 4", {}, 20.0),
        ("2 ^ 3 ^ 2", {}, 512.0),
        ("-2 ^ 2", {}, 4.0),
        ("a ** b", {"a": 2, "b": 3}, 8.0),
        ("a ^ b", {"a": 2, "b": 3}, 8.0),
        ("a - b - c", {"a": 10, "b": 3, "c": 2}, 5.0),
        ("sqrt(a^2 + b^2)", {"a": 3, "b": 4}, 5.0),
        ("(a * 9 / 5) + 32", {"a": 100}, 212.0),
        ("sin(0)", {}, 0.0),
        ("Math.sin(0)", {}, 0.0),
        ("round(2.5)", {}, 3.0),
        ("round(-2.5)", {}, -2.0),
        ("hypot()", {}, 0.0),
        ("max(a, b, 3)", {"a": 1, "b": 2}, 3.0),
        ("min(a, b)", {"a": 1.5, "b": -2}, -2.0),
        (".5 + a", {"a": 0.25}, 0.75),
    ],
)
def test_evaluates_expressions(expression: str, bindings: dict, expected: float) -> None:
    assert evaluate(expression, bindings) == pytest.approx(expected)


def test_constants_resolve_without_shadowing_variables() -> None:
    assert evaluate("PI", {}) == pytest.approx(math.pi)
    assert evaluate("Math.PI * 2", {}) == pytest.approx(2 * math.pi)
    assert evaluate("e * E", {"e": 2}) == pytest.approx(2 * math.e)


@pytest.mark.parametrize(
    ("expression", "bindings"),
    [
        ("", {}),
        ("   ", {}),
        ("a / b", {"a": 1, "b": 0}),
        ("0 / 0", {}),
        ("sqrt(-1)", {}),
        ("log(0)", {}),
        ("pow(2)", {}),
        ("max()", {}),
        ("sin(1, 2)", {}),
        ("1e5", {}),
        ("2 ^ 1024", {}),
        ("(-8) ^ (1 / 3)", {}),
        ("exp(1000)", {}),
        ("a +", {"a": 1}),
        ("a b", {"a": 1, "b": 2}),
    ],
)
def test_failures_yield_none(expression: str, bindings: dict) -> None:
    assert evaluate(expression, bindings) is None


@pytest.mark.parametrize(
    "expression",
    [
        "constructor",
        "a.constructor",
        "window.alert(1)",
        "__import__('os')",
        "x",
    ],
)
def test_disallowed_identifiers_yield_none(expression: str) -> None:
    assert evaluate(expression, {"a": 1}) is None


@pytest.mark.parametrize("value", [True, "1", None, [1]])
def test_non_numeric_bindings_yield_none(value: object) -> None:
    assert evaluate("a + 1", {"a": value}) is None


@pytest.mark.parametrize("value", [10**400, Fraction(10**400, 3)])
def test_out_of_range_bindings_yield_none(value: object) -> None:
    assert evaluate("a + 1", {"a": value}) is None
    assert evaluate("a", {"a": value}) is None


@pytest.mark.parametrize("expression", ["max(1, a)", "min(a, 2)", "a ^ 0", "a"])
@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_bindings_yield_none(expression: str, value: float) -> None:
    assert evaluate(expression, {"a": value}) is None


def test_unused_bindings_are_ignored() -> None:
    assert evaluate("a", {"a": 1, "b": "not a number"}) == 1.0


def test_deep_nesting_yields_none() -> None:
    depth = 500
    expression = "(" * depth + "1" + ")" * depth
    assert evaluate(expression, {}) is None


def test_evaluation_is_deterministic() -> None:
    bindings = {"a": 1.25, "b": 3}
    results = {evaluate("sin(a) * b + sqrt(b)", bindings) for _ in range(5)}
    assert len(results) == 1


def test_evaluate_with_error_reports_the_rejected_identifier() -> None:
    value, error = evaluate_with_error("a + foo", {"a": 1})

    assert value is None
    assert isinstance(error, IdentifierRejected)
    assert error.identifier == "foo"


def test_evaluate_with_error_reports_empty_and_runtime_failures() -> None:
    _, empty = evaluate_with_error("", {})
    assert isinstance(empty, ExpressionError)
    assert empty.kind == "expression"

    _, runtime = evaluate_with_error("1 / 0", {})
    assert isinstance(runtime, EvaluationError)
    assert runtime.kind == "runtime"


def test_try_evaluate_returns_reason_text() -> None:
    assert try_evaluate("a * 2", {"a": 4}) == (8.0, None)

    value, reason = try_evaluate("sqrt(-1)", {})
    assert value is None
    assert reason is not None
    assert "sqrt" in reason


def test_evaluate_node_on_a_built_tree() -> None:
    tree = BinaryOp(op="+", left=Call(fn="abs", args=(Variable(name="a"),)), right=Number(text="1"))

    assert evaluate_node(tree, {"a": -3}) == 4.0
    with pytest.raises(EvaluationError):
        evaluate_node(tree, {})
    with pytest.raises(EvaluationError):
        evaluate_node(Call(fn="eval", args=()), {})
