"""Tests for the recursive-descent expression parser."""

from __future__ import annotations

import pytest

from mathchan.core.ast import BinaryOp, Call, Constant, Number, UnaryOp, Variable
from mathchan.core.errors import ExpressionSyntaxError
from mathchan.expr.lexer import tokenize
from mathchan.expr.parser import ExpressionParser, parse_expression


def _n(text: str) -> Number:
    return Number(text=text)


def _v(name: str) -> Variable:
    return Variable(name=name)


def test_multiplication_binds_tighter_than_addition() -> None:
    assert parse_expression("2 + 3 * 4") == BinaryOp(
        op="+",
        left=_n("2"),
        right=BinaryOp(op="*", left=_n("3"), right=_n("4")),
    )


def test_power_is_right_associative() -> None:
    assert parse_expression("2 ^ 3 ^ 2") == BinaryOp(
        op="^",
        left=_n("2"),
        right=BinaryOp(op="^", left=_n("3"), right=_n("2")),
    )
    assert parse_expression("2 ** 3 ** 2") == parse_expression("2 ^ 3 ^ 2")


def test_additive_and_multiplicative_fold_left() -> None:
    assert parse_expression("a - b - c") == BinaryOp(
        op="-",
        left=BinaryOp(op="-", left=_v("a"), right=_v("b")),
        right=_v("c"),
    )
    assert parse_expression("a / b * c") == BinaryOp(
        op="*",
        left=BinaryOp(op="/", left=_v("a"), right=_v("b")),
        right=_v("c"),
    )


def test_unary_sign_binds_tighter_than_power() -> None:
    assert parse_expression("-2 ^ 2") == BinaryOp(
        op="^",
        left=UnaryOp(sign="-", operand=_n("2")),
        right=_n("2"),
    )
    assert parse_expression("2 ^ -1") == BinaryOp(
        op="^",
        left=_n("2"),
        right=UnaryOp(sign="-", operand=_n("1")),
    )
    assert parse_expression("--a") == UnaryOp(sign="-", operand=UnaryOp(sign="-", operand=_v("a")))


def test_function_calls_and_constants() -> None:
    assert parse_expression("sin(a)") == Call(fn="sin", args=(_v("a"),))
    assert parse_expression("Math.hypot(a, b, c)") == Call(fn="hypot", args=(_v("a"), _v("b"), _v("c")))
    assert parse_expression("max()") == Call(fn="max", args=())
    assert parse_expression("PI * a") == BinaryOp(op="*", left=Constant(name="PI"), right=_v("a"))


def test_parenthesised_group_returns_inner_node() -> None:
    assert parse_expression("(a + b) * c") == BinaryOp(
        op="*",
        left=BinaryOp(op="+", left=_v("a"), right=_v("b")),
        right=_v("c"),
    )


def test_empty_input_parses_to_none() -> None:
    assert parse_expression("") is None
    assert ExpressionParser([]).parse() is None


@pytest.mark.parametrize(
    "expression",
    [
        "a b",
        "a)",
        "(a",
        "a +",
        "*",
        "Math.sin a",
        "sin(a",
        "max(a,)",
        "1.2.3",
    ],
)
def test_syntax_errors(expression: str) -> None:
    with pytest.raises(ExpressionSyntaxError):
        parse_expression(expression)


def test_trailing_tokens_detected_by_ensure_end() -> None:
    parser = ExpressionParser(tokenize("a b"))
    assert parser.parse() == _v("a")
    with pytest.raises(ExpressionSyntaxError) as excinfo:
        parser.ensure_end()
    assert excinfo.value.kind == "syntax"
