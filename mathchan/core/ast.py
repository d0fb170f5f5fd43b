"""AST node definitions for math channel expressions."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Number(_Node):
    """Numeric literal, kept as its source text."""

    node: Literal["Number"] = "Number"
    text: str = Field(min_length=1)


class Variable(_Node):
    """Variable reference (or a degenerate lexer fallback token)."""

    node: Literal["Variable"] = "Variable"
    name: str = Field(min_length=1)


class Constant(_Node):
    """Allow-listed named constant such as PI."""

    node: Literal["Constant"] = "Constant"
    name: str = Field(min_length=1)


class UnaryOp(_Node):
    """Leading sign applied to an operand."""

    node: Literal["Unary"] = "Unary"
    sign: Literal["+", "-"]
    operand: "Expr"


class BinaryOp(_Node):
    """Binary arithmetic operation."""

    node: Literal["Binary"] = "Binary"
    op: Literal["+", "-", "*", "/", "^"]
    left: "Expr"
    right: "Expr"


class Call(_Node):
    """Allow-listed function call."""

    node: Literal["Call"] = "Call"
    fn: str = Field(min_length=1)
    args: tuple["Expr", ...] = ()


Expr = Annotated[
    Union[
        Number,
        Variable,
        Constant,
        UnaryOp,
        BinaryOp,
        Call,
    ],
    Field(discriminator="node"),
]

UnaryOp.model_rebuild()
BinaryOp.model_rebuild()
Call.model_rebuild()

_EXPR_ADAPTER: TypeAdapter = TypeAdapter(Expr)


def parse_expr(data: dict) -> Expr:
    """Parse and validate a dict into an Expr."""

    return _EXPR_ADAPTER.validate_python(data)


def expr_to_dict(expr: Expr) -> dict:
    """Serialize an Expr into a dict."""

    return expr.model_dump(mode="json", exclude_none=True)
