"""Precedence-aware LaTeX rendering of the expression AST."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Literal

from mathchan.core.allowlist import DEFAULT_FUNCTIONS
from mathchan.core.ast import BinaryOp, Call, Constant, Expr, Number, UnaryOp, Variable
from mathchan.expr.parser import parse_expression


Position = Literal["left", "right", "none"]

BINARY_PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2, "^": 3}
_UNARY_PRECEDENCE = 4
_ATOM_PRECEDENCE = 5
_ADDITIVE = {"+", "-"}

CONSTANT_LATEX_MAP = {
    "PI": r"\pi",
    "E": r"\mathrm{e}",
    "LN2": r"\ln 2",
    "LN10": r"\ln 10",
    "LOG2E": r"\log_{2}\mathrm{e}",
    "LOG10E": r"\log_{10}\mathrm{e}",
    "SQRT2": r"\sqrt{2}",
    "SQRT1_2": r"\frac{1}{\sqrt{2}}",
}

_LOG_LATEX = {"log": r"\ln", "log10": r"\log_{10}", "log2": r"\log_{2}"}
_BRACKETS = {"floor": (r"\lfloor", r"\rfloor"), "ceil": (r"\lceil", r"\rceil")}
_ARG_SEPARATOR = r",\,"
_SPECIAL_CHARS = re.compile(r"[\\{}$&#_^%]")


def _escape_char(match: re.Match) -> str:
    ch = match.group(0)
    if ch == "\\":
        return r"\textbackslash{}"
    return "\\" + ch


def escape_identifier(value: str) -> str:
    """Escape LaTeX special characters inside ``\\texttt``."""

    return _SPECIAL_CHARS.sub(_escape_char, value)


def escape_text(value: str) -> str:
    """Escape free text for ``\\texttt``, folding newlines into spaces."""

    return escape_identifier(value).replace("\n", " ")


def wrap_monospace(value: str) -> str:
    return rf"\texttt{{{escape_text(value)}}}" if value else ""


def wrap_with_parens(content: str) -> str:
    return rf"\left({content}\right)"


def color_token(token: str, color: str | None) -> str:
    """Render an identifier as monospace, colored when ``color`` is set."""

    base = rf"\texttt{{{escape_identifier(token)}}}"
    if not color:
        return base
    return rf"\textcolor{{{color}}}{{{base}}}"


def format_constant(name: str) -> str:
    mapped = CONSTANT_LATEX_MAP.get(name)
    if mapped:
        return mapped
    return rf"\mathrm{{{escape_identifier(name)}}}"


def _precedence(node: Expr) -> int:
    if isinstance(node, BinaryOp):
        return BINARY_PRECEDENCE[node.op]
    if isinstance(node, UnaryOp):
        return _UNARY_PRECEDENCE
    return _ATOM_PRECEDENCE


def _should_wrap(child: Expr, parent_precedence: int, parent_op: str | None, position: Position) -> bool:
    if parent_op is None or parent_op == "/":
        return False
    if parent_op == "^" and position in {"left", "right"}:
        return isinstance(child, (BinaryOp, UnaryOp))
    if _precedence(child) < parent_precedence:
        return True
    is_additive = isinstance(child, BinaryOp) and child.op in _ADDITIVE
    if parent_op == "-" and position == "right" and is_additive:
        return True
    if parent_op == "*" and is_additive:
        return True
    return False


def _render_call(node: Call, colors: Mapping[str, str]) -> str:
    name = node.fn
    args = node.args

    def _bare(index: int) -> str:
        return render_node(args[index], colors) if len(args) > index else ""

    if name == "sqrt":
        return rf"\sqrt{{{_bare(0)}}}"
    if name == "cbrt":
        return rf"\sqrt[3]{{{_bare(0)}}}"
    if name == "abs":
        return rf"\left|{_bare(0)}\right|"
    if name == "pow" and len(args) == 2:
        base = render_node(args[0], colors, BINARY_PRECEDENCE["^"], "^", "left")
        exponent = render_node(args[1], colors, BINARY_PRECEDENCE["^"], "^", "right")
        return f"{base}^{{{exponent}}}"
    if name in _LOG_LATEX:
        return _LOG_LATEX[name] + wrap_with_parens(_bare(0))

    rendered = [render_node(arg, colors) for arg in args]
    if name in _BRACKETS:
        left, right = _BRACKETS[name]
        return f"{left}{rendered[0] if rendered else ''}{right}"

    spec = DEFAULT_FUNCTIONS.lookup(name)
    head = spec.latex if spec is not None else rf"\operatorname{{{escape_identifier(name)}}}"
    return head + wrap_with_parens(_ARG_SEPARATOR.join(rendered))


def render_node(
    node: Expr,
    colors: Mapping[str, str],
    parent_precedence: int = 0,
    parent_op: str | None = None,
    position: Position = "none",
) -> str:
    """Render an AST node, parenthesising it only when its parent demands it."""

    if isinstance(node, Number):
        latex = wrap_monospace(node.text)
    elif isinstance(node, Variable):
        latex = color_token(node.name, colors.get(node.name))
    elif isinstance(node, Constant):
        latex = format_constant(node.name)
    elif isinstance(node, UnaryOp):
        inner = render_node(node.operand, colors, _UNARY_PRECEDENCE, node.sign, "right")
        latex = f"{node.sign}{inner}"
    elif isinstance(node, BinaryOp):
        if node.op == "/":
            latex = rf"\frac{{{render_node(node.left, colors)}}}{{{render_node(node.right, colors)}}}"
        elif node.op == "^":
            base = render_node(node.left, colors, BINARY_PRECEDENCE["^"], "^", "left")
            exponent = render_node(node.right, colors, BINARY_PRECEDENCE["^"], "^", "right")
            latex = f"{base}^{{{exponent}}}"
        else:
            prec = BINARY_PRECEDENCE[node.op]
            left = render_node(node.left, colors, prec, node.op, "left")
            right = render_node(node.right, colors, prec, node.op, "right")
            symbol = r"\cdot" if node.op == "*" else node.op
            latex = f"{left} {symbol} {right}"
    elif isinstance(node, Call):
        latex = _render_call(node, colors)
    else:
        latex = ""

    if _should_wrap(node, parent_precedence, parent_op, position):
        latex = wrap_with_parens(latex)
    return latex


def expression_to_latex(expression: str, variable_colors: Mapping[str, str]) -> str | None:
    """Parse and render an expression; None when it has no tokens.

    Raises ExpressionSyntaxError for malformed input.
    """

    tree = parse_expression(expression)
    if tree is None:
        return None
    return render_node(tree, variable_colors)
