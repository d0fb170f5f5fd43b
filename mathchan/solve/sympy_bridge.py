"""Best-effort expression AST -> SymPy conversion."""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING

from mathchan.core import ast
from mathchan.core.errors import ExpressionError
from mathchan.expr.parser import parse_expression

if TYPE_CHECKING:
    import sympy


def _constant_map(sympy) -> dict[str, object]:
    return {
        "E": sympy.E,
        "PI": sympy.pi,
        "LN2": sympy.log(2),
        "LN10": sympy.log(10),
        "LOG2E": 1 / sympy.log(2),
        "LOG10E": 1 / sympy.log(10),
        "SQRT2": sympy.sqrt(2),
        "SQRT1_2": 1 / sympy.sqrt(2),
    }


def _function_map(sympy) -> dict[str, object]:
    return {
        "abs": sympy.Abs,
        "acos": sympy.acos,
        "acosh": sympy.acosh,
        "asin": sympy.asin,
        "asinh": sympy.asinh,
        "atan": sympy.atan,
        "atan2": sympy.atan2,
        "atanh": sympy.atanh,
        "cbrt": sympy.cbrt,
        "ceil": sympy.ceiling,
        "cos": sympy.cos,
        "cosh": sympy.cosh,
        "exp": sympy.exp,
        "expm1": lambda x: sympy.exp(x) - 1,
        "floor": sympy.floor,
        "hypot": lambda *xs: sympy.sqrt(sympy.Add(*[x**2 for x in xs])),
        "log": sympy.log,
        "log1p": lambda x: sympy.log(1 + x),
        "log2": lambda x: sympy.log(x, 2),
        "log10": lambda x: sympy.log(x, 10),
        "max": sympy.Max,
        "min": sympy.Min,
        "pow": sympy.Pow,
        "sign": sympy.sign,
        "sin": sympy.sin,
        "sinh": sympy.sinh,
        "sqrt": sympy.sqrt,
        "tan": sympy.tan,
        "tanh": sympy.tanh,
    }


def expr_to_sympy(
    expr: ast.Expr,
    sym_env: dict[str, "sympy.Symbol"] | None = None,
) -> tuple[object | None, list[str], dict[str, "sympy.Symbol"]]:
    """Convert an expression AST to a SymPy object with non-fatal warnings."""

    try:
        import sympy
    except Exception:
        return None, ["sympy not installed"], sym_env or {}

    env: dict[str, sympy.Symbol] = {} if sym_env is None else sym_env
    constants = _constant_map(sympy)
    functions = _function_map(sympy)

    def _fail(msg: str) -> tuple[object | None, list[str]]:
        return None, [msg]

    def _rec(node: ast.Expr) -> tuple[object | None, list[str]]:
        if isinstance(node, ast.Variable):
            if node.name not in env:
                env[node.name] = sympy.Symbol(node.name, real=True)
            return env[node.name], []

        if isinstance(node, ast.Number):
            if "." in node.text:
                return sympy.Rational(Fraction(node.text)), []
            return sympy.Integer(int(node.text)), []

        if isinstance(node, ast.Constant):
            mapped = constants.get(node.name)
            if mapped is None:
                return _fail(f"unsupported Constant name={node.name}")
            return mapped, []

        if isinstance(node, ast.UnaryOp):
            arg, arg_w = _rec(node.operand)
            if arg is None:
                return None, arg_w
            return (-arg if node.sign == "-" else arg), arg_w

        if isinstance(node, ast.BinaryOp):
            left, left_w = _rec(node.left)
            right, right_w = _rec(node.right)
            child_warnings = left_w + right_w
            if left is None or right is None:
                return None, child_warnings
            if node.op == "+":
                return left + right, child_warnings
            if node.op == "-":
                return left - right, child_warnings
            if node.op == "*":
                return left * right, child_warnings
            if node.op == "/":
                return left / right, child_warnings
            return left**right, child_warnings

        if isinstance(node, ast.Call):
            mapped = functions.get(node.fn)
            if mapped is None:
                return _fail(f"unsupported Call fn={node.fn}")

            converted_args: list[object] = []
            child_warnings: list[str] = []
            for arg in node.args:
                converted, w = _rec(arg)
                child_warnings.extend(w)
                if converted is None:
                    return None, child_warnings
                converted_args.append(converted)
            try:
                return mapped(*converted_args), child_warnings
            except (TypeError, ValueError) as exc:
                return None, child_warnings + [f"Call fn={node.fn} failed: {exc}"]

        return _fail(f"unsupported node={node.__class__.__name__}")

    converted, warnings = _rec(expr)
    return converted, warnings, env


def simplify_expression(expression: str) -> tuple[str | None, list[str]]:
    """Parse ``expression`` and return its simplified SymPy form as text."""

    try:
        tree = parse_expression(expression)
        if tree is None:
            return None, ["empty expression"]
        converted, warnings, _env = expr_to_sympy(tree)
    except ExpressionError as exc:
        return None, [str(exc)]
    except RecursionError:
        return None, ["expression nesting too deep"]

    if converted is None:
        return None, warnings

    import sympy

    try:
        return str(sympy.simplify(converted)), warnings
    except Exception as exc:  # noqa: BLE001 - defensive simplification boundary
        return None, warnings + [f"simplify_error: {exc}"]
