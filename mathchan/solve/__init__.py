"""SymPy bridge for symbolic views of math channel expressions."""

from mathchan.solve.sympy_bridge import expr_to_sympy, simplify_expression

__all__ = ["expr_to_sympy", "simplify_expression"]
