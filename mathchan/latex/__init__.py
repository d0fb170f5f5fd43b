"""LaTeX preview rendering for math channel expressions."""

from mathchan.latex.fallback import to_text_with_colored_variables
from mathchan.latex.preview import ExpressionPreview, create_expression_preview, render
from mathchan.latex.render import expression_to_latex, render_node

__all__ = [
    "ExpressionPreview",
    "create_expression_preview",
    "expression_to_latex",
    "render",
    "render_node",
    "to_text_with_colored_variables",
]
