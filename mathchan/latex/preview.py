"""Live typeset preview for the math channel editor."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from mathchan.core.errors import ExpressionError
from mathchan.latex.fallback import to_text_with_colored_variables
from mathchan.latex.render import expression_to_latex


_EMPTY_FALLBACK = r"\texttt{ }"


@dataclass(frozen=True)
class ExpressionPreview:
    markup: str
    error: str | None
    mode: str
    warnings: tuple[str, ...] = ()


def _with_lhs(lhs: str | None, body: str) -> str:
    return f"{lhs} = {body}" if lhs else body


def create_expression_preview(
    expression: str,
    variable_colors: Mapping[str, str],
    *,
    lhs: str | None = "y",
) -> ExpressionPreview:
    """Render ``expression`` for preview; never raises.

    ``mode`` is ``"empty"``, ``"structured"`` or ``"fallback"`` (also used when
    both paths fail, in which case ``error`` is set).
    """

    trimmed = expression.strip()
    if not trimmed:
        return ExpressionPreview(markup="", error=None, mode="empty")

    warnings: list[str] = []
    try:
        latex = expression_to_latex(trimmed, variable_colors)
        if latex:
            return ExpressionPreview(markup=_with_lhs(lhs, latex), error=None, mode="structured")
    except ExpressionError as exc:
        warnings.append(str(exc))
    except RecursionError:
        warnings.append("expression nesting too deep")

    try:
        text = to_text_with_colored_variables(trimmed, variable_colors)
        markup = _with_lhs(lhs, text) if text else _EMPTY_FALLBACK
        return ExpressionPreview(markup=markup, error=None, mode="fallback", warnings=tuple(warnings))
    except Exception as exc:  # noqa: BLE001 - preview must never break the editor
        return ExpressionPreview(
            markup="",
            error=str(exc) or "Unable to render formula preview",
            mode="fallback",
            warnings=tuple(warnings),
        )


render = create_expression_preview
