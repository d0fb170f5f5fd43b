"""Best-effort rendering for expressions that do not parse yet."""

from __future__ import annotations

import re
from collections.abc import Mapping

from mathchan.latex.render import color_token, wrap_monospace


_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_CDOT = r"\,\cdot\,"


def format_expression_segment(segment: str) -> str:
    """Render a non-identifier segment, turning lone ``*`` into a centered dot."""

    out: list[str] = []
    buffer = ""
    i = 0
    while i < len(segment):
        ch = segment[i]
        if ch == "*":
            if segment[i + 1 : i + 2] == "*":
                buffer += "**"
                i += 2
                continue
            out.append(wrap_monospace(buffer))
            buffer = ""
            out.append(_CDOT)
            i += 1
            continue
        buffer += ch
        i += 1
    out.append(wrap_monospace(buffer))
    return "".join(out)


def to_text_with_colored_variables(expression: str, variable_colors: Mapping[str, str]) -> str:
    """Scan raw text, coloring identifiers found in ``variable_colors``."""

    parts: list[str] = []
    last = 0
    for match in _IDENTIFIER_PATTERN.finditer(expression):
        start, end = match.span()
        if start > last:
            parts.append(format_expression_segment(expression[last:start]))
        token = match.group(0)
        parts.append(color_token(token, variable_colors.get(token)))
        last = end
    if last < len(expression):
        parts.append(format_expression_segment(expression[last:]))
    return "".join(parts)
