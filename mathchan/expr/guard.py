"""Static identifier check run before evaluating an expression."""

from __future__ import annotations

import re
from collections.abc import Collection

from mathchan.core.allowlist import is_allowed_identifier
from mathchan.core.errors import IdentifierRejected


_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def find_identifiers(expression: str) -> list[str]:
    """Return every maximal identifier substring in source order."""

    return _IDENTIFIER_PATTERN.findall(expression)


def check_identifiers(expression: str, bound_names: Collection[str]) -> IdentifierRejected | None:
    """Return the first rejected identifier, or None when all are permitted.

    ``expression`` is expected to be namespaced already, so ``Math`` is always
    accepted alongside the allow-listed function and constant names.
    """

    for identifier in find_identifiers(expression):
        if identifier in bound_names:
            continue
        if not is_allowed_identifier(identifier):
            return IdentifierRejected(identifier)
    return None
