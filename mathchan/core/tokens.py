"""Token definitions produced by the expression lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """Token category."""

    NUMBER = "number"
    VARIABLE = "variable"
    OPERATOR = "operator"
    PAREN = "paren"
    COMMA = "comma"
    FUNCTION = "function"
    CONSTANT = "constant"


BINARY_OPERATORS: frozenset[str] = frozenset({"+", "-", "*", "/", "^"})


@dataclass(frozen=True, slots=True)
class Token:
    """Single lexical token; ``value`` is empty for commas."""

    kind: TokenKind
    value: str = ""

    def is_operator(self, *values: str) -> bool:
        return self.kind is TokenKind.OPERATOR and self.value in values

    def is_paren(self, value: str) -> bool:
        return self.kind is TokenKind.PAREN and self.value == value
