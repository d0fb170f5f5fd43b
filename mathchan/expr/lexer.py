"""Total tokenizer for math channel expressions.

The lexer never raises: characters it does not understand are folded into
one-character variable tokens so that the parser is the single place where
syntax errors are reported.
"""

from __future__ import annotations

from mathchan.core.allowlist import MATH_CONSTANT_NAMES, MATH_FUNCTION_NAMES, MATH_NAMESPACE
from mathchan.core.tokens import Token, TokenKind


_WHITESPACE = {" ", "\t", "\n", "\r"}
_SINGLE_OPERATORS = {"+", "-", "*", "/", "^"}
_FUNCTIONS = frozenset(MATH_FUNCTION_NAMES)
_CONSTANTS = frozenset(MATH_CONSTANT_NAMES)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_identifier_start(ch: str) -> bool:
    return ch == "_" or "a" <= ch <= "z" or "A" <= ch <= "Z"


def _is_identifier_part(ch: str) -> bool:
    return _is_identifier_start(ch) or _is_digit(ch)


def _skip_spaces(source: str, i: int) -> int:
    while i < len(source) and source[i].isspace():
        i += 1
    return i


def _scan_identifier(source: str, i: int) -> int:
    j = i + 1
    while j < len(source) and _is_identifier_part(source[j]):
        j += 1
    return j


def _scan_number(source: str, i: int) -> int:
    n = len(source)
    j = i
    seen_dot = False
    while j < n:
        ch = source[j]
        if _is_digit(ch):
            j += 1
            continue
        if ch == "." and not seen_dot:
            seen_dot = True
            j += 1
            continue
        break
    return j


def _scan_namespaced(source: str, i: int) -> tuple[Token, int] | None:
    """Consume ``.member`` after a ``Math`` identifier ending at ``i``."""

    j = _skip_spaces(source, i)
    if j >= len(source) or source[j] != ".":
        return None
    j = _skip_spaces(source, j + 1)
    if j >= len(source) or not _is_identifier_start(source[j]):
        return None
    end = _scan_identifier(source, j)
    member = source[j:end]
    if member in _FUNCTIONS:
        return Token(TokenKind.FUNCTION, member), end
    if member in _CONSTANTS:
        return Token(TokenKind.CONSTANT, member), end
    return Token(TokenKind.VARIABLE, f"{MATH_NAMESPACE}.{member}"), end


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression into a flat token list."""

    out: list[Token] = []
    i = 0
    n = len(source)
    while i < n:
        ch = source[i]
        if ch in _WHITESPACE:
            i += 1
            continue
        if ch == "*" and source[i + 1 : i + 2] == "*":
            out.append(Token(TokenKind.OPERATOR, "^"))
            i += 2
            continue
        if ch in _SINGLE_OPERATORS:
            out.append(Token(TokenKind.OPERATOR, ch))
            i += 1
            continue
        if ch in "()":
            out.append(Token(TokenKind.PAREN, ch))
            i += 1
            continue
        if ch == ",":
            out.append(Token(TokenKind.COMMA))
            i += 1
            continue
        if _is_digit(ch) or (ch == "." and i + 1 < n and _is_digit(source[i + 1])):
            j = _scan_number(source, i)
            out.append(Token(TokenKind.NUMBER, source[i:j]))
            i = j
            continue
        if _is_identifier_start(ch):
            j = _scan_identifier(source, i)
            word = source[i:j]
            i = j
            if word == MATH_NAMESPACE:
                namespaced = _scan_namespaced(source, i)
                if namespaced is not None:
                    token, i = namespaced
                    out.append(token)
                    continue
            out.append(Token(TokenKind.VARIABLE, word))
            continue
        # Anything else becomes a one-character variable token.
        out.append(Token(TokenKind.VARIABLE, ch))
        i += 1
    return out
