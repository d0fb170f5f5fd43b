"""Recursive-descent parser producing the expression AST.

Precedence, lowest to highest:

    expression := term (("+" | "-") term)*
    term       := power (("*" | "/") power)*
    power      := unary ("^" power)?
    unary      := ("+" | "-") unary | primary
    primary    := number | variable | constant
                | function "(" [expression ("," expression)*] ")"
                | "(" expression ")"

A leading sign therefore binds tighter than ``^``: ``-2^2`` is ``(-2)^2``.
"""

from __future__ import annotations

from mathchan.core.ast import BinaryOp, Call, Constant, Expr, Number, UnaryOp, Variable
from mathchan.core.errors import ExpressionSyntaxError
from mathchan.core.tokens import Token, TokenKind
from mathchan.expr.lexer import tokenize
from mathchan.expr.namespace import attach_math_namespace, convert_double_star_to_caret


class ExpressionParser:
    """Single-use parser over a token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.i = 0

    def parse(self) -> Expr | None:
        """Parse one expression; return None when there are no tokens."""

        if not self.tokens:
            return None
        return self._parse_expression()

    def ensure_end(self) -> None:
        """Raise when tokens remain after a complete expression."""

        if self.i < len(self.tokens):
            raise ExpressionSyntaxError(f"unexpected token at index {self.i}")

    def _peek(self) -> Token | None:
        return self.tokens[self.i] if self.i < len(self.tokens) else None

    def _pop(self) -> Token | None:
        tok = self._peek()
        if tok is not None:
            self.i += 1
        return tok

    def _parse_expression(self) -> Expr:
        node = self._parse_term()
        while True:
            tok = self._peek()
            if tok is None or not tok.is_operator("+", "-"):
                return node
            self._pop()
            node = BinaryOp(op=tok.value, left=node, right=self._parse_term())

    def _parse_term(self) -> Expr:
        node = self._parse_power()
        while True:
            tok = self._peek()
            if tok is None or not tok.is_operator("*", "/"):
                return node
            self._pop()
            node = BinaryOp(op=tok.value, left=node, right=self._parse_power())

    def _parse_power(self) -> Expr:
        node = self._parse_unary()
        tok = self._peek()
        if tok is not None and tok.is_operator("^"):
            self._pop()
            node = BinaryOp(op="^", left=node, right=self._parse_power())
        return node

    def _parse_unary(self) -> Expr:
        tok = self._peek()
        if tok is not None and tok.is_operator("+", "-"):
            self._pop()
            return UnaryOp(sign=tok.value, operand=self._parse_unary())
        return self._parse_primary()

    def _parse_primary(self) -> Expr:
        tok = self._pop()
        if tok is None:
            raise ExpressionSyntaxError("unexpected end of expression")

        if tok.kind is TokenKind.NUMBER:
            return Number(text=tok.value)
        if tok.kind is TokenKind.VARIABLE:
            return Variable(name=tok.value)
        if tok.kind is TokenKind.CONSTANT:
            return Constant(name=tok.value)
        if tok.kind is TokenKind.FUNCTION:
            return self._parse_call(tok.value)
        if tok.is_paren("("):
            inner = self._parse_expression()
            closing = self._pop()
            if closing is None or not closing.is_paren(")"):
                raise ExpressionSyntaxError("unexpected end of group")
            return inner

        raise ExpressionSyntaxError(f"unable to parse token {tok.kind.value} {tok.value!r}")

    def _parse_call(self, name: str) -> Call:
        opening = self._pop()
        if opening is None or not opening.is_paren("("):
            raise ExpressionSyntaxError(f"function {name} must be followed by ()")

        args: list[Expr] = []
        nxt = self._peek()
        if nxt is None or not nxt.is_paren(")"):
            while True:
                args.append(self._parse_expression())
                delimiter = self._peek()
                if delimiter is not None and delimiter.kind is TokenKind.COMMA:
                    self._pop()
                    continue
                break

        closing = self._pop()
        if closing is None or not closing.is_paren(")"):
            raise ExpressionSyntaxError(f"function {name} is missing closing parenthesis")
        return Call(fn=name, args=tuple(args))


def parse_tokens(tokens: list[Token]) -> Expr | None:
    """Parse a full token list, rejecting trailing tokens."""

    parser = ExpressionParser(tokens)
    node = parser.parse()
    if node is None:
        return None
    parser.ensure_end()
    return node


def parse_expression(expression: str) -> Expr | None:
    """Namespace, tokenize and parse a raw expression string."""

    namespaced = attach_math_namespace(expression)
    return parse_tokens(tokenize(convert_double_star_to_caret(namespaced)))
