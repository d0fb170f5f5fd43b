"""Error taxonomy for expression parsing and evaluation."""

from __future__ import annotations


class ExpressionError(Exception):
    """Base expression error with a machine-readable kind."""

    kind = "expression"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.__str__())

    def __str__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind!r}): {self.message}"


class ExpressionSyntaxError(ExpressionError):
    """Malformed token sequence."""

    kind = "syntax"


class IdentifierRejected(ExpressionError):
    """Identifier outside the bound variables and the allow-lists."""

    kind = "identifier"

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"identifier {identifier!r} is not allowed")


class EvaluationError(ExpressionError):
    """Failure while walking an expression tree."""

    kind = "runtime"
