"""
Error types raised while reading BL source.

Every grammar violation surfaces as a `BLSyntaxError`. The `kind` attribute
tells callers which check failed without parsing the message text.
"""

from enum import Enum


class ErrorKind(Enum):
    """Classification of a grammar failure."""

    MALFORMED_GRAMMAR = "malformed-grammar"
    DUPLICATE_INSTRUCTION = "duplicate-instruction"
    PRIMITIVE_REDEFINITION = "primitive-redefinition"
    UNEXPECTED_END = "unexpected-end"
    NESTING_TOO_DEEP = "nesting-too-deep"


class BLSyntaxError(SyntaxError):
    """Raised when a token stream does not follow the BL grammar.

    Attributes:
        kind (ErrorKind): Which check failed.
        token (str | None): The offending token, when there is one.
        lineno (int | None): Source line of the offending token, when known.
        offset (int | None): Source column of the offending token, when known.

    Example:
        raise BLSyntaxError("Expected IS, got 'BEGIN'", token="BEGIN")
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.MALFORMED_GRAMMAR,
        token: str | None = None,
        lineno: int | None = None,
        offset: int | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.token = token
        self.lineno = lineno
        self.offset = offset

    def __str__(self) -> str:
        if self.lineno is None:
            return f"{self.kind.value}: {self.msg}"
        return f"{self.kind.value}: {self.msg} (line {self.lineno}, col {self.offset})"


__all__ = ["BLSyntaxError", "ErrorKind"]
