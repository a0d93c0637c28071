"""
Lexical analyzer for the BL language.

This module turns raw BL source into the string token stream the parser consumes:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Tokenizer: Converts a CharacterStream into string tokens.
    TokenStream: FIFO queue of tokens ending with the end-of-input sentinel.

Features:
    - Skips whitespace and single-line comments (`#`)
    - A token is a maximal run of letters, digits and `-`, or any single other
      non-whitespace character (which the parser will then reject)
    - Always appends `END_OF_INPUT` as the final token

Example:
    >>> tokens = Tokenizer.tokens("PROGRAM p IS BEGIN END p")
    >>> tokens.front()
    'PROGRAM'

Exports:
    - CharacterStream
    - Tokenizer
    - TokenStream
    - is_identifier
    - is_keyword
"""

from collections import deque
from collections.abc import Iterable, Iterator

from blparse.bl_ast import is_condition
from blparse.bl_constants import (
    COMMENT_CHAR,
    END_OF_INPUT,
    IDENTIFIER_CHARS,
    IDENTIFIER_PATTERN,
    KEYWORDS,
)
from blparse.bl_errors import BLSyntaxError, ErrorKind


def is_keyword(token: str) -> bool:
    return token in KEYWORDS


def is_identifier(token: str) -> bool:
    """Reports whether `token` is a legal BL identifier.

    Identifiers start with a letter, continue with letters, digits or `-`, and
    are neither keywords nor condition spellings.
    """
    return (
        IDENTIFIER_PATTERN.fullmatch(token) is not None
        and not is_keyword(token)
        and not is_condition(token)
    )


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" if out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class TokenStream:
    """
    FIFO queue of BL tokens shared by every parse routine in one call chain.

    The stream is expected to end with `END_OF_INPUT`. Running out of tokens
    before that is reported as `ErrorKind.UNEXPECTED_END` instead of surfacing an
    IndexError from deep inside the parser.

    Tokens produced by `Tokenizer` carry their source position. `location` is the
    (line, column) of the token most recently returned by `front()` or
    `dequeue()`, or None when the stream was built from bare strings.

    Attributes:
        consumed (int): Number of tokens dequeued so far.
        location (tuple[int, int] | None): Position of the last inspected token.
    """

    def __init__(self, tokens: Iterable[str] = ()) -> None:
        self._tokens: deque[str] = deque(tokens)
        self._positions: deque[tuple[int, int] | None] = deque(
            None for _ in self._tokens
        )
        self.consumed = 0
        self.location: tuple[int, int] | None = None

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __repr__(self) -> str:
        preview = ", ".join(repr(t) for t in list(self._tokens)[:5])
        if len(self._tokens) > 5:
            preview += ", ..."
        return f"TokenStream([{preview}])"

    def front(self) -> str:
        """Returns the next token without consuming it."""
        if not self._tokens:
            raise BLSyntaxError(
                f"Token stream ended after {self.consumed} tokens without {END_OF_INPUT!r}",
                kind=ErrorKind.UNEXPECTED_END,
            )
        self.location = self._positions[0]
        return self._tokens[0]

    def dequeue(self) -> str:
        tok = self.front()
        self._tokens.popleft()
        self._positions.popleft()
        self.consumed += 1
        return tok

    def enqueue(self, token: str, position: tuple[int, int] | None = None) -> None:
        self._tokens.append(token)
        self._positions.append(position)


class Tokenizer:
    """Lexical analyzer for the BL language.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        token_start (tuple[int, int]): Line and column where the last token began.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream
        self.token_start: tuple[int, int] = (stream.line, stream.column)

    @classmethod
    def tokens(cls, source: str) -> TokenStream:
        """Tokenizes `source` and returns a stream terminated by `END_OF_INPUT`."""
        tokenizer = cls(CharacterStream(source))
        stream = TokenStream()
        while True:
            tok = tokenizer.next_token()
            stream.enqueue(tok, tokenizer.token_start)
            if tok == END_OF_INPUT:
                return stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek().isspace():
                self.advance()
            elif self.peek() == COMMENT_CHAR:
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def is_word_char(self, ch: str) -> bool:
        return ch != "" and (ch.isascii() and ch.isalnum() or ch in IDENTIFIER_CHARS)

    def next_token(self) -> str:
        """Consumes and returns the next token, or `END_OF_INPUT` once the source is exhausted."""
        self.skip_whitespace()
        self.token_start = (self.stream.line, self.stream.column)

        if self.stream.end_of_file():
            return END_OF_INPUT

        # 1. Word: keyword, identifier, condition or malformed word
        if self.is_word_char(self.peek()):
            word = ""
            while self.is_word_char(self.peek()):
                word += self.advance()
            return word

        # 2. Anything else stands alone
        return self.advance()


__all__ = ["CharacterStream", "TokenStream", "Tokenizer", "is_identifier", "is_keyword"]
