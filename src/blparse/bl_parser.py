"""
BL Language Parser

Parses BL token streams into `Program` trees.

This module implements a recursive-descent parser with one token of lookahead.
Statement parsing and block parsing are mutually recursive, and every routine
consumes from the same shared `TokenStream`, so a caller can parse a prefix of
the stream and inspect what is left.

Supported Constructs
--------------------
- Program:      `PROGRAM name IS <instruction>* BEGIN <block> END name`
- Instruction:  `INSTRUCTION name IS <block> END name`
- Statements:
    * Call:     `identifier`
    * If:       `IF condition THEN <block> END IF`
    * IfElse:   `IF condition THEN <block> ELSE <block> END IF`
    * While:    `WHILE condition DO <block> END WHILE`

Parser Behavior
---------------
- Fails on the first grammar violation by raising `BLSyntaxError`; nothing is
  recovered and no partial tree is returned.
- Never backtracks: a token is inspected with `front()` and consumed at most once.
- Does not resolve called names; primitive and user-defined instructions are
  only told apart when an instruction definition is parsed.

Entry Points
------------
- `parse_program(tokens)`: Parse a whole program, including the end-of-input check.
- `parse_instruction(tokens)`: Parse one instruction definition.
- `parse_block(tokens)`: Parse a statement sequence up to END/ELSE/end-of-input.
- `parse_statement(tokens)`: Parse a single statement.

Raises
------
BLSyntaxError
    Raised when a required token or shape is missing. Its `kind` distinguishes
    duplicate instructions, primitive redefinitions, premature end of input and
    excessive nesting from other grammar errors. Errors raised on tokens from
    `Tokenizer` carry the source line and column.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from blparse.bl_ast import (
    Block,
    Call,
    Condition,
    If,
    IfElse,
    Program,
    Statement,
    While,
    is_condition,
    parse_condition,
)
from blparse.bl_constants import (
    BLOCK_TERMINATORS,
    END_OF_INPUT,
    MAX_NESTING_DEPTH,
    PRIMITIVES,
)
from blparse.bl_errors import BLSyntaxError, ErrorKind
from blparse.bl_tokenizer import TokenStream, is_identifier

logger = logging.getLogger(__name__)


class Parser:
    """
    BL Parser Class

    Responsible for transforming a stream of string tokens into a `Program` or
    into individual statements and blocks.

    Attributes
    ----------
    tokens : TokenStream
        The shared input stream. Parsing consumes from it in place.
    depth : int
        Number of blocks currently open.
    max_depth : int
        Deepest block nesting accepted before `ErrorKind.NESTING_TOO_DEEP`.

    Methods
    -------
    parse_program() -> Program
        Parse a complete BL program.
    parse_instruction() -> tuple[str, Block]
        Parse an `INSTRUCTION` definition.
    parse_block() -> Block
        Parse statements until END, ELSE or end of input.
    parse_statement() -> Statement
        Dispatch on the next token to IF, WHILE or a call.
    parse_if() -> If | IfElse
    parse_while() -> While
    parse_call() -> Call

    Raises
    ------
    BLSyntaxError
        When an invalid construct or malformed syntax is encountered.
    """

    def __init__(
        self,
        tokens: TokenStream | Iterable[str],
        max_depth: int = MAX_NESTING_DEPTH,
    ) -> None:
        self.tokens: TokenStream = (
            tokens if isinstance(tokens, TokenStream) else TokenStream(tokens)
        )
        self.depth = 0
        self.max_depth = max_depth

    def front(self) -> str:
        return self.tokens.front()

    def advance(self) -> str:
        return self.tokens.dequeue()

    def require(
        self,
        condition: bool,
        message: str,
        kind: ErrorKind = ErrorKind.MALFORMED_GRAMMAR,
        token: str | None = None,
    ) -> None:
        """Raise `BLSyntaxError` unless `condition` holds. Every grammar check goes through here."""
        if not condition:
            lineno, offset = self.tokens.location or (None, None)
            raise BLSyntaxError(
                message, kind=kind, token=token, lineno=lineno, offset=offset
            )

    def expect(self, *expected: str, context: str = "") -> str:
        """Consume the next token and require it to be one of `expected`."""
        tok = self.advance()
        where = f" {context}" if context else ""
        wanted = " or ".join(expected)
        self.require(tok in expected, f"Expected {wanted}{where}, got {tok!r}", token=tok)
        return tok

    def expect_identifier(self, what: str) -> str:
        tok = self.advance()
        self.require(
            is_identifier(tok), f"Expected {what} name, got {tok!r}", token=tok
        )
        return tok

    def expect_condition(self, keyword: str) -> Condition:
        tok = self.advance()
        self.require(
            is_condition(tok),
            f"Condition {tok!r} after {keyword} is not a valid condition",
            token=tok,
        )
        return parse_condition(tok)

    def expect_label(self, name: str, what: str) -> None:
        """Consume a closing label and require it to repeat the opening `name`."""
        tok = self.advance()
        self.require(
            tok == name,
            f"{what} {name!r} must be closed with END {name}, got END {tok}",
            token=tok,
        )

    # Statements

    def parse_statement(self) -> Statement:
        """Parse a single statement, dispatching on the next unconsumed token."""
        tok = self.front()
        if tok == "WHILE":
            return self.parse_while()
        if tok == "IF":
            return self.parse_if()
        self.require(
            is_identifier(tok),
            f"Expected identifier, IF or WHILE, got {tok!r}",
            token=tok,
        )
        return self.parse_call()

    def parse_if(self) -> If | IfElse:
        """Parse an IF statement with optional ELSE branch."""
        assert self.front() == "IF"
        self.advance()

        condition = self.expect_condition("IF")
        self.expect("THEN", context="after IF condition")
        then_block = self.parse_block()

        terminal = self.expect("ELSE", "END", context="after IF block")
        if terminal == "ELSE":
            else_block = self.parse_block()
            node: If | IfElse = IfElse(condition, then_block, else_block)
            self.expect("END", context="after ELSE block")
        else:
            node = If(condition, then_block)
        self.expect("IF", context="after END")
        return node

    def parse_while(self) -> While:
        """Parse a WHILE loop with condition and body block."""
        assert self.front() == "WHILE"
        self.advance()

        condition = self.expect_condition("WHILE")
        self.expect("DO", context="after WHILE condition")
        body = self.parse_block()
        node = While(condition, body)

        self.expect("END", context="after WHILE block")
        self.expect("WHILE", context="after END")
        return node

    def parse_call(self) -> Call:
        assert is_identifier(self.front())
        return Call(self.advance())

    def parse_block(self) -> Block:
        """
        Parse statements until END, ELSE or end of input.

        The terminator is left in the stream for the caller. A stream that runs
        dry without the end-of-input sentinel raises `ErrorKind.UNEXPECTED_END`,
        and nesting past `max_depth` raises `ErrorKind.NESTING_TOO_DEEP`.
        """
        self.depth += 1
        self.require(
            self.depth <= self.max_depth,
            f"Blocks nested deeper than {self.max_depth} levels",
            kind=ErrorKind.NESTING_TOO_DEEP,
            token=self.front(),
        )
        stmts: list[Statement] = []
        while self.front() not in BLOCK_TERMINATORS:
            stmts.append(self.parse_statement())
        self.depth -= 1
        return tuple(stmts)

    # Definitions

    def parse_instruction(self) -> tuple[str, Block]:
        """Parse `INSTRUCTION name IS <block> END name` and return the name and body."""
        self.expect("INSTRUCTION")
        name = self.expect_identifier("instruction")
        self.require(
            name not in PRIMITIVES,
            f"Cannot redefine primitive instruction {name!r}",
            kind=ErrorKind.PRIMITIVE_REDEFINITION,
            token=name,
        )
        self.expect("IS", context=f"after INSTRUCTION {name}")
        body = self.parse_block()
        self.expect("END", context=f"after body of instruction {name}")
        self.expect_label(name, "Instruction")

        logger.debug("parsed instruction %s (%d statements)", name, len(body))
        return name, body

    def parse_program(self) -> Program:
        """Parse a full BL program and require that nothing follows it."""
        self.expect("PROGRAM")
        name = self.expect_identifier("program")
        self.expect("IS", context=f"after PROGRAM {name}")

        context: dict[str, Block] = {}
        while self.front() == "INSTRUCTION":
            ins_name, ins_body = self.parse_instruction()
            self.require(
                ins_name not in context,
                f"Instruction {ins_name!r} is already defined",
                kind=ErrorKind.DUPLICATE_INSTRUCTION,
                token=ins_name,
            )
            context[ins_name] = ins_body

        self.expect("BEGIN", context=f"before body of program {name}")
        body = self.parse_block()
        self.expect("END", context=f"after body of program {name}")
        self.expect_label(name, "Program")

        tok = self.front()
        self.require(
            tok == END_OF_INPUT,
            f"Unexpected {tok!r} after END {name}",
            token=tok,
        )

        logger.debug(
            "parsed program %s: %d instructions, %d statements",
            name,
            len(context),
            len(body),
        )
        return Program(name, context, body)


def parse_program(tokens: TokenStream | Iterable[str]) -> Program:
    return Parser(tokens).parse_program()


def parse_instruction(tokens: TokenStream | Iterable[str]) -> tuple[str, Block]:
    return Parser(tokens).parse_instruction()


def parse_block(tokens: TokenStream | Iterable[str]) -> Block:
    return Parser(tokens).parse_block()


def parse_statement(tokens: TokenStream | Iterable[str]) -> Statement:
    return Parser(tokens).parse_statement()


__all__ = [
    "Parser",
    "parse_block",
    "parse_instruction",
    "parse_program",
    "parse_statement",
]
