"""
Defines the parsed program representation for the BL language.

Classes:
    Condition:
        Enumeration of the comparator spellings accepted after IF and WHILE.

    Call, If, IfElse, While:
        The four statement cases. Together they form the `Statement` tagged union;
        each case carries a `kind` tag so consumers can dispatch with `match` or on
        `node.kind` without a class hierarchy.

    Program:
        A named program with its instruction context and main body.

    StatementDict, ProgramDict:
        TypedDict shapes produced by `to_dict()`, suitable for JSON output or debugging.

A `Block` is a tuple of statements. Every node is frozen once built, so a parsed
`Program` cannot be mutated after the parser hands it back.

Example:
    body = (If(Condition.LESS, (Call("go"),)),)
    program = Program("p", {}, body)
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, TypedDict, Union

from blparse.bl_constants import CONDITIONS


class Condition(Enum):
    """Comparator tested by IF and WHILE. Values are the source spellings."""

    LESS = "less"
    LESS_OR_EQUAL = "less-or-equal"
    EQUAL = "equal"
    NOT_EQUAL = "not-equal"
    MORE = "more"
    MORE_OR_EQUAL = "more-or-equal"


def is_condition(token: str) -> bool:
    """Reports whether `token` is a legal condition spelling."""
    return token in CONDITIONS


def parse_condition(token: str) -> Condition:
    """
    Converts a condition spelling into its `Condition` member.

    The caller must have checked `is_condition(token)` first; an unvalidated token
    is a programming error, not a grammar error.
    """
    assert is_condition(token), f"Violation of: {token!r} is a condition string"
    return Condition[token.replace("-", "_").upper()]


class StatementDict(TypedDict, total=False):
    """
    TypedDict representation of a statement used for serialization.

    Fields:
        kind (str): One of "call", "if", "if_else", "while".
        name (str): Called instruction name (call only).
        condition (str): Condition spelling (if, if_else, while).
        body (list[StatementDict]): Loop body or then-branch.
        else_body (list[StatementDict]): Else-branch (if_else only).
    """

    kind: str
    name: str
    condition: str
    body: list["StatementDict"]
    else_body: list["StatementDict"]


class ProgramDict(TypedDict):
    name: str
    context: dict[str, list[StatementDict]]
    body: list[StatementDict]


@dataclass(frozen=True)
class Call:
    """Invocation of a primitive or user-defined instruction by bare name."""

    name: str
    kind: ClassVar[str] = "call"

    def to_dict(self) -> StatementDict:
        return {"kind": self.kind, "name": self.name}


@dataclass(frozen=True)
class If:
    condition: Condition
    body: "Block" = ()
    kind: ClassVar[str] = "if"

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", tuple(self.body))

    def to_dict(self) -> StatementDict:
        return {
            "kind": self.kind,
            "condition": self.condition.value,
            "body": block_to_dict(self.body),
        }


@dataclass(frozen=True)
class IfElse:
    condition: Condition
    body: "Block" = ()
    else_body: "Block" = ()
    kind: ClassVar[str] = "if_else"

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", tuple(self.body))
        object.__setattr__(self, "else_body", tuple(self.else_body))

    def to_dict(self) -> StatementDict:
        return {
            "kind": self.kind,
            "condition": self.condition.value,
            "body": block_to_dict(self.body),
            "else_body": block_to_dict(self.else_body),
        }


@dataclass(frozen=True)
class While:
    condition: Condition
    body: "Block" = ()
    kind: ClassVar[str] = "while"

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", tuple(self.body))

    def to_dict(self) -> StatementDict:
        return {
            "kind": self.kind,
            "condition": self.condition.value,
            "body": block_to_dict(self.body),
        }


Statement = Union[Call, If, IfElse, While]
Block = tuple[Statement, ...]


def block_to_dict(block: Block) -> list[StatementDict]:
    return [stmt.to_dict() for stmt in block]


@dataclass(frozen=True, eq=False)
class Program:
    """
    A parsed BL program.

    Attributes:
        name (str): Program name, repeated after the closing END.
        context (Mapping[str, Block]): Read-only map from instruction name to body.
        body (Block): Main body between BEGIN and END.
    """

    name: str
    context: Mapping[str, Block] = field(default_factory=dict)
    body: Block = ()

    def __post_init__(self) -> None:
        # Copy so that later changes to the caller's dict cannot leak in
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))
        object.__setattr__(self, "body", tuple(self.body))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Program):
            return NotImplemented
        return (
            self.name == other.name
            and dict(self.context) == dict(other.context)
            and self.body == other.body
        )

    def to_dict(self) -> ProgramDict:
        return {
            "name": self.name,
            "context": {
                name: block_to_dict(body) for name, body in self.context.items()
            },
            "body": block_to_dict(self.body),
        }


__all__ = [
    "Block",
    "Call",
    "Condition",
    "If",
    "IfElse",
    "Program",
    "ProgramDict",
    "Statement",
    "StatementDict",
    "While",
    "block_to_dict",
    "is_condition",
    "parse_condition",
]
