"""
Grammar constants for the BL language.

Keywords are case-sensitive exact-match literals. Primitive instruction names
are ordinary identifiers that may be called but never defined. Condition
spellings are the only tokens accepted after IF and WHILE.
"""

import re

END_OF_INPUT = "### END OF INPUT ###"

KEYWORDS: frozenset[str] = frozenset(
    {
        "PROGRAM",
        "IS",
        "BEGIN",
        "END",
        "INSTRUCTION",
        "IF",
        "THEN",
        "ELSE",
        "WHILE",
        "DO",
    }
)

PRIMITIVES: frozenset[str] = frozenset(
    {"move", "turn-left", "turn-right", "infect", "skip"}
)

CONDITIONS: tuple[str, ...] = (
    "less",
    "less-or-equal",
    "equal",
    "not-equal",
    "more",
    "more-or-equal",
)

# Tokens that end a block without being consumed by it
BLOCK_TERMINATORS: frozenset[str] = frozenset({"END", "ELSE", END_OF_INPUT})

# Deepest block nesting accepted by the parser
MAX_NESTING_DEPTH = 200

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9-]*")

IDENTIFIER_CHARS = "-"  # allowed in addition to letters and digits
COMMENT_CHAR = "#"

__all__ = [
    "BLOCK_TERMINATORS",
    "COMMENT_CHAR",
    "CONDITIONS",
    "END_OF_INPUT",
    "IDENTIFIER_CHARS",
    "IDENTIFIER_PATTERN",
    "KEYWORDS",
    "MAX_NESTING_DEPTH",
    "PRIMITIVES",
]
