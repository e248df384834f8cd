"""Reserved words and token kinds of the MiniScript language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

KEYWORDS: tuple[str, ...] = (
    "break",
    "continue",
    "else",
    "end",
    "for",
    "function",
    "if",
    "in",
    "isa",
    "new",
    "null",
    "then",
    "repeat",
    "return",
    "while",
    "and",
    "or",
    "not",
    "true",
    "false",
)

_KEYWORD_SET = frozenset(KEYWORDS)


def is_keyword(text: str) -> bool:
    """Return True if *text* is a reserved word (case-sensitive)."""
    return text in _KEYWORD_SET


class TokenType(Enum):
    """Kinds of lexical token."""

    UNKNOWN = auto()
    KEYWORD = auto()
    NUMBER = auto()
    STRING = auto()
    IDENTIFIER = auto()
    OP_ASSIGN = auto()
    OP_PLUS = auto()
    OP_MINUS = auto()
    OP_TIMES = auto()
    OP_DIVIDE = auto()
    OP_MOD = auto()
    OP_POWER = auto()
    OP_EQUAL = auto()
    OP_NOT_EQUAL = auto()
    OP_GREATER = auto()
    OP_GREAT_EQUAL = auto()
    OP_LESSER = auto()
    OP_LESS_EQUAL = auto()
    OP_ASSIGN_PLUS = auto()
    OP_ASSIGN_MINUS = auto()
    OP_ASSIGN_TIMES = auto()
    OP_ASSIGN_DIVIDE = auto()
    OP_ASSIGN_MOD = auto()
    OP_ASSIGN_POWER = auto()
    L_PAREN = auto()
    R_PAREN = auto()
    L_SQUARE = auto()
    R_SQUARE = auto()
    L_CURLY = auto()
    R_CURLY = auto()
    ADDRESS_OF = auto()
    COMMA = auto()
    DOT = auto()
    COLON = auto()
    COMMENT = auto()
    EOL = auto()


@dataclass(frozen=True)
class Token:
    """A single lexical token."""

    type: TokenType = TokenType.UNKNOWN
    text: str = ""
    after_space: bool = False

    @property
    def is_keyword(self) -> bool:
        """True if this token is a keyword token."""
        return self.type is TokenType.KEYWORD