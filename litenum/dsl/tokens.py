"""Token types for the litenum DSL lexer.

Defines all token kinds and the Token dataclass used by the lexer and parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    """All token types recognized by the litenum lexer."""

    # Literals
    STRING = auto()  # "quoted string"
    IDENTIFIER = auto()  # unquoted name
    BLOCK = auto()  # { raw text }, braces stripped

    # Keywords
    IMPORT = auto()  # import

    # Punctuation
    EQUALS = auto()  # =

    # Special
    DOC_COMMENT = auto()  # #: doc text
    NEWLINE = auto()
    EOF = auto()


# Map keyword strings to token kinds
KEYWORDS: dict[str, TokenKind] = {
    "import": TokenKind.IMPORT,
}


@dataclass(frozen=True)
class Token:
    """A single token produced by the lexer."""

    kind: TokenKind
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, L{self.line}:{self.column})"
