"""Token types produced by the lexer."""

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    STRING = "string"
    NUMBER = "number"
    SYMBOL = "symbol"
    COMMENT = "comment"


@dataclass(frozen=True)
class Token:
    """
    A single lexed unit of source text.

    ``text`` is the raw source slice; string tokens keep their quotes or
    long brackets.
    """

    kind: TokenKind
    text: str
    line: int = 0
    column: int = 0

    def is_symbol(self, text: str) -> bool:
        """Check if this token is the given punctuation symbol."""
        return self.kind is TokenKind.SYMBOL and self.text == text

    def __str__(self) -> str:
        return f"{self.kind.value} {self.text!r}"
