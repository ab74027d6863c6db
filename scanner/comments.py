"""Removal of non-semantic tokens before call-site scanning."""

from typing import Iterable, List

from lexer import Token, TokenKind


def strip_comments(tokens: Iterable[Token]) -> List[Token]:
    """Return the tokens without comments, preserving order."""
    return [token for token in tokens if token.kind is not TokenKind.COMMENT]
