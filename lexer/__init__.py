"""Lexer module for turning Lua source text into typed tokens."""

from .tokens import Token, TokenKind
from .lua import LexError, LuaLexer, tokenize

__all__ = [
    "Token",
    "TokenKind",
    "LexError",
    "LuaLexer",
    "tokenize",
]
