"""
Lua lexer built on a Lark terminal grammar.

Only the lexing half of Lark is used: the grammar in ``lua.lark`` declares
the Lua token classes and ``Lark.lex`` streams them in source order.
Comments are kept in the stream so callers decide whether to drop them.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional

from lark import Lark
from lark.exceptions import LarkError, UnexpectedCharacters, UnexpectedInput

from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "lua.lark"

LUA_KEYWORDS = frozenset({
    "and", "break", "do", "else", "elseif", "end",
    "false", "for", "function", "goto", "if", "in",
    "local", "nil", "not", "or", "repeat", "return",
    "then", "true", "until", "while",
})

_TERMINAL_KINDS = {
    "COMMENT": TokenKind.COMMENT,
    "LONG_STRING": TokenKind.STRING,
    "STRING": TokenKind.STRING,
    "NUMBER": TokenKind.NUMBER,
    "NAME": TokenKind.IDENTIFIER,
    "SYMBOL": TokenKind.SYMBOL,
}


class LexError(Exception):
    """Source text that cannot be split into Lua tokens."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            super().__init__(f"{message} at line {line}, column {column}")
        else:
            super().__init__(message)


class LuaLexer:
    """Tokenizer for Lua 5.1 - 5.4 source text."""

    def __init__(self):
        self._lark = Lark.open(
            str(GRAMMAR_PATH),
            start="start",
            parser="lalr",
            lexer="basic",
        )

    def tokenize(self, source: str) -> List[Token]:
        """
        Split source text into tokens.

        Args:
            source: Lua source text.

        Returns:
            Tokens in source order, comments included.

        Raises:
            LexError: If any part of the source cannot be lexed.
        """
        try:
            return list(self._iter_tokens(_skip_shebang(source)))
        except UnexpectedCharacters as e:
            raise LexError(f"unexpected character {e.char!r}", e.line, e.column) from e
        except UnexpectedInput as e:
            raise LexError(f"malformed source: {e}", getattr(e, "line", None), getattr(e, "column", None)) from e
        except LarkError as e:
            raise LexError(f"malformed source: {e}") from e

    def _iter_tokens(self, source: str) -> Iterator[Token]:
        for lark_token in self._lark.lex(source):
            if lark_token.type == "UNFINISHED_LONG":
                raise LexError("unfinished long string or comment", lark_token.line, lark_token.column)
            kind = _TERMINAL_KINDS[lark_token.type]
            text = str(lark_token)
            if kind is TokenKind.IDENTIFIER and text in LUA_KEYWORDS:
                kind = TokenKind.KEYWORD
            yield Token(kind, text, lark_token.line, lark_token.column)


def _skip_shebang(source: str) -> str:
    """Blank out a leading '#' line, keeping line numbers intact."""
    if not source.startswith("#"):
        return source
    newline = source.find("\n")
    if newline == -1:
        return ""
    return source[newline:]


_default_lexer: Optional[LuaLexer] = None


def tokenize(source: str) -> List[Token]:
    """Tokenize source text with a shared LuaLexer instance."""
    global _default_lexer
    if _default_lexer is None:
        logger.debug("Loading Lua grammar from %s", GRAMMAR_PATH)
        _default_lexer = LuaLexer()
    return _default_lexer.tokenize(source)
