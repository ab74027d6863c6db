"""Tests for the Lua lexer."""

import pytest

from lexer import LexError, LuaLexer, Token, TokenKind, tokenize


def kinds_and_texts(source):
    return [(token.kind, token.text) for token in tokenize(source)]


class TestTokenKinds:
    """Tests for classifying Lua tokens."""

    def test_require_call(self):
        """Test tokenizing a parenthesized require call."""
        assert kinds_and_texts('require("x.lua")') == [
            (TokenKind.IDENTIFIER, "require"),
            (TokenKind.SYMBOL, "("),
            (TokenKind.STRING, '"x.lua"'),
            (TokenKind.SYMBOL, ")"),
        ]

    def test_keywords(self):
        """Test that reserved words are keywords, not identifiers."""
        tokens = tokenize("local x = nil")

        assert tokens[0] == Token(TokenKind.KEYWORD, "local", 1, 1)
        assert tokens[1].kind is TokenKind.IDENTIFIER
        assert tokens[3].kind is TokenKind.KEYWORD

    def test_single_quoted_string_keeps_quotes(self):
        """Test that string tokens keep their delimiters."""
        assert kinds_and_texts("require 'a.lua'")[1] == (TokenKind.STRING, "'a.lua'")

    def test_escaped_quote_in_string(self):
        """Test that an escaped quote does not end the string."""
        tokens = tokenize(r'x = "say \"hi\""')

        assert tokens[-1].kind is TokenKind.STRING
        assert tokens[-1].text == r'"say \"hi\""'

    def test_long_strings(self):
        """Test long bracket strings with and without levels."""
        tokens = tokenize("a = [[one]] b = [==[two ]] still]==]")
        strings = [t.text for t in tokens if t.kind is TokenKind.STRING]

        assert strings == ["[[one]]", "[==[two ]] still]==]"]

    def test_numbers(self):
        """Test decimal, float, exponent and hex numbers."""
        tokens = tokenize("1 2.5 .5 3e10 0xFF")

        assert all(t.kind is TokenKind.NUMBER for t in tokens)
        assert [t.text for t in tokens] == ["1", "2.5", ".5", "3e10", "0xFF"]

    def test_multi_character_symbols(self):
        """Test that longer operators are single tokens."""
        texts = [t.text for t in tokenize("a .. b ... ~= == <= >= ::x::")]

        assert ".." in texts
        assert "..." in texts
        assert "~=" in texts
        assert "==" in texts
        assert "::" in texts

    def test_field_access(self):
        """Test that a dotted name splits into names and a dot."""
        assert kinds_and_texts("a.b") == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.SYMBOL, "."),
            (TokenKind.IDENTIFIER, "b"),
        ]

    def test_positions(self):
        """Test that tokens carry line and column."""
        tokens = tokenize("x = 1\n  require 'y.lua'")

        assert tokens[3].text == "require"
        assert tokens[3].line == 2
        assert tokens[3].column == 3


class TestComments:
    """Tests for comment tokens."""

    def test_line_comment(self):
        """Test that a line comment runs to the end of the line."""
        tokens = tokenize("-- require 'x.lua'\ny = 1")

        assert tokens[0] == Token(TokenKind.COMMENT, "-- require 'x.lua'", 1, 1)
        assert tokens[1].text == "y"

    def test_long_comment(self):
        """Test that a long comment spans lines."""
        tokens = tokenize("--[[ require 'a.lua'\nrequire 'b.lua' ]] z = 2")

        assert tokens[0].kind is TokenKind.COMMENT
        assert "b.lua" in tokens[0].text
        assert [t.text for t in tokens[1:]] == ["z", "=", "2"]

    def test_leveled_long_comment(self):
        """Test a long comment with '=' level markers."""
        tokens = tokenize("--[=[ a ]] b ]=] c")

        assert tokens[0].kind is TokenKind.COMMENT
        assert tokens[1].text == "c"

    def test_shebang_skipped(self):
        """Test that a leading '#' line is ignored."""
        tokens = tokenize("#!/usr/bin/env lua\nrequire 'a.lua'")

        assert tokens[0].text == "require"
        assert tokens[0].line == 2


class TestLexErrors:
    """Tests for unlexable input."""

    def test_unterminated_string(self):
        """Test that an unterminated short string is an error."""
        with pytest.raises(LexError):
            tokenize('require("x.lua)')

    def test_unterminated_long_string(self):
        """Test that an unterminated long string is an error."""
        with pytest.raises(LexError) as excinfo:
            tokenize("x = [[never closed")

        assert excinfo.value.line == 1

    def test_unterminated_long_comment(self):
        """Test that an unterminated long comment is an error."""
        with pytest.raises(LexError):
            tokenize("--[[ never closed\nrequire 'a.lua'")

    def test_stray_character(self):
        """Test that characters outside Lua's alphabet are errors."""
        with pytest.raises(LexError) as excinfo:
            tokenize("x = 1 $ 2")

        assert "$" in str(excinfo.value)

    def test_separate_lexer_instances(self):
        """Test that a dedicated lexer behaves like the shared one."""
        lexer = LuaLexer()

        assert lexer.tokenize("require 'a.lua'") == tokenize("require 'a.lua'")
