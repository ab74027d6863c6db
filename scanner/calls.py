"""
Call-site scanning for the import primitive.

Finds every identifier naming the primitive (``require`` by default) and
classifies the tokens that follow it:

- ``require "mod.lua"``          resolved
- ``require("mod.lua")``         resolved
- ``require(("mod.lua"))``       resolved (redundant parentheses)
- ``require(name)``              malformed, skipped with a diagnostic
- ``require("a", "b")``          malformed, skipped with a diagnostic
- ``require()`` / ``require {}`` ambiguous, skipped with a diagnostic

The scan is purely syntactic: it does not know which branch of a
conditional a call sits in and does not deduplicate.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from graph.model import Diagnostic
from lexer import Token, TokenKind

logger = logging.getLogger(__name__)

IMPORT_PRIMITIVE = "require"

SKIP_REASON = "the call does not use exactly one string literal argument"

_LONG_BRACKET = re.compile(r"^\[(=*)\[(.*)\]\1\]$", re.DOTALL)


class OutcomeKind(Enum):
    RESOLVED = "resolved"
    AMBIGUOUS = "ambiguous"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class CallOutcome:
    """Result of classifying one import call site."""

    kind: OutcomeKind
    literal: Optional[str] = None
    description: Optional[str] = None


@dataclass
class ScanResult:
    """Literals extracted from one file, plus diagnostics for skipped calls."""

    literals: List[str] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)


class TruncatedCallError(Exception):
    """The token stream ended inside an import call's argument list."""

    def __init__(self, source_file: Path, token: Token):
        self.source_file = source_file
        self.token = token
        super().__init__(
            f"{source_file}: unterminated argument list for '{token.text}' "
            f"call at line {token.line}"
        )


def strip_quotes(text: str) -> str:
    """
    Strip the delimiters from a string literal token.

    Short strings lose one quote on each side. Long strings lose their
    brackets and a newline directly after the opening bracket. Escape
    sequences are kept as written.
    """
    match = _LONG_BRACKET.match(text)
    if match:
        body = match.group(2)
        if body.startswith("\r\n"):
            return body[2:]
        if body.startswith("\n"):
            return body[1:]
        return body
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    return text


def classify_call(
    tokens: Sequence[Token],
    index: int,
    source_file: Path,
) -> Tuple[CallOutcome, int]:
    """
    Classify the import call whose primitive identifier is at ``tokens[index]``.

    Args:
        tokens: Comment-free tokens of one file.
        index: Position of the primitive identifier.
        source_file: File being scanned, for error reporting.

    Returns:
        The call's outcome and the index at which scanning should resume.

    Raises:
        TruncatedCallError: If the tokens run out before the argument
            list closes.
    """
    start = index + 1
    if start >= len(tokens):
        return CallOutcome(OutcomeKind.AMBIGUOUS, description="end of file"), start

    following = tokens[start]

    if following.kind is TokenKind.STRING:
        return CallOutcome(OutcomeKind.RESOLVED, literal=strip_quotes(following.text)), start + 1

    if not following.is_symbol("("):
        return CallOutcome(OutcomeKind.AMBIGUOUS, description=f"{tokens[index].text} {following.text}"), start

    depth = 1
    literal: Optional[Token] = None
    offender: Optional[Token] = None
    position = start + 1

    while depth > 0:
        if position >= len(tokens):
            raise TruncatedCallError(source_file, tokens[index])
        token = tokens[position]
        position += 1

        if token.is_symbol("("):
            depth += 1
        elif token.is_symbol(")"):
            depth -= 1
        elif token.kind is TokenKind.STRING and literal is None and offender is None:
            literal = token
        elif offender is None:
            offender = token

    if offender is not None:
        return CallOutcome(OutcomeKind.MALFORMED, description=_describe(tokens[index], offender)), position
    if literal is None:
        return CallOutcome(OutcomeKind.AMBIGUOUS, description=f"{tokens[index].text}()"), position
    return CallOutcome(OutcomeKind.RESOLVED, literal=strip_quotes(literal.text)), position


def extract_import_literals(
    tokens: Sequence[Token],
    source_file: Path,
    primitive: str = IMPORT_PRIMITIVE,
) -> ScanResult:
    """
    Extract import literals from a file's comment-free tokens.

    Args:
        tokens: Tokens with comments already removed.
        source_file: The file the tokens came from.
        primitive: Name of the import function.

    Returns:
        ScanResult with literals in call-site order and one diagnostic per
        skipped call.
    """
    result = ScanResult()
    index = 0

    while index < len(tokens):
        token = tokens[index]
        if token.kind is not TokenKind.IDENTIFIER or token.text != primitive:
            index += 1
            continue

        outcome, index = classify_call(tokens, index, source_file)
        if outcome.kind is OutcomeKind.RESOLVED:
            result.literals.append(outcome.literal)
            continue

        logger.info("%s:%d: skipping %s call %s", source_file.name, token.line, outcome.kind.value, outcome.description)
        result.diagnostics.append(Diagnostic(source_file, outcome.description, SKIP_REASON))

    return result


def _describe(primitive: Token, offender: Token) -> str:
    """Describe a malformed call by the first token that broke it."""
    return f"{primitive.text}(... {offender.text} ...)"
