"""Closure builder that orchestrates scanning and dependency graph construction."""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from graph.model import DependencyGraph
from lexer import LexError, LuaLexer, Token
from lexer import tokenize as default_tokenize
from .calls import IMPORT_PRIMITIVE, TruncatedCallError, extract_import_literals
from .comments import strip_comments
from .resolver import (
    SOURCE_EXTENSION,
    candidate_path,
    canonical_path,
    has_extension,
    reject_literal,
    resolve_import,
)

logger = logging.getLogger(__name__)


class ClosureError(Exception):
    """A failure that stops the whole closure computation."""

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


def decode_source(source: bytes) -> str:
    """Decode file contents, replacing invalid UTF-8 sequences."""
    return source.decode("utf-8", errors="replace")


def read_entry(entry: Path, extension: str = SOURCE_EXTENSION) -> bytes:
    """
    Read the entry file after checking its extension.

    Raises:
        ClosureError: If the file has the wrong extension or cannot be read.
    """
    if not has_extension(entry, extension):
        raise ClosureError(entry, f"input file isn't a {extension} file")
    try:
        return entry.read_bytes()
    except OSError as e:
        raise ClosureError(entry, e.strerror or str(e)) from e


def build_closure(
    entry: Path,
    primitive: str = IMPORT_PRIMITIVE,
    extension: str = SOURCE_EXTENSION,
    lexer: Optional[LuaLexer] = None,
) -> DependencyGraph:
    """
    Compute every file the entry transitively imports.

    Files are expanded depth-first, each at most once: a file whose
    canonical path has already been seen is linked but never read or
    scanned again, so import cycles terminate.

    Args:
        entry: The entry source file.
        primitive: Name of the import function.
        extension: Required source file extension.
        lexer: Lexer to use; defaults to the shared Lua lexer.

    Returns:
        DependencyGraph holding the dependency set, edges and diagnostics.

    Raises:
        ClosureError: If the entry cannot be read, or any visited file
            fails to lex or ends inside an import call.
    """
    tokenize: Callable[[str], List[Token]] = lexer.tokenize if lexer is not None else default_tokenize

    source = read_entry(entry, extension)
    root = canonical_path(entry)
    graph = DependencyGraph(root)

    # Pending files, popped in depth-first order.
    stack: List[Tuple[Path, bytes]] = [(root, source)]

    while stack:
        current, current_source = stack.pop()
        if not graph.mark_visiting(current):
            continue

        logger.debug("Scanning %s", current)
        tokens = _tokenize_file(current, current_source, tokenize)
        try:
            scan = extract_import_literals(strip_comments(tokens), current, primitive)
        except TruncatedCallError as e:
            raise ClosureError(current, "file ends inside an import call's argument list") from e

        for diagnostic in scan.diagnostics:
            graph.add_diagnostic(diagnostic)

        discovered: List[Tuple[Path, bytes]] = []
        for literal in scan.literals:
            rejected = reject_literal(current, literal)
            if rejected is not None:
                graph.add_diagnostic(rejected.diagnostic)
                graph.add_missing(current, literal)
                continue

            target = canonical_path(candidate_path(current, literal))
            if target in graph:
                logger.debug("Already seen %s", target)
                graph.add_edge(current, target)
                continue

            resolution = resolve_import(current, literal, extension)
            if not resolution.ok:
                graph.add_diagnostic(resolution.diagnostic)
                graph.add_missing(current, literal)
                continue

            graph.add_edge(current, resolution.path)
            if graph.add_dependency(resolution.path):
                discovered.append((resolution.path, resolution.source))

        graph.mark_done(current)
        stack.extend(reversed(discovered))

    logger.debug("Resolved %r", graph)
    return graph


def _tokenize_file(path: Path, source: bytes, tokenize: Callable[[str], Sequence[Token]]) -> Sequence[Token]:
    try:
        return tokenize(decode_source(source))
    except LexError as e:
        raise ClosureError(path, str(e)) from e
