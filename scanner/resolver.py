"""Path resolution utilities for mapping import literals to actual files."""

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Optional

from graph.model import Diagnostic

logger = logging.getLogger(__name__)

SOURCE_EXTENSION = ".lua"


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of resolving one import literal.

    Exactly one of ``path`` and ``diagnostic`` is set. ``source`` holds the
    bytes read while probing the candidate.
    """

    path: Optional[Path] = None
    source: Optional[bytes] = None
    diagnostic: Optional[Diagnostic] = None

    @property
    def ok(self) -> bool:
        return self.path is not None


def is_absolute_literal(literal: str) -> bool:
    """Check if an import literal is an absolute path on any platform."""
    return PurePosixPath(literal).is_absolute() or PureWindowsPath(literal).is_absolute()


def has_extension(path: Path, extension: str) -> bool:
    """Check a file's extension, case-sensitively as Lua tooling does."""
    return path.suffix == extension


def reject_literal(importer: Path, literal: str) -> Optional[Resolution]:
    """
    Reject literals that can never name an importable file.

    Returns:
        A failed Resolution for absolute paths and literals containing a
        NUL byte, or None if the literal may be joined onto the importer.
    """
    if "\x00" in literal:
        return _skip(importer, literal.replace("\x00", "\\0"), "import path contains a NUL byte")
    if is_absolute_literal(literal):
        return _skip(importer, literal, "absolute import paths are not supported")
    return None


def candidate_path(importer: Path, literal: str) -> Path:
    """
    Compute the unvalidated candidate for an import literal.

    The literal is joined onto the importer's parent directory. A bare
    file name has "." as its parent, so relative importers resolve against
    the current working directory.
    """
    return importer.parent / literal


def canonical_path(path: Path) -> Path:
    """Get the absolute, normalized path used as a file's identity."""
    return path.resolve()


def resolve_import(
    importer: Path,
    literal: str,
    extension: str = SOURCE_EXTENSION,
) -> Resolution:
    """
    Resolve an import literal to a readable source file.

    Args:
        importer: The file containing the import call.
        literal: The import literal, quotes already stripped.
        extension: Required file extension, including the dot.

    Returns:
        Resolution with the canonical path and file contents, or with a
        diagnostic explaining why the import was dropped.
    """
    rejected = reject_literal(importer, literal)
    if rejected is not None:
        return rejected

    candidate = candidate_path(importer, literal)

    try:
        source = candidate.read_bytes()
    except (OSError, ValueError) as e:
        reason = getattr(e, "strerror", None) or str(e)
        return _skip(importer, literal, f"cannot read {candidate}: {reason}")

    if not has_extension(candidate, extension):
        return _skip(importer, literal, f"not a {extension} file")

    return Resolution(path=canonical_path(candidate), source=source)


def _skip(importer: Path, literal: str, reason: str) -> Resolution:
    logger.info("%s: skipping import '%s' (%s)", importer.name, literal, reason)
    return Resolution(diagnostic=Diagnostic(importer, literal, reason))

