"""Scanner module for import call-site extraction and dependency closure."""

from .comments import strip_comments
from .calls import extract_import_literals, classify_call, TruncatedCallError
from .resolver import resolve_import, candidate_path
from .builder import build_closure, ClosureError

__all__ = [
    "strip_comments",
    "extract_import_literals",
    "classify_call",
    "TruncatedCallError",
    "resolve_import",
    "candidate_path",
    "build_closure",
    "ClosureError",
]
