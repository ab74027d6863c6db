"""Plain list exporter: one dependency per line."""

from pathlib import Path
from typing import Optional

from graph.model import DependencyGraph
from .paths import display_path


def to_list(graph: DependencyGraph, base: Optional[Path] = None) -> str:
    """
    Convert a dependency graph to a newline-separated file list.

    Args:
        graph: The resolved dependency graph.
        base: Optional base path for relative path display.

    Returns:
        The dependencies in discovery order, one per line.
    """
    return "\n".join(display_path(path, base) for path in graph.dependencies)
