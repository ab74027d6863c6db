"""JSON exporter for dependency graphs (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from graph.model import DependencyGraph
from .paths import display_path


def to_json(
    graph: DependencyGraph,
    base: Optional[Path] = None,
    indent: int = 2,
) -> str:
    """
    Convert a dependency graph to JSON format.

    Args:
        graph: The resolved dependency graph.
        base: Optional base path for relative path display.
        indent: JSON indentation level.

    Returns:
        JSON string with the entry, dependencies, edges and diagnostics.
    """
    edges: List[Dict[str, Any]] = []
    for source, target in graph.iter_edges():
        edges.append({"source": display_path(source, base), "target": display_path(target, base)})

    for source, literal in graph.iter_missing():
        edges.append({"source": display_path(source, base), "target": literal, "missing": True})

    diagnostics: List[Dict[str, str]] = [
        {
            "importer": display_path(diagnostic.importer, base),
            "subject": diagnostic.subject,
            "reason": diagnostic.reason,
        }
        for diagnostic in graph.diagnostics
    ]

    data: Dict[str, Any] = {
        "entry": display_path(graph.entry, base),
        "dependencies": [display_path(path, base) for path in graph.dependencies],
        "edges": edges,
        "diagnostics": diagnostics,
    }

    return json.dumps(data, indent=indent)
