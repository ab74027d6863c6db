"""ASCII tree-style exporter for dependency graphs."""

from pathlib import Path
from typing import List, Optional, Set, Tuple

from graph.model import DependencyGraph
from .paths import display_path


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "


def to_ascii(
    graph: DependencyGraph,
    base: Optional[Path] = None,
    style: str = "tree",
    include_missing: bool = True,
) -> str:
    """
    Convert a dependency graph to an ASCII tree rooted at the entry file.

    A file is expanded the first time it appears; later appearances are
    marked with [*] and not expanded again, so cycles render finitely.

    Args:
        graph: The resolved dependency graph.
        base: Optional base path for relative path display.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
        include_missing: If True, show unresolved imports as [MISSING].

    Returns:
        ASCII tree string.
    """
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)

    lines: List[str] = [display_path(graph.entry, base)]
    expanded: Set[Path] = {graph.entry}
    _render_children(graph, graph.entry, base, "", chars, expanded, lines, include_missing)
    return "\n".join(lines)


def _render_children(
    graph: DependencyGraph,
    node: Path,
    base: Optional[Path],
    prefix: str,
    chars: Tuple[str, str, str, str],
    expanded: Set[Path],
    lines: List[str],
    include_missing: bool,
) -> None:
    """
    Render the imports of a node below it.

    Args:
        graph: The dependency graph.
        node: Node whose children are rendered.
        base: Base path for display.
        prefix: Current line prefix for indentation.
        chars: Character set (branch, last, vertical, space).
        expanded: Nodes already rendered with their children (modified in place).
        lines: Output lines list (modified in place).
        include_missing: If True, show unresolved imports.
    """
    branch, last, vertical, space = chars

    children = graph.get_targets(node)
    missing_refs = graph.get_missing(node) if include_missing else []
    total_items = len(children) + len(missing_refs)

    for item_index, child in enumerate(children, start=1):
        is_last = item_index == total_items
        connector = last if is_last else branch
        seen = child in expanded
        marker = " [*]" if seen else ""
        lines.append(f"{prefix}{connector}{display_path(child, base)}{marker}")
        if seen:
            continue
        expanded.add(child)
        _render_children(
            graph=graph,
            node=child,
            base=base,
            prefix=prefix + (space if is_last else vertical),
            chars=chars,
            expanded=expanded,
            lines=lines,
            include_missing=include_missing,
        )

    for item_index, literal in enumerate(missing_refs, start=len(children) + 1):
        connector = last if item_index == total_items else branch
        lines.append(f"{prefix}{connector}{literal} [MISSING]")
