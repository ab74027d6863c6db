"""Graph data model for storing a Lua file's dependency closure."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple


class VisitState(Enum):
    """Traversal state of a file during closure computation."""

    UNVISITED = "unvisited"
    VISITING = "visiting"
    DONE = "done"


@dataclass(frozen=True)
class Diagnostic:
    """
    A skipped or rejected import.

    Attributes:
        importer: The file containing the import call.
        subject: The import literal, or a description of the call.
        reason: Why the import was skipped.
    """

    importer: Path
    subject: str
    reason: str

    def format(self, base: Optional[Path] = None) -> str:
        """Render as '<importer>: Skipping import '<subject>' (<reason>)'."""
        name = self.importer.name
        if base is not None:
            try:
                name = str(self.importer.relative_to(base)).replace("\\", "/")
            except ValueError:
                pass
        return f"{name}: Skipping import '{self.subject}' ({self.reason})"

    def __str__(self) -> str:
        return self.format()


class DependencyGraph:
    """
    A directed graph of 'importer -> imported' relationships rooted at an entry file.

    Nodes are canonical file paths. The dependency set is the ordered list of
    validated imports reachable from the entry, each appearing once; the entry
    itself is not part of it. Imports that failed to resolve are tracked
    separately as missing.
    """

    def __init__(self, entry: Path):
        self._entry = entry
        self._states: Dict[Path, VisitState] = {}
        self._dependencies: List[Path] = []
        self._known: Set[Path] = {entry}
        self._edges: Dict[Path, List[Path]] = {}
        self._missing: Dict[Path, List[str]] = {}  # importer -> unresolved literals
        self._diagnostics: List[Diagnostic] = []

    @property
    def entry(self) -> Path:
        """Return the entry file."""
        return self._entry

    @property
    def dependencies(self) -> List[Path]:
        """Return the dependency set in discovery order."""
        return list(self._dependencies)

    @property
    def nodes(self) -> Set[Path]:
        """Return the entry and every dependency."""
        return set(self._known)

    @property
    def edges(self) -> Dict[Path, List[Path]]:
        """Return adjacency list representation of edges."""
        return {k: list(v) for k, v in self._edges.items()}

    @property
    def missing(self) -> Dict[Path, List[str]]:
        """Return missing references (importer -> list of unresolved literals)."""
        return {k: list(v) for k, v in self._missing.items()}

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Return collected diagnostics in the order they were raised."""
        return list(self._diagnostics)

    def state(self, node: Path) -> VisitState:
        """Get the traversal state of a file."""
        return self._states.get(node, VisitState.UNVISITED)

    def mark_visiting(self, node: Path) -> bool:
        """
        Mark a file as being expanded.

        Returns:
            False if the file was already visiting or done, in which case
            it must not be expanded again.
        """
        if self.state(node) is not VisitState.UNVISITED:
            return False
        self._states[node] = VisitState.VISITING
        return True

    def mark_done(self, node: Path) -> None:
        """Mark a file as fully expanded."""
        self._states[node] = VisitState.DONE

    def add_dependency(self, node: Path) -> bool:
        """
        Append a validated import to the dependency set.

        Returns:
            True if the file was not seen before.
        """
        if node in self._known:
            return False
        self._known.add(node)
        self._dependencies.append(node)
        return True

    def add_edge(self, source: Path, target: Path) -> None:
        """Add a directed edge from source to target, ignoring duplicates."""
        targets = self._edges.setdefault(source, [])
        if target not in targets:
            targets.append(target)

    def add_missing(self, source: Path, literal: str) -> None:
        """
        Record a missing reference (an import literal that did not resolve).

        Args:
            source: The file containing the import.
            literal: The unresolved import literal.
        """
        literals = self._missing.setdefault(source, [])
        if literal not in literals:
            literals.append(literal)

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Record a skipped import."""
        self._diagnostics.append(diagnostic)

    def get_targets(self, source: Path) -> List[Path]:
        """Get all files that the source file imports."""
        return list(self._edges.get(source, []))

    def get_missing(self, source: Path) -> List[str]:
        """Get all unresolved literals from the source file."""
        return list(self._missing.get(source, []))

    def get_importers(self, target: Path) -> Set[Path]:
        """Get all files that import the target file."""
        return {source for source, targets in self._edges.items() if target in targets}

    def iter_edges(self) -> Iterator[Tuple[Path, Path]]:
        """Iterate over all edges as (source, target) tuples."""
        for source, targets in self._edges.items():
            for target in targets:
                yield source, target

    def iter_missing(self) -> Iterator[Tuple[Path, str]]:
        """Iterate over all missing references as (source, literal) tuples."""
        for source, literals in self._missing.items():
            for literal in literals:
                yield source, literal

    def __len__(self) -> int:
        """Return the number of dependencies."""
        return len(self._dependencies)

    def __contains__(self, node: Path) -> bool:
        """Check if a file is the entry or one of its dependencies."""
        return node in self._known

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._dependencies))

    def __repr__(self) -> str:
        edge_count = sum(len(t) for t in self._edges.values())
        missing_count = sum(len(m) for m in self._missing.values())
        return (
            f"DependencyGraph(entry={self._entry.name}, dependencies={len(self._dependencies)}, "
            f"edges={edge_count}, missing={missing_count}, diagnostics={len(self._diagnostics)})"
        )
