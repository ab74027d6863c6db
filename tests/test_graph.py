"""Tests for graph data model."""

import pytest
from pathlib import Path

from graph.model import DependencyGraph, Diagnostic, VisitState


class TestDependencyGraph:
    """Tests for DependencyGraph class."""

    def test_empty_graph(self):
        """Test empty graph initialization."""
        entry = Path("/p/main.lua")
        graph = DependencyGraph(entry)

        assert len(graph) == 0
        assert graph.dependencies == []
        assert graph.edges == {}
        assert entry in graph
        assert graph.nodes == {entry}

    def test_add_dependency(self):
        """Test that dependencies are kept once, in insertion order."""
        graph = DependencyGraph(Path("/p/main.lua"))
        a = Path("/p/a.lua")
        b = Path("/p/b.lua")

        assert graph.add_dependency(b)
        assert graph.add_dependency(a)
        assert not graph.add_dependency(b)

        assert graph.dependencies == [b, a]
        assert list(graph) == [b, a]
        assert len(graph) == 2

    def test_entry_is_not_a_dependency(self):
        """Test that the entry file cannot enter the dependency set."""
        entry = Path("/p/main.lua")
        graph = DependencyGraph(entry)

        assert not graph.add_dependency(entry)
        assert graph.dependencies == []

    def test_visit_states(self):
        """Test the unvisited -> visiting -> done lifecycle."""
        graph = DependencyGraph(Path("/p/main.lua"))
        node = Path("/p/a.lua")

        assert graph.state(node) is VisitState.UNVISITED
        assert graph.mark_visiting(node)
        assert graph.state(node) is VisitState.VISITING
        assert not graph.mark_visiting(node)

        graph.mark_done(node)

        assert graph.state(node) is VisitState.DONE
        assert not graph.mark_visiting(node)

    def test_add_edge(self):
        """Test adding edges, ignoring repeats."""
        graph = DependencyGraph(Path("/p/main.lua"))
        source = Path("/p/main.lua")
        target = Path("/p/a.lua")

        graph.add_edge(source, target)
        graph.add_edge(source, target)

        assert graph.get_targets(source) == [target]
        assert list(graph.iter_edges()) == [(source, target)]
        assert graph.get_importers(target) == {source}

    def test_missing_references(self):
        """Test tracking missing (unresolved) imports."""
        graph = DependencyGraph(Path("/p/main.lua"))
        source = Path("/p/main.lua")

        graph.add_missing(source, "gone.lua")
        graph.add_missing(source, "other.lua")
        graph.add_missing(source, "gone.lua")

        assert graph.get_missing(source) == ["gone.lua", "other.lua"]
        assert list(graph.iter_missing()) == [(source, "gone.lua"), (source, "other.lua")]

    def test_properties_return_copies(self):
        """Test that modifying returned collections does not affect the graph."""
        graph = DependencyGraph(Path("/p/main.lua"))
        source = Path("/p/main.lua")
        graph.add_missing(source, "gone.lua")
        graph.add_dependency(Path("/p/a.lua"))

        graph.missing[source].append("other.lua")
        graph.dependencies.append(Path("/p/b.lua"))

        assert graph.get_missing(source) == ["gone.lua"]
        assert graph.dependencies == [Path("/p/a.lua")]

    def test_repr(self):
        """Test string representation."""
        graph = DependencyGraph(Path("/p/main.lua"))
        graph.add_dependency(Path("/p/a.lua"))
        graph.add_edge(Path("/p/main.lua"), Path("/p/a.lua"))

        assert "dependencies=1" in repr(graph)
        assert "edges=1" in repr(graph)
        assert "missing=0" in repr(graph)


class TestDiagnostic:
    """Tests for Diagnostic formatting."""

    def test_format_uses_file_name(self):
        """Test the default rendering."""
        diagnostic = Diagnostic(Path("/p/src/main.lua"), "x.lua", "not a .lua file")

        assert str(diagnostic) == "main.lua: Skipping import 'x.lua' (not a .lua file)"

    def test_format_relative_to_base(self):
        """Test rendering relative to a base directory."""
        diagnostic = Diagnostic(Path("/p/src/main.lua"), "x.lua", "reason")

        assert diagnostic.format(Path("/p")) == "src/main.lua: Skipping import 'x.lua' (reason)"

    def test_format_outside_base(self):
        """Test that an importer outside the base falls back to its name."""
        diagnostic = Diagnostic(Path("/q/main.lua"), "x.lua", "reason")

        assert diagnostic.format(Path("/p")) == "main.lua: Skipping import 'x.lua' (reason)"
