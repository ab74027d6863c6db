"""Graph module holding the dependency closure data model."""

from .model import DependencyGraph, Diagnostic, VisitState

__all__ = ["DependencyGraph", "Diagnostic", "VisitState"]
