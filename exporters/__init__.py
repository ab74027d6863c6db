"""Exporters for converting a dependency graph to various output formats."""

from .list_exporter import to_list
from .ascii_exporter import to_ascii
from .json_exporter import to_json

__all__ = ["to_list", "to_ascii", "to_json"]
