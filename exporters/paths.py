"""Display helpers shared by the exporters."""

from pathlib import Path
from typing import Optional


def display_path(path: Path, base: Optional[Path] = None) -> str:
    """Get the path relative to base with forward slashes, or the full path."""
    if base is not None:
        try:
            return str(path.relative_to(base.resolve())).replace("\\", "/")
        except ValueError:
            pass
    return str(path).replace("\\", "/")
