"""Scratch directory management."""

from __future__ import annotations

from pathlib import Path


def ensure_scratch_dir(path: Path) -> Path:
    """Create the scratch directory for detection byproducts if missing.

    Raises:
        OSError: If the directory cannot be created (or a file is in the way).
    """
    path = Path(path).expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path
