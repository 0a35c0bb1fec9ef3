"""Snapshot file I/O.

Snapshots are UTF-8 JSON documents produced by
:func:`stategraph.graph.persistence.export_graph`. This module only moves
text between memory and disk; parsing lives in the graph layer.
"""

from __future__ import annotations

from pathlib import Path


def write_snapshot(path: Path, text: str) -> Path:
    """Write *text* to *path*, creating parent directories as needed.

    Returns the resolved path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path.resolve()


def read_snapshot(path: Path) -> str:
    """Read a snapshot file.

    Raises:
        FileNotFoundError: If *path* does not exist.
    """
    return path.read_text(encoding="utf-8")
