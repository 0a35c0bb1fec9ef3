"""Config file discovery.

A graph session reads its settings from the nearest ``stategraph.toml``,
found the way git finds ``.git/``: the start directory first, then each
ancestor up to the filesystem root.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "stategraph.toml"
CONFIG_ENV_VAR = "STATEGRAPH_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Locate the ``stategraph.toml`` that governs *start* (default: cwd).

    ``STATEGRAPH_CONFIG`` names the file outright when set. A value that does
    not point at a file means no config, not a fallback to the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        explicit = Path(override)
        return explicit if explicit.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
