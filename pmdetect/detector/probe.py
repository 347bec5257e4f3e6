"""Filesystem existence checks, blocking and non-blocking.

Both forms share ``_stat_matches`` so they agree on every path.
"""

import asyncio
import os
import stat
from pathlib import Path
from typing import Literal

PathKind = Literal["file", "dir"]


def path_exists(path: Path, kind: PathKind = "file") -> bool:
    """True if ``path`` exists and is a regular file (or a directory)."""
    return _stat_matches(path, kind)


async def path_exists_async(path: Path, kind: PathKind = "file") -> bool:
    """Non-blocking ``path_exists``; the stat runs in a worker thread."""
    return await asyncio.to_thread(_stat_matches, path, kind)


def kind_for_marker(marker: str) -> PathKind:
    """Markers written with a trailing slash name directories."""
    return "dir" if marker.endswith("/") else "file"


def _stat_matches(path: Path, kind: PathKind) -> bool:
    try:
        mode = os.stat(path).st_mode
    except (OSError, ValueError):
        return False
    if kind == "dir":
        return stat.S_ISDIR(mode)
    return stat.S_ISREG(mode)
