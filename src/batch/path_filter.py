# src/batch/path_filter.py - v1
"""Extension allow-list predicate for discovered filesystem entries."""

from __future__ import annotations

from pathlib import Path


def is_eligible(path: Path, allowed_extensions: frozenset[str] | set[str]) -> bool:
    """Return True iff path is a regular file with an allowed extension.

    Matching is case-insensitive: ``VIDEO.MP4`` matches ``mp4``. A symlink
    pointing at a regular file is eligible; a broken symlink is not.
    """
    ext = path.suffix.lower().lstrip(".")
    if not ext or ext not in allowed_extensions:
        return False
    try:
        return path.is_file()
    except OSError:
        return False
