# src/core/extensions.py - v1
"""Video extension allow-list shared by config, models and discovery."""

from __future__ import annotations

from collections.abc import Iterable

DEFAULT_EXTENSIONS = "mp4,mov,avi,mkv,flv"


def parse_extensions(value: str | Iterable[str]) -> frozenset[str]:
    """Normalise an extension list ("mp4, .MOV") into a lower-cased set."""
    items = value.split(",") if isinstance(value, str) else value
    return frozenset(
        e.strip().lower().lstrip(".") for e in items if e.strip().lstrip(".")
    )
