# src/batch/discoverer.py - v1
"""Batch discoverer: recursive, lazy discovery of eligible video files.

Walks the input root without following directory symlinks, so traversal
is bounded even when the tree contains link cycles. Entries that cannot
be read are skipped: they are not user-supplied targets and never count
as batch failures.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from kfextract.batch.path_filter import is_eligible
from kfextract.core.models import InputSpec

logger = logging.getLogger(__name__)


def discover(
    input_root: Path,
    allowed_extensions: frozenset[str] | set[str],
) -> Iterator[InputSpec]:
    """Yield an InputSpec for every eligible file under input_root.

    Args:
        input_root: Directory to walk recursively.
        allowed_extensions: Lower-cased extensions without the leading dot.

    Yields:
        InputSpec per eligible file. Order is unspecified across
        directories; files within one directory come out sorted by name.

    Raises:
        ValueError: If input_root is not a directory (on first iteration).
    """
    input_root = Path(input_root)
    if not input_root.is_dir():
        msg = f"Input root is not a directory: {input_root}"
        raise ValueError(msg)

    found = 0
    for dirpath, dirnames, filenames in os.walk(
        input_root, onerror=_log_walk_error, followlinks=False,
    ):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if not is_eligible(path, allowed_extensions):
                continue
            found += 1
            yield InputSpec.from_path(path)

    logger.debug("Discovery under %s finished: %d eligible files", input_root, found)


def _log_walk_error(exc: OSError) -> None:
    logger.debug("Skipping unreadable entry %s: %s", exc.filename, exc.strerror)
