# src/storage/layout.py - v1
"""Output directory structure definition.

Layout produced for each processed input ``name.ext``::

    {output_root}/
        name/
            keyframe_00001.jpg
            keyframe_00002.jpg
            ...

The directory is keyed by file stem only, so ``a/clip.mp4`` and
``b/clip.mov`` map to the same directory. On case-insensitive
filesystems ``Clip.mp4`` does too; the dispatcher compares stems with
``casefold()`` when resolving collisions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

FRAME_PREFIX = "keyframe_"
FRAME_SUFFIX = ".jpg"
FRAME_PATTERN = f"{FRAME_PREFIX}%05d{FRAME_SUFFIX}"

_UNUSABLE_STEMS = {"", ".", ".."}


def has_usable_stem(input_path: Path) -> bool:
    """Return False when the file name cannot name an output directory."""
    return input_path.stem not in _UNUSABLE_STEMS


def output_dir_for(input_path: Path, output_root: Path) -> Path:
    """Return the keyframe directory for an input file."""
    return output_root / input_path.stem


def frame_pattern(output_dir: Path) -> Path:
    """Return the numbered-sequence output pattern inside output_dir."""
    return output_dir / FRAME_PATTERN


# --- Inspection ---


@dataclass
class OutputDirStats:
    """Keyframe counts for one output directory."""

    name: str
    frame_count: int


def count_frames(output_dir: Path) -> int:
    """Count keyframe images written into output_dir."""
    return sum(
        1 for p in output_dir.glob(f"{FRAME_PREFIX}*{FRAME_SUFFIX}") if p.is_file()
    )


def list_outputs(output_root: Path) -> list[OutputDirStats]:
    """List every keyframe directory under output_root, sorted by name."""
    if not output_root.is_dir():
        return []
    return [
        OutputDirStats(name=d.name, frame_count=count_frames(d))
        for d in sorted(output_root.iterdir())
        if d.is_dir()
    ]
