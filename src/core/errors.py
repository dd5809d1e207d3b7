# src/core/errors.py - v1
"""Exception hierarchy for per-task extraction failures.

Every ExtractError carries the input path it originated from so the
dispatcher can attribute it in the aggregate report. None of these are
retried.
"""

from __future__ import annotations

from pathlib import Path


class KfExtractError(Exception):
    """Base exception for all kfextract errors."""


class ExtractError(KfExtractError):
    """A single input could not be turned into keyframes."""

    kind = "ExtractError"

    def __init__(self, input_path: Path | str, message: str) -> None:
        self.input_path = Path(input_path)
        self.message = message
        super().__init__(f"{message} ({self.input_path})")


class InvalidNameError(ExtractError):
    """The input file has no usable stem to name its output directory."""

    kind = "InvalidName"

    def __init__(self, input_path: Path | str) -> None:
        super().__init__(input_path, "Invalid file name, no usable stem")


class DirectoryCreateError(ExtractError):
    """The output directory could not be created."""

    kind = "DirectoryCreateError"

    def __init__(self, input_path: Path | str, output_dir: Path, cause: OSError) -> None:
        self.output_dir = output_dir
        super().__init__(
            input_path, f"Failed to create directory {output_dir}: {cause}",
        )


class DecoderError(ExtractError):
    """The decoder ran but exited with a non-zero status."""

    kind = "DecoderError"

    def __init__(self, input_path: Path | str, exit_status: int) -> None:
        self.exit_status = exit_status
        super().__init__(input_path, f"Decoder exited with status {exit_status}")


class ProcessSpawnError(ExtractError):
    """The decoder executable is missing or could not be started."""

    kind = "ProcessSpawnError"

    def __init__(self, input_path: Path | str, cause: OSError) -> None:
        super().__init__(input_path, f"Failed to run decoder: {cause}")
