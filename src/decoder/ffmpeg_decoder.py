# src/decoder/ffmpeg_decoder.py - v1
"""ffmpeg child-process decoder.

The binary is looked up on PATH at invocation time. stdout and stderr are
inherited so ffmpeg's own error-level output reaches the console.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from kfextract.decoder.base_decoder import BaseDecoder

logger = logging.getLogger(__name__)


class FFmpegDecoder(BaseDecoder):
    """Runs ``ffmpeg <args>`` and waits for it to exit."""

    def __init__(self, binary: str = "ffmpeg") -> None:
        self._binary = binary

    @property
    def name(self) -> str:
        return "ffmpeg"

    @property
    def binary(self) -> str:
        return self._binary

    def resolve_binary(self) -> str:
        """Return the absolute executable path, or the configured name."""
        return shutil.which(self._binary) or self._binary

    def invoke(self, args: list[str]) -> int:
        cmd = [self.resolve_binary(), *args]
        logger.debug("Running: %s", " ".join(cmd))
        # No timeout: a hung decoder holds its worker slot.
        result = subprocess.run(cmd, check=False)
        return result.returncode
