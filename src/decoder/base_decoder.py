# src/decoder/base_decoder.py - v1
"""Abstract decoder interface.

The extractor builds the argument list; a decoder only runs it and
reports the exit status. Tests substitute a fake implementation to assert
on the exact arguments without decoding any media.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseDecoder(ABC):
    """External keyframe decoder invoked once per input file."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used in logs (e.g., 'ffmpeg')."""

    @abstractmethod
    def invoke(self, args: list[str]) -> int:
        """Run the decoder synchronously and return its exit status.

        Args:
            args: Decoder arguments, without the executable itself.

        Returns:
            Process exit status (0 on success).

        Raises:
            OSError: If the decoder cannot be started.
        """
