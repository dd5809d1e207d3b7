# src/batch/extractor.py - v1
"""Keyframe extractor: the unit of work for one input file.

Steps per input:
  1. Derive the output directory from the file stem
  2. Skip with no side effects if the idempotency gate says done
  3. Create the output directory (and parents)
  4. Run the decoder with the fixed argument contract and wait for it
  5. Map a non-zero exit status to DecoderError

The output directory is not removed when the decoder fails.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from kfextract.batch.gate import already_done
from kfextract.core.errors import (
    DecoderError,
    DirectoryCreateError,
    InvalidNameError,
    ProcessSpawnError,
)
from kfextract.core.models import InputSpec
from kfextract.decoder.base_decoder import BaseDecoder
from kfextract.storage.layout import frame_pattern, has_usable_stem, output_dir_for

logger = logging.getLogger(__name__)

ExtractStatus = Literal["extracted", "skipped"]

# Selects intra-coded frames only; the comma is escaped for the filtergraph.
KEYFRAME_FILTER = r"select=eq(pict_type\,I)"
DECODER_THREADS = 2


def build_decoder_args(input_path: Path, output_dir: Path, quality: int) -> list[str]:
    """Build the decoder argument list (executable not included).

    The order and values are fixed so that any drop-in decoder receives the
    same contract.
    """
    return [
        "-hwaccel", "auto",
        "-i", str(input_path),
        "-vf", KEYFRAME_FILTER,
        "-vsync", "vfr",
        "-q:v", str(quality),
        "-threads", str(DECODER_THREADS),
        "-loglevel", "error",
        str(frame_pattern(output_dir)),
    ]


class KeyframeExtractor:
    """Extract keyframes from one video by delegating to a decoder."""

    def __init__(self, decoder: BaseDecoder) -> None:
        self._decoder = decoder

    @property
    def decoder(self) -> BaseDecoder:
        return self._decoder

    def extract(
        self, input_spec: InputSpec, output_root: Path, quality: int,
    ) -> ExtractStatus:
        """Extract keyframes for input_spec into output_root.

        Args:
            input_spec: The video to process.
            output_root: Root under which the per-stem directory is created.
            quality: JPEG quality passed through to the decoder uninterpreted.

        Returns:
            "skipped" if the output directory already existed,
            "extracted" if the decoder ran and exited 0.

        Raises:
            InvalidNameError: The file has no usable stem.
            DirectoryCreateError: The output directory could not be created.
            ProcessSpawnError: The decoder could not be started.
            DecoderError: The decoder exited non-zero.
        """
        input_path = input_spec.path
        if not has_usable_stem(input_path):
            raise InvalidNameError(input_path)

        if already_done(input_spec, output_root):
            return "skipped"

        out_dir = output_dir_for(input_path, output_root)
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreateError(input_path, out_dir, exc) from exc

        args = build_decoder_args(input_path, out_dir, quality)
        logger.info("Extracting keyframes: %s -> %s", input_path, out_dir)
        try:
            exit_status = self._decoder.invoke(args)
        except OSError as exc:
            raise ProcessSpawnError(input_path, exc) from exc

        if exit_status != 0:
            raise DecoderError(input_path, exit_status)

        return "extracted"
