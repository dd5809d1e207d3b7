# src/batch/gate.py - v1
"""Idempotency gate: has this input already been extracted?

The only completion signal is the presence of the input's output
directory. The check is point-in-time and takes no lock; distinct stems
never contend for the same directory.

Caveat: a decoder failure leaves its partially written directory on disk,
and a later run will treat it as done and skip it. Remove the directory by
hand to force re-extraction.
"""

from __future__ import annotations

import logging
from pathlib import Path

from kfextract.core.models import InputSpec
from kfextract.storage.layout import output_dir_for

logger = logging.getLogger(__name__)


def already_done(input_spec: InputSpec, output_root: Path) -> bool:
    """Return True iff the output directory for input_spec exists now."""
    out_dir = output_dir_for(input_spec.path, output_root)
    done = out_dir.is_dir()
    if done:
        logger.debug("Output exists for %s: %s", input_spec.path.name, out_dir)
    return done
