# src/batch/dispatcher.py - v1
"""Batch dispatcher: bounded-concurrency fan-out of keyframe extraction.

Workflow:
    1. Consume discovered inputs, one task per input
    2. Resolve stem collisions up front (first input wins, others skip).
       Stems compare case-insensitively so "Clip" and "clip" never share a
       directory on case-insensitive filesystems.
    3. Submit each task to the injected executor
    4. Wait for every future; convert failures to TaskOutcome records

A failing task never cancels its siblings. The executor's worker count is
the concurrency bound: each worker runs one extraction, including the
blocking decoder process, before taking the next input.
"""

from __future__ import annotations

import contextvars
import logging
import threading
import time
from collections.abc import Iterable
from concurrent.futures import Executor, Future, wait
from pathlib import Path

from kfextract.batch.extractor import KeyframeExtractor
from kfextract.core.errors import ExtractError
from kfextract.core.models import BatchConfig, InputSpec, TaskOutcome
from kfextract.logging.context import set_task_context

logger = logging.getLogger(__name__)


class BatchDispatcher:
    """Schedule one extraction per input on an injected executor."""

    def __init__(self, executor: Executor, extractor: KeyframeExtractor) -> None:
        self._executor = executor
        self._extractor = extractor

    def run(
        self, inputs: Iterable[InputSpec], config: BatchConfig,
    ) -> list[TaskOutcome]:
        """Run every input to completion and return one outcome per input.

        Blocks until all submitted tasks have finished. Outcomes are listed
        in submission order; completion order is unspecified.
        """
        slots: list[TaskOutcome | Future[TaskOutcome]] = []
        claimed_stems: dict[str, Path] = {}

        for input_spec in inputs:
            key = input_spec.stem.casefold()
            owner = claimed_stems.get(key)
            if owner is not None:
                slots.append(self._collision_outcome(input_spec, owner))
                continue
            claimed_stems[key] = input_spec.path

            ctx = contextvars.copy_context()
            slots.append(
                self._executor.submit(ctx.run, self._run_one, input_spec, config),
            )

        futures = [s for s in slots if isinstance(s, Future)]
        logger.info(
            "Dispatched %d task(s) (%d collision skip(s)), waiting for completion",
            len(futures), len(slots) - len(futures),
        )
        wait(futures)

        return [s.result() if isinstance(s, Future) else s for s in slots]

    def _run_one(self, input_spec: InputSpec, config: BatchConfig) -> TaskOutcome:
        """Execute one extraction inside a worker; never raises."""
        set_task_context(str(input_spec.path), threading.current_thread().name)
        t0 = time.perf_counter()
        try:
            status = self._extractor.extract(
                input_spec, config.output_root, config.quality,
            )
        except ExtractError as exc:
            logger.error("%s: %s", exc.kind, exc)
            return TaskOutcome(
                input=input_spec,
                status="failed",
                reason=exc.message,
                error_kind=exc.kind,
                duration_seconds=round(time.perf_counter() - t0, 3),
            )
        except Exception as exc:
            logger.exception("Unexpected failure processing %s", input_spec.path)
            return TaskOutcome(
                input=input_spec,
                status="failed",
                reason=str(exc) or type(exc).__name__,
                error_kind="UnexpectedError",
                duration_seconds=round(time.perf_counter() - t0, 3),
            )

        duration = round(time.perf_counter() - t0, 3)
        if status == "skipped":
            logger.debug("Skipping %s (output exists)", input_spec.path.name)
            return TaskOutcome(
                input=input_spec,
                status="skipped",
                reason="output directory exists",
                duration_seconds=duration,
            )

        logger.info("Extracted %s in %.1fs", input_spec.path.name, duration)
        return TaskOutcome(
            input=input_spec, status="extracted", duration_seconds=duration,
        )

    @staticmethod
    def _collision_outcome(input_spec: InputSpec, owner: Path) -> TaskOutcome:
        logger.warning(
            "Stem collision: %s maps to the same output directory as %s, skipping",
            input_spec.path, owner,
        )
        return TaskOutcome(
            input=input_spec,
            status="skipped",
            reason=f"stem collision with {owner}",
        )
