# src/api/facade.py - v1
"""Public API facade: single entry point for a batch keyframe run.

Usage:
    from kfextract.api.facade import build_config, run_batch
    result = run_batch(build_config(Path("videos")))

    # or from async code
    result = await extract_keyframes(config)
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Callable
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path

from kfextract.batch.discoverer import discover
from kfextract.batch.dispatcher import BatchDispatcher
from kfextract.batch.extractor import KeyframeExtractor
from kfextract.config.settings import Settings
from kfextract.core.models import BatchConfig, BatchResult
from kfextract.decoder.base_decoder import BaseDecoder
from kfextract.decoder.ffmpeg_decoder import FFmpegDecoder
from kfextract.logging.context import set_run_context

logger = logging.getLogger(__name__)


def build_config(
    input_root: Path,
    settings: Settings | None = None,
    output_root: Path | None = None,
    threads: int | None = None,
    quality: int | None = None,
    extensions: str | None = None,
) -> BatchConfig:
    """Merge explicit arguments over settings defaults into a BatchConfig."""
    settings = settings or Settings()
    return BatchConfig(
        input_root=input_root,
        output_root=output_root if output_root is not None else settings.output_dir,
        concurrency=threads if threads is not None else settings.effective_threads,
        quality=quality if quality is not None else settings.quality,
        allowed_extensions=extensions if extensions is not None else settings.extensions_set,
    )


def run_batch(
    config: BatchConfig,
    decoder: BaseDecoder | None = None,
    executor: Executor | None = None,
    settings: Settings | None = None,
    on_discovered: Callable[[int], None] | None = None,
) -> BatchResult:
    """Discover, dispatch and aggregate one batch run.

    Args:
        config: Batch parameters.
        decoder: Decoder to invoke. Defaults to ffmpeg from settings.
        executor: Pool to run tasks on. If None, a ThreadPoolExecutor with
            ``config.concurrency`` workers is created and shut down here.
        settings: Used only to pick the default decoder binary.
        on_discovered: Called with the number of eligible inputs once
            discovery finishes and before any task is dispatched.

    Returns:
        BatchResult with one outcome per discovered input.

    Raises:
        ValueError: If the input root is not a directory.
    """
    if not config.input_root.is_dir():
        msg = f"Input root is not a directory: {config.input_root}"
        raise ValueError(msg)

    if decoder is None:
        settings = settings or Settings()
        decoder = FFmpegDecoder(binary=settings.decoder_binary)

    run_id = _generate_run_id()
    set_run_context(run_id)
    logger.info(
        "Starting batch run %s: input=%s, output=%s, workers=%d, quality=%d, decoder=%s",
        run_id, config.input_root, config.output_root,
        config.concurrency, config.quality, decoder.name,
    )

    t0 = time.perf_counter()
    inputs = list(discover(config.input_root, config.allowed_extensions))
    logger.info("Found %d video files to process", len(inputs))
    if on_discovered is not None:
        on_discovered(len(inputs))

    extractor = KeyframeExtractor(decoder)
    if executor is None:
        with ThreadPoolExecutor(
            max_workers=config.concurrency, thread_name_prefix="kfextract",
        ) as pool:
            outcomes = BatchDispatcher(pool, extractor).run(inputs, config)
    else:
        outcomes = BatchDispatcher(executor, extractor).run(inputs, config)

    result = BatchResult(
        input_root=str(config.input_root),
        output_root=str(config.output_root),
        outcomes=outcomes,
        duration_seconds=round(time.perf_counter() - t0, 2),
    )
    log = logger.info if result.ok else logger.error
    log(
        "Batch run %s finished: %d extracted, %d skipped, %d failed",
        run_id, result.extracted, result.skipped, result.failed,
    )
    return result


async def extract_keyframes(
    config: BatchConfig,
    decoder: BaseDecoder | None = None,
    settings: Settings | None = None,
    on_discovered: Callable[[int], None] | None = None,
) -> BatchResult:
    """Async wrapper: run the batch in a worker thread."""
    return await asyncio.to_thread(
        run_batch, config, decoder=decoder, settings=settings,
        on_discovered=on_discovered,
    )


def _generate_run_id() -> str:
    """Generate a run ID: yyyymmdd_hhmmss_{uuid4 prefix}."""
    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return f"{ts}_{uuid.uuid4().hex[:8]}"
