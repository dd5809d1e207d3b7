# src/logging/logger.py - v1
"""Logger factory with JSON and text formatters."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from kfextract.logging.context import get_context

ROOT_LOGGER = "kfextract"


class _ContextFormatter(logging.Formatter):
    """Base formatter that reads the run/task context at emit time."""

    def timestamp(self, record: logging.LogRecord) -> datetime:
        return datetime.fromtimestamp(record.created, timezone.utc)

    def exception_text(self, record: logging.LogRecord) -> str | None:
        if record.exc_info and record.exc_info[1] is not None:
            return self.formatException(record.exc_info)
        return None


class JsonFormatter(_ContextFormatter):
    """One JSON object per line; context fields nest under ``context``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        context = get_context().as_dict()
        if context:
            entry["context"] = context
        data = getattr(record, "data", None)
        if data:
            entry["data"] = data
        exc = self.exception_text(record)
        if exc:
            entry["exception"] = exc
        return json.dumps(entry, default=str)


class TextFormatter(_ContextFormatter):
    """Terminal format: ``time [LEVEL] logger [worker file] - message``."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        head = (
            f"{self.timestamp(record):%Y-%m-%d %H:%M:%S} "
            f"[{record.levelname:8s}] {record.name}"
        )
        task = " ".join(
            part for part in (ctx.worker, ctx.input_path and Path(ctx.input_path).name)
            if part
        )
        if task:
            head = f"{head} [{task}]"
        text = f"{head} - {record.getMessage()}"
        exc = self.exception_text(record)
        return f"{text}\n{exc}" if exc else text


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Configuration is applied by setup_logging()."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 5,
) -> None:
    """Configure the root kfextract logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: Output format ("json" or "text").
        log_file: Path to log file (None = stderr only).
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates on re-init
    root_logger.handlers.clear()

    formatter: logging.Formatter
    if log_format == "json":
        formatter = JsonFormatter()
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        from kfextract.logging.handlers import create_rotating_handler

        file_handler = create_rotating_handler(
            log_file, rotation=rotation, retention=retention
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
