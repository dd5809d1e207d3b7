# src/logging/context.py - v1
"""Contextual logging support: attach run_id, input path, worker to log records.

The dispatcher runs each task inside a copy of the submitting context, so
a run_id set before dispatch is visible in worker threads while per-task
fields stay local to their task.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_input_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "input_path", default=None
)
_worker: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "worker", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    run_id: str | None = None
    input_path: str | None = None
    worker: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        run_id=_run_id.get(),
        input_path=_input_path.get(),
        worker=_worker.get(),
    )


def set_run_context(run_id: str) -> None:
    """Set batch-level context (called once per run)."""
    _run_id.set(run_id)


def set_task_context(input_path: str, worker: str | None = None) -> None:
    """Set task-level context (called per input inside the worker)."""
    _input_path.set(input_path)
    _worker.set(worker)


def clear_context() -> None:
    """Reset all context variables."""
    _run_id.set(None)
    _input_path.set(None)
    _worker.set(None)
