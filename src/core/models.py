# src/core/models.py - v1
"""Shared Pydantic domain models used across modules.

No module redefines these types: all imports come from core.models.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kfextract.core.extensions import DEFAULT_EXTENSIONS, parse_extensions

TaskStatus = Literal["extracted", "skipped", "failed"]


# === INPUTS ===


class InputSpec(BaseModel):
    """A single eligible video file found during discovery."""

    model_config = ConfigDict(frozen=True)

    path: Path
    extension: str

    @field_validator("extension")
    @classmethod
    def normalize_extension(cls, v: str) -> str:
        return v.lower().lstrip(".")

    @classmethod
    def from_path(cls, path: Path) -> InputSpec:
        """Build an InputSpec from a filesystem path."""
        return cls(path=path, extension=path.suffix)

    @property
    def stem(self) -> str:
        return self.path.stem


class BatchConfig(BaseModel):
    """Immutable parameters of one batch run."""

    model_config = ConfigDict(frozen=True)

    input_root: Path
    output_root: Path
    concurrency: int = Field(ge=1)
    quality: int = 2
    allowed_extensions: frozenset[str] = parse_extensions(DEFAULT_EXTENSIONS)

    @field_validator("allowed_extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, v: object) -> object:
        if isinstance(v, (str, list, tuple, set, frozenset)):
            return parse_extensions(v)
        return v


# === OUTCOMES ===


class TaskOutcome(BaseModel):
    """Per-input result record produced by the dispatcher."""

    model_config = ConfigDict(frozen=True)

    input: InputSpec
    status: TaskStatus
    reason: str | None = None
    error_kind: str | None = None
    duration_seconds: float = 0.0

    @property
    def failed(self) -> bool:
        return self.status == "failed"


class BatchResult(BaseModel):
    """Aggregate of all task outcomes for one run."""

    input_root: str
    output_root: str
    outcomes: list[TaskOutcome] = Field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def extracted(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "extracted")

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "skipped")

    @property
    def failures(self) -> list[TaskOutcome]:
        return [o for o in self.outcomes if o.failed]

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def first_failure(self) -> TaskOutcome | None:
        failures = self.failures
        return failures[0] if failures else None

    @property
    def ok(self) -> bool:
        """True when no task failed (an empty batch is ok)."""
        return self.failed == 0

    def summary(self) -> str:
        """Human-readable report listing every failing task."""
        lines = [
            f"{self.total} task(s): {self.extracted} extracted, "
            f"{self.skipped} skipped, {self.failed} failed "
            f"in {self.duration_seconds:.1f}s",
        ]
        for outcome in self.failures:
            lines.append(
                f"  [{outcome.error_kind}] {outcome.input.path}: {outcome.reason}"
            )
        return "\n".join(lines)
