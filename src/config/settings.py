# src/config/settings.py - v1
"""Typed configuration loaded from environment / .env via pydantic-settings.

Settings only supply defaults for the CLI and the facade. The core
components receive an explicit BatchConfig and never read settings.
All variables use the ``KFEXTRACT_`` prefix, e.g. ``KFEXTRACT_LOG_LEVEL``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kfextract.core.extensions import DEFAULT_EXTENSIONS, parse_extensions

QUALITY_MIN = 1
QUALITY_MAX = 31


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from the environment and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="KFEXTRACT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Batch defaults ===
    output_dir: Path = Path("./keyframes_output")
    threads: int | None = None
    quality: int = 2
    extensions: str = DEFAULT_EXTENSIONS

    # === Decoder ===
    decoder_binary: str = "ffmpeg"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("threads")
    @classmethod
    def validate_threads(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("threads must be >= 1")
        return v

    @field_validator("log_retention")
    @classmethod
    def validate_log_retention(cls, v: int) -> int:
        if v < 0:
            raise ValueError("log_retention must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field rules."""
        errors: list[str] = []

        if not QUALITY_MIN <= self.quality <= QUALITY_MAX:
            errors.append(
                f"QUALITY must be between {QUALITY_MIN} and {QUALITY_MAX}"
            )

        if not self.extensions_set:
            errors.append("EXTENSIONS must list at least one extension")

        if not self.decoder_binary.strip():
            errors.append("DECODER_BINARY must not be empty")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def extensions_set(self) -> frozenset[str]:
        """Parse the comma-separated extension allow-list."""
        return parse_extensions(self.extensions)

    @property
    def effective_threads(self) -> int:
        """Configured worker count, or the number of available CPUs."""
        return self.threads or os.cpu_count() or 1


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment / .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
