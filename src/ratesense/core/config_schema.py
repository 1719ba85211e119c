"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed, validated ``RateSenseConfig``
instance.  Existing dict-based access continues to work unchanged.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _place(filename: str, directory: Path | None) -> str:
    if directory is None or os.path.dirname(filename):
        return filename
    return str(directory / filename)


class PathsConfig(BaseModel):
    """File-system paths used by the application."""

    data_dir: Path
    export_dir: Path | None = None
    log_dir: Path | None = None

    @field_validator("data_dir", "export_dir", "log_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v

    def export_path(self, filename: str) -> str:
        """Bare file names go under ``export_dir``; paths with a directory are kept."""
        return _place(filename, self.export_dir)

    def log_path(self, filename: str) -> str:
        """Bare log file names go under ``log_dir``."""
        return _place(filename, self.log_dir)


class LoggingConfig(BaseModel):
    """loguru sink settings."""

    level: str = "WARNING"
    file: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _known_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.upper()
            if v not in _LOG_LEVELS:
                raise ValueError(f"unknown log level {v!r}, expected one of {_LOG_LEVELS}")
        return v


class CalculatorConfig(BaseModel):
    """Loan calculator display defaults."""

    rate_deltas: list[float] = [0.0, 0.25, 0.5, 1.0]
    table_rows: int = 36

    @field_validator("rate_deltas", mode="before")
    @classmethod
    def _split_csv(cls, v: Any) -> Any:
        # Env overrides arrive as "0,0.25,0.5"
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v


class StressConfig(BaseModel):
    """Defaults for ARM stress runs when the caller leaves them out."""

    arm_fixed_years: float = 5.0
    arm_adjust_every_months: int = 12


class RateSenseConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so callers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = PathsConfig(data_dir=Path("~/.ratesense-data"))
    logging: LoggingConfig = LoggingConfig()
    calculator: CalculatorConfig = CalculatorConfig()
    stress: StressConfig = StressConfig()
