"""Application configuration models and helpers."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_DURATION = 0.1


class AppPaths(BaseModel):
    """Resolved directories for autoheight runtime assets."""

    base_dir: Path = Field(
        default_factory=lambda: Path(
            os.getenv("AUTOHEIGHT_HOME", Path.home() / ".autoheight")
        )
    )

    @property
    def logs_dir(self) -> Path:
        return self.base_dir / "logs"

    def ensure(self) -> None:
        for path in (self.base_dir, self.logs_dir):
            path.mkdir(parents=True, exist_ok=True)


class HeightSettings(BaseModel):
    """Options for the transient output region.

    ``duration`` is in seconds and never drops below ``MIN_DURATION``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    max_lines: int = Field(default=5, ge=1)
    duration: float = 2.0
    remove_on_key: bool = True
    clear_always: bool = False

    @field_validator("duration")
    @classmethod
    def _clamp_duration(cls, value: float) -> float:
        return max(value, MIN_DURATION)

    @property
    def duration_ms(self) -> int:
        return int(self.duration * 1000)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> HeightSettings:
        """Build settings from a user options table, keeping defaults for missing keys."""

        return cls(**dict(options or {}))


class LoggingSettings(BaseModel):
    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    to_file: bool = True


class AppSettings(BaseModel):
    app_name: str = "autoheight"
    paths: AppPaths = Field(default_factory=AppPaths)
    height: HeightSettings = Field(default_factory=HeightSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _maybe_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _maybe_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _maybe_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    lowered = value.lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return None


def load_settings(env_path: Path | None = None) -> AppSettings:
    """Load user settings from environment variables and defaults."""

    env_file = env_path or Path('.env')
    if env_file.exists():
        load_dotenv(env_file)

    overrides: dict[str, Any] = {}

    if (max_lines := _maybe_int(os.getenv('AUTOHEIGHT_MAX_LINES'))) is not None and max_lines >= 1:
        overrides.setdefault('height', {})['max_lines'] = max_lines

    if (duration := _maybe_float(os.getenv('AUTOHEIGHT_DURATION'))) is not None:
        overrides.setdefault('height', {})['duration'] = duration

    if (remove_on_key := _maybe_bool(os.getenv('AUTOHEIGHT_REMOVE_ON_KEY'))) is not None:
        overrides.setdefault('height', {})['remove_on_key'] = remove_on_key

    if (clear_always := _maybe_bool(os.getenv('AUTOHEIGHT_CLEAR_ALWAYS'))) is not None:
        overrides.setdefault('height', {})['clear_always'] = clear_always

    if level := os.getenv('AUTOHEIGHT_LOG_LEVEL'):
        if level.upper() in {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR"}:
            overrides.setdefault('logging', {})['level'] = level.upper()

    settings = AppSettings(**overrides)
    settings.paths.ensure()
    return settings
