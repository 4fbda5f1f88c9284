"""Configuration settings for WordTrail with caching utilities."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wordtrail.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Writing statistics settings"""

    model_config = SettingsConfigDict(
        env_prefix="WORDTRAIL_",
        env_file=[".env.test", ".env"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Character categories
    track_script_a: bool = True  # logographic (CJK) characters
    track_script_b: bool = True  # ASCII alphabetic characters
    track_punctuation: bool = True
    track_digits: bool = True
    track_whitespace: bool = False
    show_word_count: bool = True

    # Document cache
    enable_cache: bool = True
    cache_ttl_seconds: float = Field(default=300.0, gt=0, le=86400)
    cache_max_entries: int = Field(default=256, gt=0, le=100_000)

    # Pipeline
    debounce_delay_seconds: float = Field(default=0.5, ge=0, le=60)
    daily_goal: int = Field(default=1000, ge=0, le=10_000)

    # Stored statistics
    data_path: Path = Path("./.wordtrail/stats.json")
    max_char_changes: int = Field(default=100, ge=1, le=10_000)
    retention_days: int = Field(default=30, ge=1, le=3650)

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"

    # Environment
    environment: str = "personal"
    enable_mock_mode: bool = False

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(
                f"log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL (got {value!r})"
            )
        return level

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode"""
        return self.environment.lower() in ["testing", "test"]

    @property
    def is_mock_mode(self) -> bool:
        """Check if statistics should live in memory only"""
        return self.enable_mock_mode or self.is_testing

    def enabled_categories(self) -> list[str]:
        """Return the CountRecord fields that contribute to the daily total."""
        flags = {
            "script_a": self.track_script_a,
            "script_b": self.track_script_b,
            "punctuation": self.track_punctuation,
            "digits": self.track_digits,
            "whitespace": self.track_whitespace,
        }
        return [name for name, enabled in flags.items() if enabled]


def load_settings(**overrides: Any) -> Settings:
    """Build settings, turning validation failures into ``ConfigurationError``.

    Each failing field is reported as ``field: message`` so the settings
    boundary can show it to the user without a traceback.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        messages = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigurationError("; ".join(messages)) from e


_SETTINGS_LOCK = RLock()
_SETTINGS_CACHE: Settings | None = None


def get_settings(*, refresh: bool = False) -> Settings:
    """Return a cached ``Settings`` instance.

    Parameters
    ----------
    refresh:
        When ``True`` the cached instance is discarded and a new one is created.
    """

    global _SETTINGS_CACHE

    with _SETTINGS_LOCK:
        if refresh or _SETTINGS_CACHE is None:
            _SETTINGS_CACHE = load_settings()
        return _SETTINGS_CACHE


def clear_settings_cache() -> None:
    """Clear the cached settings instance."""

    global _SETTINGS_CACHE

    with _SETTINGS_LOCK:
        _SETTINGS_CACHE = None


@contextmanager
def override_settings(**overrides: Any) -> Iterator[Settings]:
    """Temporarily override the cached settings within a context."""

    global _SETTINGS_CACHE

    with _SETTINGS_LOCK:
        previous_settings = _SETTINGS_CACHE

    base_settings = previous_settings or load_settings()
    patched_settings = base_settings.model_copy(update=overrides)

    with _SETTINGS_LOCK:
        _SETTINGS_CACHE = patched_settings

    try:
        yield patched_settings
    finally:
        with _SETTINGS_LOCK:
            _SETTINGS_CACHE = previous_settings
