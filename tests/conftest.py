"""
Shared fixtures.

- Test environment variables are set for every test (autouse)
- The settings cache is cleared before and after each test
- The project root is put on ``sys.path`` so ``import wordtrail`` resolves
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterator
from datetime import date
from pathlib import Path
from typing import Any

import pytest
import structlog

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from wordtrail.config import Settings, clear_settings_cache, load_settings  # noqa: E402
from wordtrail.stats import StatsStore  # noqa: E402
from wordtrail.storage import InMemoryStatsRepository  # noqa: E402

FIXED_TODAY = date(2024, 1, 15)


@pytest.fixture(autouse=True)
def _test_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Point settings at a throwaway data path and the testing environment."""
    monkeypatch.setenv("WORDTRAIL_ENVIRONMENT", "testing")
    monkeypatch.setenv("WORDTRAIL_DATA_PATH", str(tmp_path / "data" / "stats.json"))
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    """Build settings with every category and word counting enabled."""

    def factory(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "track_script_a": True,
            "track_script_b": True,
            "track_punctuation": True,
            "track_digits": True,
            "track_whitespace": True,
            "show_word_count": True,
        }
        values.update(overrides)
        return load_settings(**values)

    return factory


@pytest.fixture
def all_enabled(settings_factory: Callable[..., Settings]) -> Settings:
    return settings_factory()


@pytest.fixture
def repo() -> InMemoryStatsRepository:
    return InMemoryStatsRepository()


@pytest.fixture
def store(repo: InMemoryStatsRepository) -> StatsStore:
    return StatsStore(repo, today_provider=lambda: FIXED_TODAY)


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Undo global logging configuration done by ``setup_logging``."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    structlog.reset_defaults()


@pytest.fixture
def today() -> date:
    """The fixed "today" used by ``store``."""
    return FIXED_TODAY
