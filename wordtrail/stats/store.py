"""Statistics store: day records and streak state with a load/save lifecycle."""

import math
from collections.abc import Callable
from datetime import date, timedelta
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from wordtrail.analysis.models import COUNT_FIELDS
from wordtrail.exceptions import PersistenceError
from wordtrail.stats.models import CharChange, DailyStats, StreakData
from wordtrail.storage.base import SNAPSHOT_VERSION, StatsRepository
from wordtrail.utils.dates import parse_date_key, validate_date_key
from wordtrail.utils.mixins import LoggerMixin

_STORED_COUNT_FIELDS = (*COUNT_FIELDS, "total")


def _coerce_count(value: Any) -> int | None:
    """Return a usable counter, or None when ``value`` must be defaulted."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if value < 0:
        return None
    return int(value)


class StatsStore(LoggerMixin):
    """Holds every DailyStats by date plus the StreakData.

    The aggregator and the streak tracker mutate state through
    ``day_for_update`` and ``streak_for_update``; everything else reads
    copies. ``load`` repairs malformed stored data field by field and never
    fails on content.
    """

    def __init__(
        self,
        repository: StatsRepository,
        retention_days: int = 30,
        max_char_changes: int = 100,
        today_provider: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.retention_days = retention_days
        self.max_char_changes = max_char_changes
        self.today_provider = today_provider
        self._days: dict[str, DailyStats] = {}
        self._streak = StreakData()

    # === Read-only access ===

    @property
    def days(self) -> MappingProxyType[str, DailyStats]:
        """Live read-only view of the day records (do not mutate the values)."""
        return MappingProxyType(self._days)

    def get_day(self, key: str) -> DailyStats | None:
        stats = self._days.get(key)
        return stats.model_copy(deep=True) if stats else None

    def get_all_stats(self) -> dict[str, DailyStats]:
        return {key: stats.model_copy(deep=True) for key, stats in sorted(self._days.items())}

    @property
    def streak(self) -> StreakData:
        return self._streak.model_copy()

    # === Mutation access for the aggregator and streak tracker ===

    def day_for_update(self, key: str) -> DailyStats:
        """Return the live record for ``key``, creating an empty one if needed."""
        stats = self._days.get(key)
        if stats is None:
            stats = DailyStats(date=key)
            self._days[key] = stats
            self.logger.debug("Created day record", date=key)
        return stats

    def streak_for_update(self) -> StreakData:
        return self._streak

    def recompute_completed(self) -> None:
        """Refresh ``completed`` on every day after a settings change."""
        for stats in self._days.values():
            stats.completed = stats.total > 0

    # === Lifecycle ===

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": SNAPSHOT_VERSION,
            "daily_stats": [
                stats.model_dump(mode="json") for _, stats in sorted(self._days.items())
            ],
            "streak": self._streak.model_dump(mode="json"),
        }

    async def save(self) -> None:
        """Write the full snapshot; raises PersistenceError on failure."""
        try:
            await self.repository.save(self.snapshot())
        except PersistenceError:
            raise
        except Exception as e:
            self.logger.error("Failed to save statistics", error=str(e))
            raise PersistenceError(f"Failed to save statistics: {e}") from e

    async def load(self) -> None:
        """Replace in-memory state with the repaired stored snapshot."""
        try:
            raw = await self.repository.load()
        except PersistenceError:
            raise
        except Exception as e:
            self.logger.error("Failed to load statistics", error=str(e))
            raise PersistenceError(f"Failed to load statistics: {e}") from e

        if raw is None:
            self._days = {}
            self._streak = StreakData()
            self.logger.info("No stored statistics, starting empty")
            return

        if isinstance(raw, list):
            # Legacy layout: only the day records were stored.
            raw_days: Any = raw
            raw_streak: Any = None
        elif isinstance(raw, dict):
            raw_days = raw.get("daily_stats", [])
            raw_streak = raw.get("streak")
        else:
            self.logger.warning(
                "Stored statistics have an unknown layout, ignoring them",
                type=type(raw).__name__,
            )
            raw_days, raw_streak = [], None

        if not isinstance(raw_days, list):
            self.logger.warning("Stored daily_stats is not a list, ignoring it")
            raw_days = []

        today = self.today_provider()
        cutoff = today - timedelta(days=self.retention_days)
        days: dict[str, DailyStats] = {}
        expired = 0
        for item in raw_days:
            stats = self._sanitize_day(item)
            if stats is None:
                continue
            day = parse_date_key(stats.date)
            if not cutoff <= day <= today:
                expired += 1
                continue
            days[stats.date] = stats

        self._days = days
        self._streak = self._sanitize_streak(raw_streak)

        self.logger.info(
            "Statistics loaded",
            days=len(days),
            outside_retention=expired,
            retention_days=self.retention_days,
            streak_current=self._streak.current,
        )

    async def reset_all(self) -> None:
        """Clear every day record and the streak, then persist."""
        self._days = {}
        self._streak = StreakData()
        self.logger.info("All statistics reset")
        await self.save()

    # === Repair of stored data ===

    def _sanitize_day(self, item: Any) -> DailyStats | None:
        if not isinstance(item, dict):
            self.logger.warning("Dropping stored day that is not an object", item=repr(item)[:80])
            return None

        key = item.get("date")
        valid, message = validate_date_key(key)
        if not valid:
            self.logger.warning("Dropping stored day with invalid date", reason=message)
            return None

        fields: dict[str, Any] = {"date": key}
        for name in _STORED_COUNT_FIELDS:
            raw_value = item.get(name, 0)
            value = _coerce_count(raw_value)
            if value is None:
                self.logger.warning(
                    "Defaulting invalid stored counter",
                    date=key,
                    field=name,
                    value=repr(raw_value),
                )
                value = 0
            fields[name] = value

        completed = item.get("completed", False)
        if not isinstance(completed, bool):
            self.logger.warning("Defaulting invalid completed flag", date=key)
            completed = False
        fields["completed"] = completed

        raw_changes = item.get("char_changes", [])
        if not isinstance(raw_changes, list):
            self.logger.warning("Dropping invalid change log", date=key)
            raw_changes = []
        changes: list[CharChange] = []
        for raw_change in raw_changes:
            try:
                changes.append(CharChange.model_validate(raw_change))
            except ValidationError as e:
                self.logger.warning(
                    "Dropping malformed change entry", date=key, error_count=e.error_count()
                )
        fields["char_changes"] = changes[-self.max_char_changes :]

        return DailyStats(**fields)

    def _sanitize_streak(self, raw: Any) -> StreakData:
        if raw is None:
            return StreakData()
        if not isinstance(raw, dict):
            self.logger.warning("Stored streak is not an object, resetting it")
            return StreakData()

        current = _coerce_count(raw.get("current", 0))
        longest = _coerce_count(raw.get("longest", 0))
        last_date = raw.get("last_date", "")
        if current is None or longest is None:
            self.logger.warning("Defaulting invalid stored streak counters")
        current = current or 0
        longest = longest or 0

        if last_date != "":
            valid, message = validate_date_key(last_date)
            if not valid:
                self.logger.warning(
                    "Stored streak has an invalid date, resetting it", reason=message
                )
                return StreakData()
        elif current:
            self.logger.warning("Stored streak has counts but no date, clearing current")
            current = 0

        if current > longest:
            self.logger.warning(
                "Stored streak longer than its maximum, repairing",
                current=current,
                longest=longest,
            )
            longest = current

        return StreakData(current=current, longest=longest, last_date=last_date)
