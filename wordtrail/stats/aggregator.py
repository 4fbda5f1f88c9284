"""Daily aggregation of analysis results."""

import time
from collections.abc import Callable
from datetime import date

from wordtrail.analysis.models import CountRecord
from wordtrail.config import Settings, get_settings
from wordtrail.stats.models import ChangeAction, CharChange, DailyStats
from wordtrail.stats.store import StatsStore
from wordtrail.stats.streak import StreakTracker
from wordtrail.utils.dates import to_date_key
from wordtrail.utils.mixins import LoggerMixin


def _now_millis() -> int:
    return int(time.time() * 1000)


class DailyAggregator(LoggerMixin):
    """Writes the latest analysis result into today's DailyStats.

    Updates overwrite the day's counters rather than adding to them: the day
    always reflects the most recent analysed document state. Two documents
    edited on the same day therefore do not sum; the last one wins.
    """

    def __init__(
        self,
        store: StatsStore,
        streak_tracker: StreakTracker | None = None,
        settings: Settings | None = None,
        today_provider: Callable[[], date] | None = None,
        clock_millis: Callable[[], int] = _now_millis,
    ):
        self.store = store
        self.streak_tracker = streak_tracker or StreakTracker(store)
        self.settings = settings or get_settings()
        self.today_provider = today_provider or store.today_provider
        self.clock_millis = clock_millis

    def compute_total(self, record: CountRecord) -> int:
        """Sum of the categories enabled in the current settings."""
        return record.total_for(self.settings.enabled_categories())

    async def update(self, source_id: str, record: CountRecord) -> DailyStats:
        """Record ``record`` for today and advance the streak.

        Raises:
            PersistenceError: saving failed; memory already holds the update
                and ``StatsStore.save`` may be retried on its own.
        """
        today = to_date_key(self.today_provider())
        total = self.compute_total(record)

        stats = self.store.day_for_update(today)
        stats.script_a = record.script_a
        stats.script_b = record.script_b
        stats.punctuation = record.punctuation
        stats.digits = record.digits
        stats.whitespace = record.whitespace
        stats.words = record.words
        stats.total = total
        stats.completed = total > 0

        stats.char_changes.append(
            CharChange(
                timestamp=self.clock_millis(),
                action=ChangeAction.ADD,
                source_id=source_id,
                script_a=record.script_a,
                script_b=record.script_b,
                punctuation=record.punctuation,
                digits=record.digits,
                whitespace=record.whitespace,
                words=record.words,
                total=total,
            )
        )
        limit = self.settings.max_char_changes
        if len(stats.char_changes) > limit:
            del stats.char_changes[:-limit]

        self.logger.info(
            "Daily stats updated",
            date=today,
            source_id=source_id,
            total=total,
            words=record.words,
            changes=len(stats.char_changes),
        )

        before = self.store.streak
        try:
            await self.store.save()
        finally:
            # The streak advances whether or not the save succeeded.
            after = self.streak_tracker.advance(today)

        if after != before:
            await self.store.save()

        return stats.model_copy(deep=True)
