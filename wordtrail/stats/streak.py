"""Consecutive writing-day tracking."""

from datetime import date

from wordtrail.stats.models import StreakData
from wordtrail.stats.store import StatsStore
from wordtrail.utils.dates import days_between, to_date_key
from wordtrail.utils.mixins import LoggerMixin


class StreakTracker(LoggerMixin):
    """Advances the streak stored in a StatsStore.

    States: uninitialized (``last_date == ""``) and active. Repeated calls
    for the same day change nothing; a day that precedes ``last_date`` is
    ignored and logged.
    """

    def __init__(self, store: StatsStore):
        self.store = store

    def advance(self, today: str | date) -> StreakData:
        today_key = to_date_key(today) if isinstance(today, date) else today
        streak = self.store.streak_for_update()

        if not streak.is_initialized:
            streak.current = 1
            streak.longest = max(streak.longest, 1)
            streak.last_date = today_key
            self.logger.info("Streak started", date=today_key)
            return streak.model_copy()

        diff = days_between(streak.last_date, today_key)

        if diff == 1:
            streak.current += 1
            if streak.current > streak.longest:
                streak.longest = streak.current
            streak.last_date = today_key
            self.logger.info(
                "Streak extended", current=streak.current, longest=streak.longest
            )
        elif diff > 1:
            streak.current = 1
            streak.last_date = today_key
            self.logger.info("Streak broken, restarting", gap_days=diff)
        elif diff < 0:
            self.logger.warning(
                "streak_date_regression",
                last_date=streak.last_date,
                today=today_key,
                diff_days=diff,
            )

        return streak.model_copy()
