"""Daily statistics, streak tracking and summaries."""

from wordtrail.stats.aggregator import DailyAggregator
from wordtrail.stats.models import ChangeAction, CharChange, DailyStats, StreakData
from wordtrail.stats.store import StatsStore
from wordtrail.stats.streak import StreakTracker
from wordtrail.stats.summary import CalendarDay, StatsSummary, build_summary

__all__ = [
    "CalendarDay",
    "ChangeAction",
    "CharChange",
    "DailyAggregator",
    "DailyStats",
    "StatsStore",
    "StatsSummary",
    "StreakData",
    "StreakTracker",
    "build_summary",
]
