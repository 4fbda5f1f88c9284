"""Read-only summary views for the presentation layer."""

from datetime import date

from pydantic import BaseModel

from wordtrail.stats.models import DailyStats, StreakData
from wordtrail.stats.store import StatsStore
from wordtrail.utils.dates import recent_days, to_date_key

# Categories shown in the share breakdown; whitespace is excluded.
SHARE_FIELDS = ("script_a", "script_b", "punctuation", "digits")


class CalendarDay(BaseModel):
    date: str
    total: int
    completed: bool


class StatsSummary(BaseModel):
    """Figures behind the statistics panel and the calendar heat view."""

    today: DailyStats | None
    streak: StreakData
    daily_goal: int
    goal_progress: float  # percent, capped at 100
    characters_without_whitespace: int
    characters_with_whitespace: int
    category_shares: dict[str, float]  # percent of characters_without_whitespace
    calendar: list[CalendarDay]
    active_days: int
    period_total: int
    average_per_active_day: float
    best_day: CalendarDay | None


def percentage(value: int, total: int, decimals: int = 1) -> float:
    if total == 0:
        return 0.0
    return round(value / total * 100, decimals)


def build_summary(
    store: StatsStore, today: date, daily_goal: int, days: int = 30
) -> StatsSummary:
    """Summarise ``days`` calendar days ending at ``today``."""
    days_view = store.days
    today_stats = store.get_day(to_date_key(today))

    without_ws = 0
    shares: dict[str, float] = {}
    if today_stats:
        without_ws = sum(getattr(today_stats, name) for name in SHARE_FIELDS)
        shares = {
            name: percentage(getattr(today_stats, name), without_ws)
            for name in SHARE_FIELDS
        }
    with_ws = without_ws + (today_stats.whitespace if today_stats else 0)

    today_total = today_stats.total if today_stats else 0
    progress = min(100.0, percentage(today_total, daily_goal)) if daily_goal else 0.0

    calendar = []
    for day in recent_days(today, days):
        stats = days_view.get(to_date_key(day))
        calendar.append(
            CalendarDay(
                date=to_date_key(day),
                total=stats.total if stats else 0,
                completed=stats.completed if stats else False,
            )
        )

    active = [entry for entry in calendar if entry.completed]
    period_total = sum(entry.total for entry in calendar)
    best_day = max(active, key=lambda entry: entry.total) if active else None

    return StatsSummary(
        today=today_stats,
        streak=store.streak,
        daily_goal=daily_goal,
        goal_progress=progress,
        characters_without_whitespace=without_ws,
        characters_with_whitespace=with_ws,
        category_shares=shares,
        calendar=calendar,
        active_days=len(active),
        period_total=period_total,
        average_per_active_day=round(period_total / len(active), 1) if active else 0.0,
        best_day=best_day,
    )
