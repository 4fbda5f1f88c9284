"""Tests for summary views"""

import pytest

from wordtrail.stats import build_summary
from wordtrail.stats.summary import percentage


@pytest.fixture
def populated(store):
    today = store.day_for_update("2024-01-15")
    today.script_a = 10
    today.script_b = 20
    today.punctuation = 5
    today.digits = 5
    today.whitespace = 10
    today.total = 40
    today.completed = True

    yesterday = store.day_for_update("2024-01-14")
    yesterday.total = 100
    yesterday.completed = True

    store.day_for_update("2024-01-10")

    streak = store.streak_for_update()
    streak.current, streak.longest, streak.last_date = 2, 2, "2024-01-15"
    return store


class TestBuildSummary:
    """Statistics panel figures"""

    def test_calendar_is_zero_filled(self, populated, today):
        summary = build_summary(populated, today, daily_goal=1000, days=7)

        assert [d.date for d in summary.calendar][0] == "2024-01-09"
        assert [d.date for d in summary.calendar][-1] == "2024-01-15"
        assert len(summary.calendar) == 7
        by_date = {d.date: d for d in summary.calendar}
        assert by_date["2024-01-13"].total == 0
        assert by_date["2024-01-13"].completed is False

    def test_character_figures(self, populated, today):
        summary = build_summary(populated, today, daily_goal=1000)

        assert summary.characters_without_whitespace == 40
        assert summary.characters_with_whitespace == 50
        assert summary.category_shares == {
            "script_a": 25.0,
            "script_b": 50.0,
            "punctuation": 12.5,
            "digits": 12.5,
        }

    @pytest.mark.parametrize(("goal", "progress"), [(80, 50.0), (20, 100.0), (0, 0.0)])
    def test_goal_progress(self, populated, today, goal, progress):
        assert build_summary(populated, today, daily_goal=goal).goal_progress == progress

    def test_period_aggregates(self, populated, today):
        summary = build_summary(populated, today, daily_goal=1000, days=7)

        assert summary.active_days == 2
        assert summary.period_total == 140
        assert summary.average_per_active_day == 70.0
        assert summary.best_day.date == "2024-01-14"
        assert summary.streak.current == 2

    def test_today_is_a_copy(self, populated, today):
        summary = build_summary(populated, today, daily_goal=1000)
        summary.today.total = 0

        assert populated.get_day("2024-01-15").total == 40

    def test_empty_store(self, store, today):
        summary = build_summary(store, today, daily_goal=1000)

        assert summary.today is None
        assert summary.category_shares == {}
        assert summary.characters_with_whitespace == 0
        assert summary.best_day is None
        assert summary.average_per_active_day == 0.0
        assert len(summary.calendar) == 30


def test_percentage():
    assert percentage(1, 3) == 33.3
    assert percentage(5, 0) == 0.0
    assert percentage(1, 8, decimals=2) == 12.5
