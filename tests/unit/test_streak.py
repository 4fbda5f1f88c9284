"""Tests for streak tracking"""

from datetime import date

import pytest

from wordtrail.stats import StreakTracker


@pytest.fixture
def tracker(store):
    return StreakTracker(store)


def _seed(store, current, longest, last_date):
    streak = store.streak_for_update()
    streak.current = current
    streak.longest = longest
    streak.last_date = last_date


class TestStreakTracker:
    """Streak state transitions"""

    def test_first_day_starts_streak(self, tracker):
        streak = tracker.advance("2024-01-01")

        assert streak.current == 1
        assert streak.longest == 1
        assert streak.last_date == "2024-01-01"

    def test_first_day_keeps_existing_longest(self, tracker, store):
        _seed(store, 0, 7, "")
        streak = tracker.advance("2024-01-01")

        assert streak.current == 1
        assert streak.longest == 7

    def test_consecutive_day_extends(self, tracker, store):
        _seed(store, 3, 5, "2024-01-01")
        streak = tracker.advance("2024-01-02")

        assert streak.current == 4
        assert streak.longest == 5
        assert streak.last_date == "2024-01-02"

    def test_gap_restarts_and_keeps_longest(self, tracker, store):
        _seed(store, 3, 5, "2024-01-01")
        tracker.advance("2024-01-02")
        streak = tracker.advance("2024-01-10")

        assert streak.current == 1
        assert streak.longest == 5
        assert streak.last_date == "2024-01-10"

    def test_longest_follows_current(self, tracker, store):
        _seed(store, 2, 2, "2024-02-28")
        tracker.advance("2024-02-29")
        streak = tracker.advance("2024-03-01")

        assert streak.current == 4
        assert streak.longest == 4

    def test_same_day_is_noop(self, tracker, store):
        _seed(store, 2, 4, "2024-01-05")
        streak = tracker.advance("2024-01-05")

        assert (streak.current, streak.longest, streak.last_date) == (2, 4, "2024-01-05")

    def test_earlier_day_is_ignored(self, tracker, store):
        _seed(store, 2, 4, "2024-01-05")
        streak = tracker.advance("2024-01-03")

        assert (streak.current, streak.longest, streak.last_date) == (2, 4, "2024-01-05")

    def test_accepts_date_objects(self, tracker):
        assert tracker.advance(date(2024, 1, 1)).last_date == "2024-01-01"

    def test_returns_a_copy(self, tracker, store):
        streak = tracker.advance("2024-01-01")
        streak.current = 50

        assert store.streak.current == 1
