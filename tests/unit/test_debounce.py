"""Tests for per-key debouncing"""

import pytest

from wordtrail.utils.debounce import Debouncer


@pytest.fixture
def calls():
    return []


@pytest.fixture
def debouncer(calls):
    async def record(key):
        calls.append(key)

    return Debouncer(0.01, record)


class TestDebouncer:
    """Quiet-period scheduling"""

    async def test_burst_runs_once(self, debouncer, calls):
        for _ in range(5):
            debouncer.trigger("a.md")

        await debouncer.flush()

        assert calls == ["a.md"]

    async def test_keys_are_independent(self, debouncer, calls):
        debouncer.trigger("a.md")
        debouncer.trigger("b.md")
        debouncer.trigger("a.md")

        await debouncer.flush()

        assert sorted(calls) == ["a.md", "b.md"]

    async def test_pending(self, debouncer):
        debouncer.trigger("a.md")
        assert debouncer.pending == ["a.md"]

        await debouncer.flush()
        assert debouncer.pending == []

    async def test_cancel_drops_pending(self, debouncer, calls):
        debouncer.trigger("a.md")
        await debouncer.cancel()

        assert calls == []
        assert debouncer.pending == []

    async def test_callback_error_is_contained(self, calls):
        async def failing(key):
            calls.append(key)
            raise RuntimeError("analysis failed")

        debouncer = Debouncer(0, failing)
        debouncer.trigger("a.md")
        await debouncer.flush()

        assert calls == ["a.md"]

    def test_negative_delay_rejected(self):
        async def noop(key):
            return None

        with pytest.raises(ValueError):
            Debouncer(-1, noop)
