"""Per-key trailing debounce for document change notifications."""

import asyncio
from collections.abc import Awaitable, Callable

import structlog

logger = structlog.get_logger(__name__)


class Debouncer:
    """Run ``callback(key)`` once a key has been quiet for ``delay`` seconds.

    Every ``trigger`` restarts the quiet period for that key, so a burst of
    edits to one document produces a single callback with the document in
    its final state. Keys are independent of each other.
    """

    def __init__(
        self, delay: float, callback: Callable[[str], Awaitable[object]]
    ) -> None:
        if delay < 0:
            raise ValueError("delay must not be negative")
        self.delay = delay
        self._callback = callback
        self._timers: dict[str, asyncio.Task[None]] = {}
        self._running: set[asyncio.Task[None]] = set()

    def trigger(self, key: str) -> None:
        """Schedule (or reschedule) the callback for ``key``.

        Must be called from within a running event loop.
        """
        pending = self._timers.pop(key, None)
        if pending is not None and not pending.done():
            pending.cancel()
        self._timers[key] = asyncio.create_task(self._wait_then_run(key))

    async def _wait_then_run(self, key: str) -> None:
        await asyncio.sleep(self.delay)
        # The callback runs in its own task so a later trigger for the same
        # key cannot cancel an analysis that has already started.
        current = asyncio.current_task()
        if self._timers.get(key) is current:
            del self._timers[key]
        run = asyncio.create_task(self._run(key))
        self._running.add(run)
        run.add_done_callback(self._running.discard)

    async def _run(self, key: str) -> None:
        try:
            await self._callback(key)
        except Exception as e:
            logger.error("Debounced callback failed", key=key, error=str(e))

    @property
    def pending(self) -> list[str]:
        """Keys still inside their quiet period"""
        return [key for key, task in self._timers.items() if not task.done()]

    async def flush(self) -> None:
        """Wait for every scheduled and running callback to finish."""
        while self._timers or self._running:
            tasks = list(self._timers.values()) + list(self._running)
            await asyncio.gather(*tasks, return_exceptions=True)
            self._timers = {k: t for k, t in self._timers.items() if not t.done()}

    async def cancel(self) -> None:
        """Drop pending triggers and wait for running callbacks."""
        for task in self._timers.values():
            task.cancel()
        await asyncio.gather(*self._timers.values(), return_exceptions=True)
        self._timers.clear()
        if self._running:
            await asyncio.gather(*list(self._running), return_exceptions=True)
