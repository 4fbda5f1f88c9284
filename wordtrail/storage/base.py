"""Persistence interface for statistics snapshots."""

from typing import Any, Protocol, runtime_checkable

SNAPSHOT_VERSION = 1


@runtime_checkable
class StatsRepository(Protocol):
    """Stores the whole statistics snapshot as one blob.

    ``load`` returns whatever was last saved (``None`` when nothing was),
    without validating it; the stats store repairs malformed content.
    """

    async def load(self) -> Any: ...

    async def save(self, snapshot: dict[str, Any]) -> None: ...
