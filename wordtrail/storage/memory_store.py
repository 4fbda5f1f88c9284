"""In-memory persistence, for mock mode and tests."""

import copy
from typing import Any


class InMemoryStatsRepository:
    """Holds a deep copy of the last saved snapshot."""

    def __init__(self, initial: Any = None):
        self._data = copy.deepcopy(initial)
        self.save_count = 0

    async def load(self) -> Any:
        return copy.deepcopy(self._data)

    async def save(self, snapshot: dict[str, Any]) -> None:
        self._data = copy.deepcopy(snapshot)
        self.save_count += 1

    @property
    def data(self) -> Any:
        """The stored snapshot as last saved."""
        return copy.deepcopy(self._data)
