"""Persistence backends for statistics snapshots."""

from wordtrail.storage.base import SNAPSHOT_VERSION, StatsRepository
from wordtrail.storage.json_store import JsonFileStatsRepository
from wordtrail.storage.memory_store import InMemoryStatsRepository

__all__ = [
    "SNAPSHOT_VERSION",
    "InMemoryStatsRepository",
    "JsonFileStatsRepository",
    "StatsRepository",
]
