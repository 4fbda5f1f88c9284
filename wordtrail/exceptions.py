"""Exceptions raised at the I/O and configuration boundaries."""


class WordTrailError(Exception):
    """Base class for WordTrail errors"""


class ConfigurationError(WordTrailError):
    """Settings failed validation"""


class ContentReadError(WordTrailError):
    """A document could not be read; no statistics were changed"""

    def __init__(self, message: str, source_id: str | None = None):
        super().__init__(message)
        self.source_id = source_id


class PersistenceError(WordTrailError):
    """Saving statistics failed after the in-memory state was already updated.

    The stored snapshot may lag behind memory until a later save succeeds.
    """
