"""Data models for text analysis results."""

from pydantic import BaseModel, ConfigDict, Field

COUNT_FIELDS = ("script_a", "script_b", "punctuation", "digits", "whitespace", "words")
# Character categories; ``words`` is a tally of runs, not of characters.
CHARACTER_FIELDS = COUNT_FIELDS[:5]


class CountRecord(BaseModel):
    """One classification pass over content text."""

    model_config = ConfigDict(frozen=True)

    script_a: int = Field(default=0, ge=0)  # logographic characters
    script_b: int = Field(default=0, ge=0)  # ASCII alphabetic characters
    punctuation: int = Field(default=0, ge=0)
    digits: int = Field(default=0, ge=0)
    whitespace: int = Field(default=0, ge=0)
    words: int = Field(default=0, ge=0)

    @property
    def characters(self) -> int:
        """Sum of every character category, ignoring configuration."""
        return sum(getattr(self, name) for name in CHARACTER_FIELDS)

    def total_for(self, enabled: list[str]) -> int:
        """Sum of the character categories named in ``enabled``."""
        return sum(getattr(self, name) for name in CHARACTER_FIELDS if name in enabled)


class AccuracyReport(BaseModel):
    """Tracked counts next to naive counts over the unstripped document."""

    tracked: CountRecord
    tracked_total: int
    naive: CountRecord
    naive_total: int
    simple_word_count: int
    raw_length: int
    stripped_length: int
