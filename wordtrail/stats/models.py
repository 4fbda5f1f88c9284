"""Data models for daily writing statistics."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from wordtrail.analysis.models import CountRecord


class ChangeAction(str, Enum):
    """Change log actions; the pipeline only produces ADD."""

    ADD = "add"
    DELETE = "delete"


class CharChange(BaseModel):
    """Audit entry: the counts one document produced at one moment."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    timestamp: int = Field(ge=0)  # epoch milliseconds
    action: ChangeAction = ChangeAction.ADD
    source_id: str
    script_a: int = Field(default=0, ge=0)
    script_b: int = Field(default=0, ge=0)
    punctuation: int = Field(default=0, ge=0)
    digits: int = Field(default=0, ge=0)
    whitespace: int = Field(default=0, ge=0)
    words: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


class DailyStats(BaseModel):
    """Statistics for one calendar day, overwritten by every update."""

    date: str  # YYYY-MM-DD, local time
    script_a: int = Field(default=0, ge=0)
    script_b: int = Field(default=0, ge=0)
    punctuation: int = Field(default=0, ge=0)
    digits: int = Field(default=0, ge=0)
    whitespace: int = Field(default=0, ge=0)
    words: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)
    completed: bool = False
    char_changes: list[CharChange] = Field(default_factory=list)

    def counts(self) -> CountRecord:
        return CountRecord(
            script_a=self.script_a,
            script_b=self.script_b,
            punctuation=self.punctuation,
            digits=self.digits,
            whitespace=self.whitespace,
            words=self.words,
        )


class StreakData(BaseModel):
    """Consecutive writing days ending at ``last_date``."""

    current: int = Field(default=0, ge=0)
    longest: int = Field(default=0, ge=0)
    last_date: str = ""  # empty until the first update

    @property
    def is_initialized(self) -> bool:
        return self.last_date != ""
