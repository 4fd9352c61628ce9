"""Data models."""

from dataclasses import asdict, dataclass

from bs4 import Tag


@dataclass
class FightCandidate:
    location: str  # never empty, "Unknown Location" when no place row preceded
    day_token: str  # bare day of month as found in td.date
    year: int  # page month/year context
    month: int
    fighter1_cell: Tag
    fighter2_cell: Tag
    result_cell: Tag
    row: Tag


@dataclass
class FightRecord:
    id: str
    date: str  # YYYY-MM-DD
    fighter1: str
    fighter2: str
    result: str
    location: str
    parsed_at: str  # RFC3339

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class ProcessingOutcome:
    index: int
    record: FightRecord | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.record is not None
