import datetime as dt
from typing import List, Optional

from sqlmodel import Field, SQLModel


def _empty_pair() -> list:
    return [None, None]


class Match(SQLModel):
    """A single node of a single-elimination bracket."""

    id: str
    category_id: str
    round: int  # 1 = first round
    position: int  # Index within the round; parity selects the slot in the successor

    # Slot 0 / slot 1. Null until seeded, filled by a bye, or advanced into.
    participant_ids: List[Optional[str]] = Field(default_factory=_empty_pair, min_length=2, max_length=2)
    score: List[Optional[int]] = Field(default_factory=_empty_pair, min_length=2, max_length=2)
    winner_id: Optional[str] = None

    # Null only for the final
    next_match_id: Optional[str] = None
    # Feeder match for each slot (null when the slot is seeded directly)
    source_match_ids: List[Optional[str]] = Field(default_factory=_empty_pair, min_length=2, max_length=2)

    # Assigned later by staff; all three are required before the match reaches the calendar
    court_id: Optional[str] = None
    date: Optional[dt.date] = None
    start_time: Optional[str] = None  # "HH:MM"

    @property
    def is_decided(self) -> bool:
        return self.winner_id is not None

    @property
    def is_schedulable(self) -> bool:
        return bool(self.court_id and self.date and self.start_time)
