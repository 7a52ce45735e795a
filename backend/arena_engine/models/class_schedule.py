from datetime import date
from typing import List, Optional

from sqlmodel import Field, SQLModel


class WeeklyRule(SQLModel):
    day_of_week: int  # 0=Sunday ... 6=Saturday
    start_time: str  # "HH:MM"
    end_time: str  # "HH:MM"; not after start_time means the block crosses midnight


class RecurringClass(SQLModel):
    """A recurring class (turma) definition: weekly rules over a validity window on one court."""

    id: str
    name: str = ""
    court_id: str
    rules: List[WeeklyRule] = Field(default_factory=list)
    start_date: date
    end_date: Optional[date] = None  # Open-ended classes are capped (see config.OPEN_ENDED_YEARS)
