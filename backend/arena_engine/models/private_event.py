from datetime import date
from enum import Enum
from typing import List, Optional

from sqlmodel import Field, SQLModel


class EventStatus(str, Enum):
    quote = "quote"
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    closed = "closed"
    cancelled = "cancelled"


# Only these statuses block courts on the calendar
BOOKED_EVENT_STATUSES = {EventStatus.confirmed, EventStatus.completed}


class PrivateEventScheduleSource(SQLModel):
    """A private event (party, corporate booking, ...) occupying courts over a date range."""

    id: str
    name: str = ""
    status: EventStatus = EventStatus.quote
    start_date: date
    end_date: date
    court_ids: List[str] = Field(default_factory=list)

    # General event hours
    start_time: str  # "HH:MM"
    end_time: str
    # Court occupation window, when it differs from the event hours (setup, teardown)
    court_start_time: Optional[str] = None
    court_end_time: Optional[str] = None
