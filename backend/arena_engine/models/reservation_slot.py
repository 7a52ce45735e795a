import datetime as dt
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel


class SlotSourceType(str, Enum):
    class_session = "class"
    tournament_match = "tournament_match"
    private_event = "private_event"
    ad_hoc = "ad_hoc"


class ReservationSlot(SQLModel):
    """A concrete block of one court on one calendar date.

    `id` is derived from the originating definition so that re-running a
    synchronizer replaces slots instead of duplicating them.
    """

    id: str
    court_id: str
    date: dt.date
    start_time: dt.time
    end_time: dt.time  # Not after start_time means the slot ends on the following day
    source_type: SlotSourceType = SlotSourceType.ad_hoc
    source_id: Optional[str] = None  # Back-reference to the class / tournament / event
    label: str = ""

    def starts_at(self) -> dt.datetime:
        return dt.datetime.combine(self.date, self.start_time)

    def ends_at(self) -> dt.datetime:
        end = dt.datetime.combine(self.date, self.end_time)
        if self.end_time <= self.start_time:
            end += dt.timedelta(days=1)
        return end
