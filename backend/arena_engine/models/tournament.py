from enum import Enum
from typing import List

from sqlmodel import Field, SQLModel

from arena_engine.models.match import Match
from arena_engine.models.participant import Participant


class TournamentStatus(str, Enum):
    planned = "planned"
    registration_open = "registration_open"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


# Matches of a tournament in these states never reach the calendar
UNPUBLISHED_TOURNAMENT_STATUSES = {TournamentStatus.planned, TournamentStatus.cancelled}


class TournamentModality(str, Enum):
    individual = "individual"
    doubles = "doubles"
    team = "team"


class TournamentScheduleSource(SQLModel):
    id: str
    name: str = ""
    status: TournamentStatus = TournamentStatus.planned
    participants: List[Participant] = Field(default_factory=list)
    matches: List[Match] = Field(default_factory=list)
