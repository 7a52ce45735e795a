from arena_engine.models.class_schedule import RecurringClass, WeeklyRule
from arena_engine.models.court import Court
from arena_engine.models.match import Match
from arena_engine.models.participant import Participant, PlayerEntry
from arena_engine.models.private_event import EventStatus, PrivateEventScheduleSource
from arena_engine.models.reservation_slot import ReservationSlot, SlotSourceType
from arena_engine.models.tournament import TournamentModality, TournamentScheduleSource, TournamentStatus

__all__ = [
    "Court",
    "EventStatus",
    "Match",
    "Participant",
    "PlayerEntry",
    "PrivateEventScheduleSource",
    "RecurringClass",
    "ReservationSlot",
    "SlotSourceType",
    "TournamentModality",
    "TournamentScheduleSource",
    "TournamentStatus",
    "WeeklyRule",
]
