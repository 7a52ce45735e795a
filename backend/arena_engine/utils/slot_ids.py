"""
Deterministic reservation slot ids.

Ids are built only from the originating record's identity and the slot's
calendar position, never from clocks or counters, so repeated synchronization
of the same definition yields identical ids.
"""
from datetime import date, datetime


def class_slot_id(class_id: str, starts_at: datetime) -> str:
    return f"class_{class_id}_{starts_at:%Y%m%d}_{starts_at:%H%M}"


def match_slot_id(tournament_id: str, match_id: str) -> str:
    return f"tournament_{tournament_id}_match_{match_id}"


def event_slot_id(event_id: str, court_id: str, day: date) -> str:
    return f"event_{event_id}_{court_id}_{day:%Y%m%d}"
