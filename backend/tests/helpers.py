"""Record builders shared by the engine tests."""
from datetime import date
from typing import List, Optional

from arena_engine.models.participant import Participant, PlayerEntry
from arena_engine.models.reservation_slot import ReservationSlot, SlotSourceType
from arena_engine.utils.time_utils import parse_clock


def make_participants(n: int, ranking: Optional[List[float]] = None, category_id: str = "cat1") -> List[Participant]:
    """n individual entrants p0..p{n-1}, checked in, optionally with ranking points."""
    participants = []
    for i in range(n):
        participants.append(
            Participant(
                id=f"p{i}",
                category_id=category_id,
                name=f"Player {i}",
                players=[PlayerEntry(name=f"Player {i}")],
                ranking_points=ranking[i] if ranking else None,
                checked_in=True,
            )
        )
    return participants


def make_slot(
    slot_id: str,
    court_id: str,
    day: date,
    start: str,
    end: str,
    source_id: Optional[str] = None,
    source_type: SlotSourceType = SlotSourceType.ad_hoc,
) -> ReservationSlot:
    return ReservationSlot(
        id=slot_id,
        court_id=court_id,
        date=day,
        start_time=parse_clock(start),
        end_time=parse_clock(end),
        source_type=source_type,
        source_id=source_id,
        label=slot_id,
    )
