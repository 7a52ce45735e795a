"""
Tournament match synchronization: one calendar slot per scheduled match.
"""
import logging
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from arena_engine.models.court import Court
from arena_engine.models.match import Match
from arena_engine.models.participant import Participant
from arena_engine.models.reservation_slot import ReservationSlot, SlotSourceType
from arena_engine.models.tournament import UNPUBLISHED_TOURNAMENT_STATUSES, TournamentScheduleSource
from arena_engine.services.slot_reconciler import SyncWarning, reconcile, warn
from arena_engine.utils.courts import booking_minutes_for, index_courts
from arena_engine.utils.slot_ids import match_slot_id
from arena_engine.utils.time_utils import parse_clock

logger = logging.getLogger(__name__)

UNKNOWN_PARTICIPANT = "TBD"


def match_label(match: Match, participants_by_id: Dict[str, Participant]) -> str:
    names = []
    for pid in match.participant_ids:
        participant = participants_by_id.get(pid) if pid else None
        names.append(participant.name if participant else UNKNOWN_PARTICIPANT)
    return f"Match: {names[0]} vs {names[1]}"


def tournament_slots(
    tournament: TournamentScheduleSource,
    courts: Optional[Iterable[Court]] = None,
    warnings: Optional[List[SyncWarning]] = None,
) -> List[ReservationSlot]:
    if tournament.status in UNPUBLISHED_TOURNAMENT_STATUSES:
        return []

    courts_by_id = index_courts(courts)
    participants_by_id = {p.id: p for p in tournament.participants}
    slots = []
    for match in tournament.matches:
        # Unscheduled matches are normal while a tournament runs
        if not match.is_schedulable:
            continue
        try:
            start = parse_clock(match.start_time)
        except ValueError as exc:
            warn(warnings, "invalid_time", f"match {match.id} skipped: {exc}", tournament.id)
            continue
        starts_at = datetime.combine(match.date, start)
        ends_at = starts_at + timedelta(minutes=booking_minutes_for(match.court_id, courts_by_id))
        slots.append(
            ReservationSlot(
                id=match_slot_id(tournament.id, match.id),
                court_id=match.court_id,
                date=match.date,
                start_time=start,
                end_time=ends_at.time(),
                source_type=SlotSourceType.tournament_match,
                source_id=tournament.id,
                label=match_label(match, participants_by_id),
            )
        )
    return slots


def sync_tournament_slots(
    tournament: TournamentScheduleSource,
    all_slots: Sequence[ReservationSlot],
    courts: Optional[Iterable[Court]] = None,
    warnings: Optional[List[SyncWarning]] = None,
) -> List[ReservationSlot]:
    """Replace the tournament's slots in `all_slots` with one slot per fully scheduled match."""
    slots = tournament_slots(tournament, courts, warnings)
    return reconcile(SlotSourceType.tournament_match, tournament.id, all_slots, slots)
