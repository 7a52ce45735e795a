"""
Schedule Orchestrator - one synchronization pass over several sources.

Applies the class, tournament and event synchronizers in that order against a
single baseline slot list, so one save transaction produces one consistent
result. Each source is reconciled independently; a problem with one source
is reported as a warning and never aborts the others.
"""
import logging
from typing import Iterable, List, Optional, Sequence

from arena_engine.models.class_schedule import RecurringClass
from arena_engine.models.court import Court
from arena_engine.models.private_event import PrivateEventScheduleSource
from arena_engine.models.reservation_slot import ReservationSlot
from arena_engine.models.tournament import TournamentScheduleSource
from arena_engine.services.class_sync import sync_class_slots
from arena_engine.services.event_sync import sync_event_slots
from arena_engine.services.slot_reconciler import SyncWarning
from arena_engine.services.tournament_sync import sync_tournament_slots

logger = logging.getLogger(__name__)


class ScheduleSyncResult:
    """Complete result of a synchronization pass"""

    def __init__(self, slots: List[ReservationSlot]):
        self.slots = slots
        self.warnings: List[SyncWarning] = []
        self.sources_synced = 0

    def to_dict(self):
        return {
            "slots": [s.model_dump(mode="json") for s in self.slots],
            "warnings": [w.to_dict() for w in self.warnings],
            "sources_synced": self.sources_synced,
        }


def sync_schedule(
    all_slots: Sequence[ReservationSlot],
    classes: Iterable[RecurringClass] = (),
    tournaments: Iterable[TournamentScheduleSource] = (),
    events: Iterable[PrivateEventScheduleSource] = (),
    courts: Optional[Iterable[Court]] = None,
    sub_slot_minutes: Optional[int] = None,
) -> ScheduleSyncResult:
    """
    Synchronize every given source into `all_slots`.

    Steps (in order):
    1. Recurring classes
    2. Tournament matches (court durations from `courts`)
    3. Private events
    """
    court_list = list(courts) if courts is not None else None
    result = ScheduleSyncResult(list(all_slots))

    for definition in classes:
        result.slots = sync_class_slots(definition, result.slots, result.warnings, sub_slot_minutes)
        result.sources_synced += 1
    for tournament in tournaments:
        result.slots = sync_tournament_slots(tournament, result.slots, court_list, result.warnings)
        result.sources_synced += 1
    for event in events:
        result.slots = sync_event_slots(event, result.slots, result.warnings)
        result.sources_synced += 1

    logger.info(
        "Synchronized %d source(s): %d slots, %d warning(s)",
        result.sources_synced,
        len(result.slots),
        len(result.warnings),
    )
    return result
