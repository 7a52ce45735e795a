"""
Schedule synchronization endpoints.

Each request carries one source definition plus the current full slot list
(loaded by the caller); the response is the new full list to persist.
"""
from typing import List, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from arena_engine.models.class_schedule import RecurringClass
from arena_engine.models.court import Court
from arena_engine.models.private_event import PrivateEventScheduleSource
from arena_engine.models.reservation_slot import ReservationSlot
from arena_engine.models.tournament import TournamentScheduleSource
from arena_engine.services.class_sync import sync_class_slots
from arena_engine.services.conflict_report import SlotConflict, find_court_conflicts
from arena_engine.services.event_sync import sync_event_slots
from arena_engine.services.schedule_orchestrator import sync_schedule
from arena_engine.services.slot_reconciler import SyncWarning
from arena_engine.services.tournament_sync import sync_tournament_slots

router = APIRouter()


class SyncWarningResponse(BaseModel):
    code: str
    message: str
    source_id: Optional[str] = None


class SlotSyncResponse(BaseModel):
    slots: List[ReservationSlot]
    warnings: List[SyncWarningResponse] = []


class ClassSyncRequest(BaseModel):
    definition: RecurringClass
    slots: List[ReservationSlot] = []


class TournamentSyncRequest(BaseModel):
    tournament: TournamentScheduleSource
    slots: List[ReservationSlot] = []
    courts: List[Court] = []


class EventSyncRequest(BaseModel):
    event: PrivateEventScheduleSource
    slots: List[ReservationSlot] = []


class FullSyncRequest(BaseModel):
    slots: List[ReservationSlot] = []
    classes: List[RecurringClass] = []
    tournaments: List[TournamentScheduleSource] = []
    events: List[PrivateEventScheduleSource] = []
    courts: List[Court] = []


class FullSyncResponse(SlotSyncResponse):
    sources_synced: int


class ConflictRequest(BaseModel):
    slots: List[ReservationSlot]


def _response(slots: List[ReservationSlot], warnings: List[SyncWarning]) -> SlotSyncResponse:
    return SlotSyncResponse(slots=slots, warnings=[SyncWarningResponse(**w.to_dict()) for w in warnings])


@router.post("/schedule/sync/class", response_model=SlotSyncResponse)
def sync_class(
    payload: ClassSyncRequest,
    sub_slot_minutes: Optional[int] = Query(default=None, ge=5, le=24 * 60),
) -> SlotSyncResponse:
    warnings: List[SyncWarning] = []
    slots = sync_class_slots(payload.definition, payload.slots, warnings, sub_slot_minutes)
    return _response(slots, warnings)


@router.post("/schedule/sync/tournament", response_model=SlotSyncResponse)
def sync_tournament(payload: TournamentSyncRequest) -> SlotSyncResponse:
    warnings: List[SyncWarning] = []
    slots = sync_tournament_slots(payload.tournament, payload.slots, payload.courts, warnings)
    return _response(slots, warnings)


@router.post("/schedule/sync/event", response_model=SlotSyncResponse)
def sync_event(payload: EventSyncRequest) -> SlotSyncResponse:
    warnings: List[SyncWarning] = []
    slots = sync_event_slots(payload.event, payload.slots, warnings)
    return _response(slots, warnings)


@router.post("/schedule/sync", response_model=FullSyncResponse)
def sync_all(payload: FullSyncRequest) -> FullSyncResponse:
    result = sync_schedule(
        payload.slots,
        classes=payload.classes,
        tournaments=payload.tournaments,
        events=payload.events,
        courts=payload.courts,
    )
    return FullSyncResponse(
        slots=result.slots,
        warnings=[SyncWarningResponse(**w.to_dict()) for w in result.warnings],
        sources_synced=result.sources_synced,
    )


@router.post("/schedule/conflicts", response_model=List[SlotConflict])
def get_conflicts(payload: ConflictRequest) -> List[SlotConflict]:
    return find_court_conflicts(payload.slots)
