"""
Private event synchronization: the event blocks each assigned court for its
daily window on every day of its date range.
"""
import logging
from typing import List, Optional, Sequence

from arena_engine.models.private_event import BOOKED_EVENT_STATUSES, PrivateEventScheduleSource
from arena_engine.models.reservation_slot import ReservationSlot, SlotSourceType
from arena_engine.services.slot_reconciler import SyncWarning, reconcile, warn
from arena_engine.utils.slot_ids import event_slot_id
from arena_engine.utils.time_utils import iter_days, parse_clock

logger = logging.getLogger(__name__)


def event_slots(
    event: PrivateEventScheduleSource,
    warnings: Optional[List[SyncWarning]] = None,
) -> List[ReservationSlot]:
    if event.status not in BOOKED_EVENT_STATUSES or not event.court_ids:
        return []
    if event.end_date < event.start_date:
        warn(
            warnings,
            "invalid_window",
            f"end date {event.end_date} precedes start date {event.start_date}",
            event.id,
        )
        return []

    try:
        start = parse_clock(event.court_start_time or event.start_time)
        end = parse_clock(event.court_end_time or event.end_time)
    except ValueError as exc:
        warn(warnings, "invalid_time", f"event hours unusable: {exc}", event.id)
        return []

    slots = []
    for day in iter_days(event.start_date, event.end_date):
        for court_id in event.court_ids:
            slots.append(
                ReservationSlot(
                    id=event_slot_id(event.id, court_id, day),
                    court_id=court_id,
                    date=day,
                    start_time=start,
                    end_time=end,
                    source_type=SlotSourceType.private_event,
                    source_id=event.id,
                    label=f"Event: {event.name}",
                )
            )
    logger.debug("Event %s blocks %d court-days", event.id, len(slots))
    return slots


def sync_event_slots(
    event: PrivateEventScheduleSource,
    all_slots: Sequence[ReservationSlot],
    warnings: Optional[List[SyncWarning]] = None,
) -> List[ReservationSlot]:
    """Replace the event's slots in `all_slots`; only confirmed/completed events block courts."""
    return reconcile(SlotSourceType.private_event, event.id, all_slots, event_slots(event, warnings))
