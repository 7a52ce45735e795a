"""
Recurring class expansion.

A class is defined by weekly rules over a validity window. Each matching day
produces one block per rule, split into fixed-size bookable sub-slots.
"""
import logging
from typing import List, Optional, Sequence

from arena_engine import config
from arena_engine.models.class_schedule import RecurringClass
from arena_engine.models.reservation_slot import ReservationSlot, SlotSourceType
from arena_engine.services.slot_reconciler import SyncWarning, reconcile, warn, without_source
from arena_engine.utils.slot_ids import class_slot_id
from arena_engine.utils.time_utils import add_years, block_bounds, day_of_week, iter_days, parse_clock, split_block

logger = logging.getLogger(__name__)


def _usable_rules(definition: RecurringClass, warnings: Optional[List[SyncWarning]]):
    """Parse each rule once; a bad rule is reported and skipped, the rest still expand."""
    usable = []
    for rule in definition.rules:
        if not 0 <= rule.day_of_week <= 6:
            warn(warnings, "invalid_weekday", f"day_of_week {rule.day_of_week} is outside 0-6", definition.id)
            continue
        try:
            start, end = parse_clock(rule.start_time), parse_clock(rule.end_time)
        except ValueError as exc:
            warn(warnings, "invalid_time", f"rule for weekday {rule.day_of_week} skipped: {exc}", definition.id)
            continue
        usable.append((rule, start, end))
    return usable


def class_slots(
    definition: RecurringClass,
    warnings: Optional[List[SyncWarning]] = None,
    sub_slot_minutes: Optional[int] = None,
) -> List[ReservationSlot]:
    """All sub-slots of a class definition, in calendar order."""
    if not definition.rules:
        return []

    window_end = definition.end_date or add_years(definition.start_date, config.OPEN_ENDED_YEARS)
    if window_end < definition.start_date:
        warn(
            warnings,
            "invalid_window",
            f"end date {window_end} precedes start date {definition.start_date}",
            definition.id,
        )
        return []

    step = sub_slot_minutes or config.SUB_SLOT_MINUTES
    rules = _usable_rules(definition, warnings)
    by_weekday = {}
    for rule, start, end in rules:
        by_weekday.setdefault(rule.day_of_week, []).append((start, end))

    slots: List[ReservationSlot] = []
    for day in iter_days(definition.start_date, window_end):
        for start, end in by_weekday.get(day_of_week(day), []):
            start_dt, end_dt = block_bounds(day, start, end)
            for sub_start, sub_end in split_block(start_dt, end_dt, step):
                slots.append(
                    ReservationSlot(
                        id=class_slot_id(definition.id, sub_start),
                        court_id=definition.court_id,
                        date=sub_start.date(),
                        start_time=sub_start.time(),
                        end_time=sub_end.time(),
                        source_type=SlotSourceType.class_session,
                        source_id=definition.id,
                        label=definition.name,
                    )
                )
    logger.debug("Class %s expands to %d sub-slots", definition.id, len(slots))
    return slots


def sync_class_slots(
    definition: RecurringClass,
    all_slots: Sequence[ReservationSlot],
    warnings: Optional[List[SyncWarning]] = None,
    sub_slot_minutes: Optional[int] = None,
) -> List[ReservationSlot]:
    """Replace the class's slots in `all_slots` with a fresh expansion."""
    if not definition.rules:
        return without_source(SlotSourceType.class_session, definition.id, all_slots)
    slots = class_slots(definition, warnings, sub_slot_minutes)
    return reconcile(SlotSourceType.class_session, definition.id, all_slots, slots)
