"""
Court conflict report: reservation slots on the same court whose time
ranges overlap. Touching ranges (one ends as the next starts) do not conflict.
"""
from collections import defaultdict
from typing import Dict, List, Sequence

from pydantic import BaseModel

from arena_engine.models.reservation_slot import ReservationSlot


class SlotConflict(BaseModel):
    court_id: str
    first_slot_id: str
    second_slot_id: str
    overlap_minutes: int


def find_court_conflicts(slots: Sequence[ReservationSlot]) -> List[SlotConflict]:
    """
    All overlapping pairs, ordered by court then start.

    Slots are swept per court in start order; each slot is compared against
    the slots still open when it starts.
    """
    by_court: Dict[str, List[ReservationSlot]] = defaultdict(list)
    for slot in slots:
        by_court[slot.court_id].append(slot)

    conflicts: List[SlotConflict] = []
    for court_id in sorted(by_court):
        ordered = sorted(by_court[court_id], key=lambda s: (s.starts_at(), s.id))
        open_slots: List[ReservationSlot] = []
        for slot in ordered:
            start = slot.starts_at()
            open_slots = [o for o in open_slots if o.ends_at() > start]
            for other in open_slots:
                overlap = min(other.ends_at(), slot.ends_at()) - start
                conflicts.append(
                    SlotConflict(
                        court_id=court_id,
                        first_slot_id=other.id,
                        second_slot_id=slot.id,
                        overlap_minutes=int(overlap.total_seconds() // 60),
                    )
                )
            open_slots.append(slot)
    return conflicts
