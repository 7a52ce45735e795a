"""
Replace one source's reservation slots inside the full slot list.

Every synchronizer has the same shape: drop the slots that reference the
source, compute its slots afresh, append them. Slots carry deterministic ids,
so doing this twice with the same inputs yields the same list.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from arena_engine.models.reservation_slot import ReservationSlot, SlotSourceType

logger = logging.getLogger(__name__)


@dataclass
class SyncWarning:
    """Non-fatal problem found while synchronizing one source"""

    code: str
    message: str
    source_id: Optional[str] = None

    def to_dict(self):
        return {"code": self.code, "message": self.message, "source_id": self.source_id}


def warn(warnings: Optional[List[SyncWarning]], code: str, message: str, source_id: Optional[str]) -> None:
    logger.warning("%s (source %s): %s", code, source_id, message)
    if warnings is not None:
        warnings.append(SyncWarning(code=code, message=message, source_id=source_id))


def without_source(
    source_type: SlotSourceType,
    source_id: str,
    all_slots: Sequence[ReservationSlot],
) -> List[ReservationSlot]:
    """Drop the slots back-referencing one source. Sources of different types may share an id."""
    return [s for s in all_slots if not (s.source_type == source_type and s.source_id == source_id)]


def reconcile(
    source_type: SlotSourceType,
    source_id: str,
    all_slots: Sequence[ReservationSlot],
    new_slots: Sequence[ReservationSlot],
) -> List[ReservationSlot]:
    """
    Return `all_slots` with every slot of (`source_type`, `source_id`) replaced by `new_slots`.

    A new slot whose id is already taken (by a kept slot or an earlier new
    slot) is dropped, so the result never holds two slots with one id.
    """
    kept = without_source(source_type, source_id, all_slots)
    seen = {s.id for s in kept}
    merged = list(kept)
    dropped = 0
    for slot in new_slots:
        if slot.id in seen:
            dropped += 1
            continue
        seen.add(slot.id)
        merged.append(slot)
    if dropped:
        logger.warning("Dropped %d slot(s) with duplicate ids while syncing %s %s", dropped, source_type.value, source_id)
    logger.debug(
        "Reconciled %s %s: removed %d, added %d",
        source_type.value,
        source_id,
        len(all_slots) - len(kept),
        len(merged) - len(kept),
    )
    return merged
