"""
Court catalog lookups.

The catalog is supplied by the caller; an unknown court or one without a
configured booking duration falls back to the default.
"""
from typing import Dict, Iterable, Optional

from arena_engine import config
from arena_engine.models.court import Court


def index_courts(courts: Optional[Iterable[Court]]) -> Dict[str, Court]:
    if not courts:
        return {}
    return {c.id: c for c in courts}


def booking_minutes_for(court_id: str, courts_by_id: Dict[str, Court], default: Optional[int] = None) -> int:
    """Booking-slot duration for a court, never zero or negative."""
    fallback = default if default is not None else config.DEFAULT_BOOKING_MINUTES
    court = courts_by_id.get(court_id)
    if court is None or not court.booking_duration_minutes or court.booking_duration_minutes <= 0:
        return fallback
    return court.booking_duration_minutes
