"""
Calendar and clock helpers shared by the schedule synchronizers.

All arithmetic goes through datetime/timedelta so that blocks crossing
midnight and month/leap-year boundaries are handled by the standard library.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterator, List, Optional, Tuple

# Weekday numbering used by stored records: 0=Sunday ... 6=Saturday
SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

TIME_FORMAT = "%H:%M"


def parse_clock(value: Optional[str]) -> time:
    """Parse an "HH:MM" string (seconds tolerated). Raises ValueError on anything else."""
    if value is None:
        raise ValueError("time value is missing")
    s = str(value).strip()
    for fmt in (TIME_FORMAT, "%H:%M:%S"):
        try:
            return datetime.strptime(s, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"unparseable time {value!r}, expected HH:MM")


def day_of_week(day: date) -> int:
    """date.weekday() is Monday-based; stored records are Sunday-based."""
    return (day.weekday() + 1) % 7


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar day in [start, end]. Empty when end precedes start."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def add_years(day: date, years: int) -> date:
    """Same month/day `years` later; Feb 29 falls back to Feb 28."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


def block_bounds(day: date, start: time, end: time) -> Tuple[datetime, datetime]:
    """Concrete bounds of a daily block; an end not after the start belongs to the next day."""
    start_dt = datetime.combine(day, start)
    end_dt = datetime.combine(day, end)
    if end_dt <= start_dt:
        end_dt += timedelta(days=1)
    return start_dt, end_dt


def split_block(start_dt: datetime, end_dt: datetime, step_minutes: int) -> List[Tuple[datetime, datetime]]:
    """
    Consecutive sub-blocks of exactly `step_minutes`.
    A trailing remainder shorter than one step is dropped.
    """
    if step_minutes <= 0:
        raise ValueError(f"step_minutes must be positive, got {step_minutes}")
    step = timedelta(minutes=step_minutes)
    parts = []
    cursor = start_dt
    while cursor + step <= end_dt:
        parts.append((cursor, cursor + step))
        cursor += step
    return parts
