import os

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


# Class sessions are split into bookable sub-slots of this size
SUB_SLOT_MINUTES = _int_env("ARENA_SUB_SLOT_MINUTES", 60)

# Used for a tournament match when its court has no booking duration configured
DEFAULT_BOOKING_MINUTES = _int_env("ARENA_DEFAULT_BOOKING_MINUTES", 60)

# Open-ended classes are expanded this many years past their start date
OPEN_ENDED_YEARS = _int_env("ARENA_OPEN_ENDED_YEARS", 1)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_extra = os.getenv("CORS_ORIGINS", "")
if _extra:
    CORS_ORIGINS.extend(o.strip() for o in _extra.split(",") if o.strip())
