from typing import Optional

from sqlmodel import SQLModel


class Court(SQLModel):
    id: str
    name: str = ""
    booking_duration_minutes: Optional[int] = None
