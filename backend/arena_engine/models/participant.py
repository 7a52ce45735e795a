from typing import List, Optional

from sqlmodel import Field, SQLModel


class PlayerEntry(SQLModel):
    name: str = ""
    student_id: Optional[str] = None  # Linked student record, if the player is enrolled
    phone: Optional[str] = None


class Participant(SQLModel):
    """An entrant in a tournament category: an individual, a doubles pair or a team."""

    id: str
    category_id: Optional[str] = None
    name: str
    players: List[PlayerEntry] = Field(default_factory=list)
    email: Optional[str] = None
    ranking_points: Optional[float] = None  # Positive values switch the draw to seeded mode
    on_waitlist: bool = False
    checked_in: bool = False
