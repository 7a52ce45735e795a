"""
Bracket endpoints. Stateless: the request carries the category's current
matches and the response returns them updated; the caller persists them.
"""
import random
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from arena_engine.models.match import Match
from arena_engine.models.participant import Participant
from arena_engine.models.tournament import TournamentModality
from arena_engine.services.advancement_service import (
    AdvancementError,
    Podium,
    advance_winner,
    apply_walkover,
    category_podium,
    record_score,
    select_third_place,
    substitute_participant,
)
from arena_engine.services.bracket_builder import (
    BracketArena,
    BracketError,
    BracketInvariantError,
    DuplicateParticipantError,
    bracket_blockers,
    build_bracket,
)

router = APIRouter()


class BracketGenerateRequest(BaseModel):
    participants: List[Participant]
    seed: Optional[int] = None  # Fixes the draw (reproducible brackets)


class BracketReadinessRequest(BaseModel):
    participants: List[Participant]
    modality: TournamentModality = TournamentModality.individual
    team_size: Optional[int] = None


class BracketReadinessResponse(BaseModel):
    ready: bool
    reasons: List[str]


class WinnerUpdate(BaseModel):
    matches: List[Match]
    winner_id: Optional[str] = None


class WalkoverUpdate(BaseModel):
    matches: List[Match]
    absent_slot: int


class SubstituteUpdate(BaseModel):
    matches: List[Match]
    slot_index: int
    participant_id: str


class ScoreUpdate(BaseModel):
    matches: List[Match]
    slot_index: int
    value: Optional[int] = None


class PodiumRequest(BaseModel):
    matches: List[Match]


class ThirdPlaceRequest(BaseModel):
    matches: List[Match]
    participant_id: str


class PodiumResponse(BaseModel):
    champion_id: Optional[str] = None
    runner_up_id: Optional[str] = None
    semifinal_loser_ids: List[str] = []
    third_place_id: Optional[str] = None


def _arena_or_422(matches: List[Match]) -> BracketArena:
    try:
        return BracketArena(matches)
    except BracketError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


def _require_match(arena: BracketArena, match_id: str) -> None:
    if match_id not in arena:
        raise HTTPException(status_code=404, detail="Match not found")


def _raise_for(exc: BracketError) -> None:
    if isinstance(exc, BracketInvariantError):
        raise HTTPException(status_code=409, detail=str(exc))
    raise HTTPException(status_code=422, detail=str(exc))


@router.post("/categories/{category_id}/bracket", response_model=List[Match])
def generate_bracket(category_id: str, payload: BracketGenerateRequest) -> List[Match]:
    """Draw a fresh single-elimination bracket for the given (confirmed) entrants."""
    if len(payload.participants) < 2:
        raise HTTPException(
            status_code=422,
            detail="At least 2 confirmed participants are required to generate a bracket.",
        )
    rng = random.Random(payload.seed) if payload.seed is not None else None
    try:
        return build_bracket(payload.participants, category_id, rng=rng)
    except DuplicateParticipantError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.post("/brackets/readiness", response_model=BracketReadinessResponse)
def check_readiness(payload: BracketReadinessRequest) -> BracketReadinessResponse:
    reasons = bracket_blockers(payload.participants, payload.modality, payload.team_size)
    return BracketReadinessResponse(ready=not reasons, reasons=reasons)


@router.post("/brackets/matches/{match_id}/winner", response_model=List[Match])
def set_winner(match_id: str, payload: WinnerUpdate) -> List[Match]:
    """Set or clear a winner; the successor match receives it (one hop)."""
    arena = _arena_or_422(payload.matches)
    _require_match(arena, match_id)
    try:
        advance_winner(arena, match_id, payload.winner_id)
    except BracketError as exc:
        _raise_for(exc)
    return payload.matches


@router.post("/brackets/matches/{match_id}/walkover", response_model=List[Match])
def set_walkover(match_id: str, payload: WalkoverUpdate) -> List[Match]:
    arena = _arena_or_422(payload.matches)
    _require_match(arena, match_id)
    try:
        apply_walkover(arena, match_id, payload.absent_slot)
    except BracketError as exc:
        _raise_for(exc)
    return payload.matches


@router.post("/brackets/matches/{match_id}/substitute", response_model=List[Match])
def substitute(match_id: str, payload: SubstituteUpdate) -> List[Match]:
    arena = _arena_or_422(payload.matches)
    _require_match(arena, match_id)
    try:
        substitute_participant(arena, match_id, payload.slot_index, payload.participant_id)
    except AdvancementError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return payload.matches


@router.post("/brackets/matches/{match_id}/score", response_model=List[Match])
def set_score(match_id: str, payload: ScoreUpdate) -> List[Match]:
    arena = _arena_or_422(payload.matches)
    _require_match(arena, match_id)
    try:
        record_score(arena, match_id, payload.slot_index, payload.value)
    except AdvancementError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return payload.matches


def _podium_response(podium: Podium) -> PodiumResponse:
    return PodiumResponse(
        champion_id=podium.champion_id,
        runner_up_id=podium.runner_up_id,
        semifinal_loser_ids=podium.semifinal_loser_ids,
        third_place_id=podium.third_place_id,
    )


@router.post("/brackets/podium", response_model=PodiumResponse)
def get_podium(payload: PodiumRequest) -> PodiumResponse:
    return _podium_response(category_podium(payload.matches))


@router.post("/brackets/podium/third-place", response_model=PodiumResponse)
def set_third_place(payload: ThirdPlaceRequest) -> PodiumResponse:
    """Pick third place among the semifinal losers (there is no third-place match)."""
    podium = category_podium(payload.matches)
    try:
        select_third_place(podium, payload.participant_id)
    except AdvancementError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return _podium_response(podium)
