"""
Advancement: when a match's winner is set, write it into the successor match.

One hop only. Completing a match never cascades past its direct successor;
callers that want to push a result further re-invoke advancement on the
successor once it is decided.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from arena_engine.models.match import Match
from arena_engine.services.bracket_builder import BracketArena, BracketError, BracketInvariantError

logger = logging.getLogger(__name__)


class AdvancementError(BracketError):
    """Raised when a result cannot be applied to the bracket"""

    pass


def advancement_target(match: Match) -> Tuple[str, int]:
    """
    Where the winner of `match` goes: (successor match id, slot index).

    Even positions feed slot 0, odd positions feed slot 1.
    """
    if match.next_match_id is None:
        raise AdvancementError(f"Match {match.id} is the final; its winner does not advance")
    return match.next_match_id, match.position % 2


def _check_slot(value: int) -> int:
    if value not in (0, 1):
        raise AdvancementError(f"Slot index must be 0 or 1, got {value}")
    return value


def advance_winner(arena: BracketArena, match_id: str, winner_id: Optional[str]) -> Optional[Match]:
    """
    Set (or clear, with None) the winner of a match and propagate it one hop.

    Returns:
        The successor match that was written, or None for the final.

    Raises:
        AdvancementError: Winner is not playing this match, or the successor
            is already decided
        BracketInvariantError: The successor does not list this match as the
            feeder of the slot its position selects
    """
    match = arena.get(match_id)
    if winner_id is not None and winner_id not in match.participant_ids:
        raise AdvancementError(f"Participant {winner_id} is not playing match {match.id}")

    successor = arena.successor(match)
    if successor is not None:
        target_id, slot = advancement_target(match)
        if successor.source_match_ids[slot] != match.id:
            raise BracketInvariantError(
                f"Match {match.id} (position {match.position}) targets slot {slot} of {target_id}, "
                f"but that slot is fed by {successor.source_match_ids[slot]!r}"
            )
        if successor.winner_id is not None and successor.participant_ids[slot] != winner_id:
            raise AdvancementError(f"Match {successor.id} is already decided; clear its result first")

    match.winner_id = winner_id
    if successor is None:
        return None

    successor.participant_ids[slot] = winner_id
    logger.debug("Advanced %s from %s into %s slot %d", winner_id, match.id, successor.id, slot)
    return successor


def apply_walkover(arena: BracketArena, match_id: str, absent_slot: int) -> Optional[Match]:
    """The participant opposite `absent_slot` wins without playing."""
    match = arena.get(match_id)
    present = match.participant_ids[1 - _check_slot(absent_slot)]
    if present is None:
        raise AdvancementError(f"Match {match.id} has no opponent to award a walkover to")
    return advance_winner(arena, match_id, present)


def record_score(arena: BracketArena, match_id: str, slot_index: int, value: Optional[int]) -> Match:
    if value is not None and value < 0:
        raise AdvancementError(f"Score cannot be negative, got {value}")
    match = arena.get(match_id)
    match.score[_check_slot(slot_index)] = value
    return match


def substitute_participant(arena: BracketArena, match_id: str, slot_index: int, participant_id: str) -> Match:
    """Manually put a participant into a slot (e.g. a replacement entrant)."""
    match = arena.get(match_id)
    slot = _check_slot(slot_index)
    if match.is_decided:
        raise AdvancementError(f"Match {match.id} is already decided")
    if participant_id in match.participant_ids:
        raise AdvancementError(f"Participant {participant_id} already plays match {match.id}")
    match.participant_ids[slot] = participant_id
    return match


# -----------------------------------------------------------------------------
# Results
# -----------------------------------------------------------------------------


@dataclass
class Podium:
    champion_id: Optional[str] = None
    runner_up_id: Optional[str] = None
    semifinal_loser_ids: List[str] = field(default_factory=list)
    third_place_id: Optional[str] = None


def _loser(match: Match) -> Optional[str]:
    if match.winner_id is None:
        return None
    others = [pid for pid in match.participant_ids if pid is not None and pid != match.winner_id]
    return others[0] if others else None


def category_podium(matches: Sequence[Match]) -> Podium:
    """Placings of one category's bracket, as far as results are known."""
    podium = Podium()
    if not matches:
        return podium
    final_round = max(m.round for m in matches)
    finals = [m for m in matches if m.round == final_round]
    if len(finals) != 1 or finals[0].winner_id is None:
        return podium

    final = finals[0]
    podium.champion_id = final.winner_id
    podium.runner_up_id = _loser(final)

    semis = [m for m in matches if m.round == final_round - 1]
    if len(semis) == 2:
        podium.semifinal_loser_ids = [pid for pid in (_loser(m) for m in semis) if pid is not None]
    return podium


def select_third_place(podium: Podium, participant_id: str) -> Podium:
    if participant_id not in podium.semifinal_loser_ids:
        raise AdvancementError(f"Participant {participant_id} did not lose a semifinal")
    podium.third_place_id = participant_id
    return podium
