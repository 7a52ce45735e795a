"""
Bracket Builder - single-elimination draw for one tournament category.

Builds the complete match tree up front:
1. Order the field (seeded by ranking points, otherwise a random draw)
2. Give the top `bye_count` entrants a bye into round 2
3. Pair the rest sequentially into round-1 matches
4. Shuffle byes + round-1 matches and pair them into round 2
5. Pair each round's matches into the next until one final remains

Positions are chosen so that a match's position parity always names the
slot it feeds in its successor (even -> slot 0, odd -> slot 1).
"""

import logging
import math
import random
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Union

from arena_engine.models.match import Match
from arena_engine.models.participant import Participant
from arena_engine.models.tournament import TournamentModality

logger = logging.getLogger(__name__)

MIN_PARTICIPANTS = 2


class BracketError(Exception):
    """Raised when a bracket cannot be built or is structurally inconsistent"""

    pass


class DuplicateParticipantError(BracketError):
    """Raised when the same participant id is entered twice"""

    def __init__(self, duplicate_ids: List[str]):
        self.duplicate_ids = duplicate_ids
        super().__init__(f"Duplicate participant ids: {', '.join(duplicate_ids)}")


class BracketInvariantError(BracketError):
    """Raised when feeder links disagree with the position-parity rule"""

    pass


# -----------------------------------------------------------------------------
# Sizing
# -----------------------------------------------------------------------------


def bracket_size_for(participant_count: int) -> int:
    """Smallest power of two >= participant_count (0 when fewer than 2 entrants)."""
    if participant_count < MIN_PARTICIPANTS:
        return 0
    return 2 ** math.ceil(math.log2(participant_count))


def bye_count_for(participant_count: int) -> int:
    return bracket_size_for(participant_count) - participant_count if participant_count >= MIN_PARTICIPANTS else 0


def round_count_for(participant_count: int) -> int:
    size = bracket_size_for(participant_count)
    return int(math.log2(size)) if size else 0


# -----------------------------------------------------------------------------
# Seeding
# -----------------------------------------------------------------------------


def _check_unique_ids(participants: Sequence[Participant]) -> None:
    counts = Counter(p.id for p in participants)
    duplicates = sorted(pid for pid, n in counts.items() if n > 1)
    if duplicates:
        raise DuplicateParticipantError(duplicates)


def seed_order(participants: Sequence[Participant], rng: random.Random) -> List[Participant]:
    """
    Draw order for the field. Byes go to the front of this list.

    - Any positive ranking_points: descending by points; entrants with equal
      points are ordered by a random draw.
    - No ranking at all: the whole field is shuffled.
    """
    seeded = any(p.ranking_points and p.ranking_points > 0 for p in participants)
    if not seeded:
        order = list(participants)
        rng.shuffle(order)
        return order

    # One draw per entrant, taken in input order, so a seeded rng is reproducible
    draws = [rng.random() for _ in participants]
    keyed = sorted(
        zip(participants, draws),
        key=lambda pair: (-(pair[0].ranking_points or 0), pair[1]),
    )
    return [p for p, _ in keyed]


# -----------------------------------------------------------------------------
# Construction
# -----------------------------------------------------------------------------


def _link(source: Union[Participant, Match], match: Match, slot: int) -> None:
    if isinstance(source, Match):
        source.next_match_id = match.id
        match.source_match_ids[slot] = source.id
    else:
        match.participant_ids[slot] = source.id


def build_bracket(
    participants: Sequence[Participant],
    category_id: str,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    """
    Build a complete single-elimination bracket.

    Args:
        participants: Entrants of one category (ids must be unique)
        category_id: Category the matches belong to (also prefixes match ids)
        rng: Source of randomness for the draw; defaults to a fresh Random()

    Returns:
        Matches ordered by round, then position. Empty when fewer than
        two participants are given.

    Raises:
        DuplicateParticipantError: If a participant id appears more than once
    """
    if len(participants) < MIN_PARTICIPANTS:
        return []
    _check_unique_ids(participants)
    rng = rng or random.Random()

    ordered = seed_order(participants, rng)
    n = len(ordered)
    size = bracket_size_for(n)
    byes = size - n

    counter = 0

    def next_id() -> str:
        nonlocal counter
        match_id = f"match_{category_id}_{counter}"
        counter += 1
        return match_id

    # Round 1: entrants without a bye play in draw order
    first_round: List[Match] = []
    playing = ordered[byes:]
    for i in range(0, len(playing), 2):
        first_round.append(
            Match(
                id=next_id(),
                category_id=category_id,
                round=1,
                position=len(first_round),
                participant_ids=[playing[i].id, playing[i + 1].id],
            )
        )

    sources: List[Union[Participant, Match]] = list(ordered[:byes]) + list(first_round)
    rng.shuffle(sources)

    # A round-1 match takes its line in the full-size first round, which is
    # its index among the round-2 sources
    for index, source in enumerate(sources):
        if isinstance(source, Match):
            source.position = index

    rounds: List[List[Match]] = [sorted(first_round, key=lambda m: m.position)]
    round_number = 2
    while len(sources) > 1:
        current: List[Match] = []
        for i in range(0, len(sources), 2):
            match = Match(
                id=next_id(),
                category_id=category_id,
                round=round_number,
                position=len(current),
            )
            _link(sources[i], match, 0)
            _link(sources[i + 1], match, 1)
            current.append(match)
        rounds.append(current)
        sources = list(current)
        round_number += 1

    matches = [m for r in rounds for m in r]
    logger.debug(
        "Built bracket for category %s: %d entrants, size %d, %d byes, %d matches",
        category_id,
        n,
        size,
        byes,
        len(matches),
    )
    return matches


# -----------------------------------------------------------------------------
# Arena
# -----------------------------------------------------------------------------


class BracketArena:
    """Indexed view of one category's matches (id -> Match). Mutations are in place."""

    def __init__(self, matches: Iterable[Match]):
        self._matches: Dict[str, Match] = {}
        for match in matches:
            if match.id in self._matches:
                raise BracketError(f"Duplicate match id {match.id}")
            self._matches[match.id] = match

    def __contains__(self, match_id: str) -> bool:
        return match_id in self._matches

    def __len__(self) -> int:
        return len(self._matches)

    def get(self, match_id: str) -> Match:
        try:
            return self._matches[match_id]
        except KeyError:
            raise BracketError(f"Match {match_id} not found") from None

    def successor(self, match: Match) -> Optional[Match]:
        if match.next_match_id is None:
            return None
        return self.get(match.next_match_id)

    def matches(self) -> List[Match]:
        return sorted(self._matches.values(), key=lambda m: (m.category_id, m.round, m.position))

    def rounds(self) -> Dict[int, List[Match]]:
        by_round: Dict[int, List[Match]] = {}
        for match in self.matches():
            by_round.setdefault(match.round, []).append(match)
        return by_round

    def final(self) -> Optional[Match]:
        finals = [m for m in self._matches.values() if m.next_match_id is None]
        if not finals:
            return None
        if len(finals) > 1:
            raise BracketError(f"Expected one final, found {len(finals)}")
        return finals[0]

    def validate(self) -> None:
        """
        Check every feeder link of the tree.

        For each match with a successor, the successor must record this match
        as the feeder of slot (position % 2), and no two matches may feed the
        same slot.

        Raises:
            BracketInvariantError: On the first inconsistent link
        """
        for match in self._matches.values():
            successor = self.successor(match)
            if successor is None:
                continue
            slot = match.position % 2
            if successor.source_match_ids[slot] != match.id:
                raise BracketInvariantError(
                    f"Match {match.id} (position {match.position}) should feed slot {slot} "
                    f"of {successor.id}, which records feeder {successor.source_match_ids[slot]!r}"
                )
        self.final()


# -----------------------------------------------------------------------------
# Caller-side helpers
# -----------------------------------------------------------------------------


def eligible_participants(participants: Iterable[Participant], category_id: str) -> List[Participant]:
    """Confirmed (non-waitlisted) entrants of one category."""
    return [p for p in participants if p.category_id == category_id and not p.on_waitlist]


def required_team_size(modality: TournamentModality, team_size: Optional[int] = None) -> int:
    if modality == TournamentModality.individual:
        return 1
    if modality == TournamentModality.doubles:
        return 2
    return team_size or 1


def bracket_blockers(
    participants: Sequence[Participant],
    modality: TournamentModality = TournamentModality.individual,
    team_size: Optional[int] = None,
) -> List[str]:
    """
    Reasons a category is not ready for a draw. Empty list means ready.

    Expects the confirmed entrants only (see eligible_participants).
    """
    if len(participants) < MIN_PARTICIPANTS:
        return [f"At least {MIN_PARTICIPANTS} confirmed participants are required to generate a bracket."]

    reasons = []
    size = required_team_size(modality, team_size)
    if any(len([pl for pl in p.players if pl.name]) != size for p in participants):
        reasons.append("Some teams or pairs are incomplete.")
    if not all(p.checked_in for p in participants):
        reasons.append("All participants must be checked in.")
    return reasons


def replace_category_bracket(all_matches: Sequence[Match], category_id: str, new_matches: Sequence[Match]) -> List[Match]:
    """Swap one category's bracket, leaving other categories untouched."""
    kept = [m for m in all_matches if m.category_id != category_id]
    return kept + list(new_matches)
