"""
Tests for the Bracket Builder - sizing, seeding, byes and feeder wiring.
"""

import math
import random
from collections import Counter

import pytest

from arena_engine.models.participant import Participant, PlayerEntry
from arena_engine.models.tournament import TournamentModality
from arena_engine.services.bracket_builder import (
    BracketArena,
    BracketError,
    BracketInvariantError,
    DuplicateParticipantError,
    bracket_blockers,
    bracket_size_for,
    build_bracket,
    bye_count_for,
    eligible_participants,
    replace_category_bracket,
    round_count_for,
    seed_order,
)
from tests.helpers import make_participants


def by_round(matches):
    rounds = {}
    for m in matches:
        rounds.setdefault(m.round, []).append(m)
    return rounds


# -----------------------------------------------------------------------------
# Sizing
# -----------------------------------------------------------------------------


class TestSizing:
    @pytest.mark.parametrize("n,size,byes", [(2, 2, 0), (3, 4, 1), (5, 8, 3), (8, 8, 0), (9, 16, 7), (16, 16, 0)])
    def test_size_and_byes(self, n, size, byes):
        assert bracket_size_for(n) == size
        assert bye_count_for(n) == byes

    def test_below_minimum(self):
        assert bracket_size_for(1) == 0
        assert bye_count_for(0) == 0
        assert round_count_for(1) == 0


@pytest.mark.parametrize("n", range(2, 18))
def test_bracket_shape_properties(n):
    matches = build_bracket(make_participants(n), "cat1", rng=random.Random(n))
    size = 2 ** math.ceil(math.log2(n))
    byes = size - n
    rounds = by_round(matches)

    assert len(rounds[1]) == (n - byes) // 2
    assert len(rounds) == int(math.log2(size)) == round_count_for(n)
    assert len(matches) == n - 1

    finals = [m for m in matches if m.next_match_id is None]
    assert len(finals) == 1
    assert finals[0].round == len(rounds)


@pytest.mark.parametrize("n", range(2, 18))
def test_every_participant_placed_once(n):
    matches = build_bracket(make_participants(n), "cat1", rng=random.Random(7))
    placed = [pid for m in matches for pid in m.participant_ids if pid is not None]
    assert sorted(placed) == sorted(f"p{i}" for i in range(n))


def test_no_participant_in_two_first_round_matches(rng):
    matches = build_bracket(make_participants(12), "cat1", rng=rng)
    first_round_ids = [pid for m in matches if m.round == 1 for pid in m.participant_ids]
    assert all(count == 1 for count in Counter(first_round_ids).values())


def test_five_unranked_participants(rng):
    """5 entrants: size 8, 3 byes, one round-1 match, then 2 + 1."""
    matches = build_bracket(make_participants(5), "cat1", rng=rng)
    rounds = by_round(matches)

    assert [len(rounds[r]) for r in (1, 2, 3)] == [1, 2, 1]
    assert len(matches) == 4
    # Round 2 holds the 3 byes directly plus one slot awaiting the round-1 winner
    round_two_slots = [pid for m in rounds[2] for pid in m.participant_ids]
    assert sum(1 for pid in round_two_slots if pid is None) == 1


def test_fewer_than_two_participants_is_a_no_op():
    assert build_bracket([], "cat1") == []
    assert build_bracket(make_participants(1), "cat1") == []


def test_duplicate_participant_ids_are_rejected():
    participants = make_participants(4)
    participants[3] = Participant(id="p1", category_id="cat1", name="Impostor")

    with pytest.raises(DuplicateParticipantError) as excinfo:
        build_bracket(participants, "cat1")
    assert excinfo.value.duplicate_ids == ["p1"]


def test_match_ids_are_unique_and_category_scoped(rng):
    matches = build_bracket(make_participants(9), "mixed-a", rng=rng)
    ids = [m.id for m in matches]
    assert len(set(ids)) == len(ids)
    assert all(mid.startswith("match_mixed-a_") for mid in ids)
    assert all(m.category_id == "mixed-a" for m in matches)


# -----------------------------------------------------------------------------
# Seeding
# -----------------------------------------------------------------------------


class TestSeeding:
    def test_byes_go_to_highest_ranked(self, rng):
        participants = make_participants(5, ranking=[10, 50, 30, 20, 40])
        matches = build_bracket(participants, "cat1", rng=rng)
        rounds = by_round(matches)

        assert rounds[1][0].participant_ids == ["p3", "p0"]
        direct_round_two = {pid for m in rounds[2] for pid in m.participant_ids if pid}
        assert direct_round_two == {"p1", "p4", "p2"}

    def test_order_is_descending_by_points(self, rng):
        participants = make_participants(4, ranking=[5, 0, 20, 10])
        order = [p.id for p in seed_order(participants, rng)]
        assert order == ["p2", "p3", "p0", "p1"]

    def test_ties_are_drawn_but_reproducible(self):
        participants = make_participants(6, ranking=[10, 10, 10, 5, 5, 1])
        first = [p.id for p in seed_order(participants, random.Random(99))]
        second = [p.id for p in seed_order(participants, random.Random(99))]

        assert first == second
        assert set(first[:3]) == {"p0", "p1", "p2"}
        assert set(first[3:5]) == {"p3", "p4"}
        assert first[5] == "p5"

    def test_unranked_field_is_shuffled_with_injected_rng(self):
        participants = make_participants(10)
        order = [p.id for p in seed_order(participants, random.Random(3))]
        expected = [p.id for p in participants]
        random.Random(3).shuffle(expected)
        assert order == expected

    def test_same_seed_same_bracket(self):
        participants = make_participants(11)
        a = build_bracket(participants, "cat1", rng=random.Random(42))
        b = build_bracket(participants, "cat1", rng=random.Random(42))
        assert [m.model_dump() for m in a] == [m.model_dump() for m in b]


# -----------------------------------------------------------------------------
# Feeder wiring
# -----------------------------------------------------------------------------


class TestWiring:
    @pytest.mark.parametrize("n", [2, 3, 5, 6, 7, 8, 13, 16, 17])
    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_parity_matches_feeder_slot(self, n, seed):
        matches = build_bracket(make_participants(n), "cat1", rng=random.Random(seed))
        BracketArena(matches).validate()

    def test_round_one_positions_are_lines_of_the_full_round(self):
        matches = build_bracket(make_participants(5), "cat1", rng=random.Random(5))
        first = [m for m in matches if m.round == 1]
        # 8-draw: four lines in round 1, one of them played, three byes
        assert 0 <= first[0].position < 4

    def test_feeders_leave_successor_slot_empty(self, rng):
        matches = build_bracket(make_participants(8), "cat1", rng=rng)
        arena = BracketArena(matches)
        for match in matches:
            successor = arena.successor(match)
            if successor is not None:
                assert successor.participant_ids[match.position % 2] is None

    def test_validate_detects_swapped_feeders(self, rng):
        matches = build_bracket(make_participants(8), "cat1", rng=rng)
        final = [m for m in matches if m.next_match_id is None][0]
        final.source_match_ids = list(reversed(final.source_match_ids))

        with pytest.raises(BracketInvariantError):
            BracketArena(matches).validate()


class TestArena:
    def test_duplicate_match_ids_rejected(self, rng):
        matches = build_bracket(make_participants(4), "cat1", rng=rng)
        with pytest.raises(BracketError):
            BracketArena(matches + [matches[0]])

    def test_unknown_match(self, rng):
        arena = BracketArena(build_bracket(make_participants(4), "cat1", rng=rng))
        with pytest.raises(BracketError):
            arena.get("nope")

    def test_rounds_and_final(self, rng):
        arena = BracketArena(build_bracket(make_participants(6), "cat1", rng=rng))
        rounds = arena.rounds()
        assert sorted(rounds) == [1, 2, 3]
        assert arena.final() is rounds[3][0]
        assert len(arena) == 5


# -----------------------------------------------------------------------------
# Caller-side helpers
# -----------------------------------------------------------------------------


class TestReadiness:
    def test_eligible_excludes_waitlist_and_other_categories(self):
        participants = make_participants(3) + make_participants(2, category_id="cat2")
        participants[0].on_waitlist = True
        eligible = eligible_participants(participants, "cat1")
        assert [p.id for p in eligible] == ["p1", "p2"]

    def test_too_few(self):
        reasons = bracket_blockers(make_participants(1))
        assert len(reasons) == 1
        assert "At least 2" in reasons[0]

    def test_ready(self):
        assert bracket_blockers(make_participants(4)) == []

    def test_incomplete_doubles(self):
        participants = make_participants(2)
        participants[0].players.append(PlayerEntry(name="Partner"))
        reasons = bracket_blockers(participants, TournamentModality.doubles)
        assert reasons == ["Some teams or pairs are incomplete."]

    def test_team_size_and_check_in(self):
        participants = make_participants(2)
        for p in participants:
            p.players = [PlayerEntry(name=f"{p.id}-{i}") for i in range(4)]
        participants[1].checked_in = False
        reasons = bracket_blockers(participants, TournamentModality.team, team_size=4)
        assert reasons == ["All participants must be checked in."]


def test_replace_category_bracket_keeps_other_categories(rng):
    cat1 = build_bracket(make_participants(4), "cat1", rng=rng)
    cat2 = build_bracket(make_participants(4, category_id="cat2"), "cat2", rng=rng)
    regenerated = build_bracket(make_participants(3), "cat1", rng=rng)

    result = replace_category_bracket(cat1 + cat2, "cat1", regenerated)

    assert [m for m in result if m.category_id == "cat2"] == cat2
    assert [m for m in result if m.category_id == "cat1"] == regenerated
