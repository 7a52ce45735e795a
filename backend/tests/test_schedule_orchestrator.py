from datetime import date

from arena_engine.models.class_schedule import RecurringClass, WeeklyRule
from arena_engine.models.court import Court
from arena_engine.models.match import Match
from arena_engine.models.private_event import EventStatus, PrivateEventScheduleSource
from arena_engine.models.reservation_slot import SlotSourceType
from arena_engine.models.tournament import TournamentScheduleSource, TournamentStatus
from arena_engine.services.conflict_report import find_court_conflicts
from arena_engine.services.schedule_orchestrator import sync_schedule
from arena_engine.utils.time_utils import MONDAY
from tests.helpers import make_participants, make_slot


def sources():
    turma = RecurringClass(
        id="class-1",
        name="Kids",
        court_id="court-1",
        rules=[WeeklyRule(day_of_week=MONDAY, start_time="17:00", end_time="19:00")],
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 8),
    )
    tournament = TournamentScheduleSource(
        id="tour-1",
        status=TournamentStatus.in_progress,
        participants=make_participants(2),
        matches=[
            Match(
                id="m0",
                category_id="c",
                round=1,
                position=0,
                participant_ids=["p0", "p1"],
                court_id="court-1",
                date=date(2024, 1, 1),
                start_time="18:00",
            )
        ],
    )
    event = PrivateEventScheduleSource(
        id="ev-1",
        name="Party",
        status=EventStatus.confirmed,
        start_date=date(2024, 1, 6),
        end_date=date(2024, 1, 6),
        court_ids=["court-2"],
        start_time="20:00",
        end_time="23:00",
    )
    return turma, tournament, event


def test_all_sources_in_one_pass():
    turma, tournament, event = sources()
    adhoc = make_slot("adhoc", "court-3", date(2024, 1, 2), "08:00", "09:00")

    result = sync_schedule([adhoc], classes=[turma], tournaments=[tournament], events=[event], courts=[Court(id="court-1")])

    assert result.sources_synced == 3
    assert result.warnings == []
    by_type = {}
    for slot in result.slots:
        by_type.setdefault(slot.source_type, []).append(slot)
    assert len(by_type[SlotSourceType.class_session]) == 4
    assert len(by_type[SlotSourceType.tournament_match]) == 1
    assert len(by_type[SlotSourceType.private_event]) == 1
    assert result.slots[0] == adhoc


def test_pass_is_idempotent():
    turma, tournament, event = sources()
    first = sync_schedule([], classes=[turma], tournaments=[tournament], events=[event])
    second = sync_schedule(first.slots, classes=[turma], tournaments=[tournament], events=[event])

    assert [s.model_dump() for s in second.slots] == [s.model_dump() for s in first.slots]


def test_match_on_class_court_shows_up_as_conflict():
    turma, tournament, event = sources()
    result = sync_schedule([], classes=[turma], tournaments=[tournament])

    conflicts = find_court_conflicts(result.slots)

    assert [(c.first_slot_id, c.second_slot_id) for c in conflicts] == [
        ("class_class-1_20240101_1800", "tournament_tour-1_match_m0")
    ]


def test_warnings_are_collected_per_source():
    turma, tournament, event = sources()
    turma.end_date = date(2023, 12, 1)

    result = sync_schedule([], classes=[turma], events=[event])

    assert [(w.code, w.source_id) for w in result.warnings] == [("invalid_window", "class-1")]
    assert len(result.slots) == 1
    assert result.to_dict()["warnings"][0]["source_id"] == "class-1"
