from datetime import date

from arena_engine.models.reservation_slot import SlotSourceType
from arena_engine.services.slot_reconciler import reconcile, without_source
from tests.helpers import make_slot

DAY = date(2024, 1, 1)
AD_HOC = SlotSourceType.ad_hoc


def test_replaces_only_the_given_source():
    a1 = make_slot("a1", "c1", DAY, "08:00", "09:00", source_id="a")
    b1 = make_slot("b1", "c1", DAY, "09:00", "10:00", source_id="b")
    a2 = make_slot("a2", "c1", DAY, "10:00", "11:00", source_id="a")

    result = reconcile(AD_HOC, "a", [a1, b1], [a2])

    assert result == [b1, a2]


def test_never_duplicates_ids():
    b1 = make_slot("x", "c1", DAY, "09:00", "10:00", source_id="b")
    clash = make_slot("x", "c2", DAY, "09:00", "10:00", source_id="a")
    a1 = make_slot("a1", "c1", DAY, "10:00", "11:00", source_id="a")

    result = reconcile(AD_HOC, "a", [b1], [clash, a1, a1])

    assert [s.id for s in result] == ["x", "a1"]
    assert result[0] is b1


def test_reconcile_twice_is_stable():
    base = [make_slot("b1", "c1", DAY, "09:00", "10:00", source_id="b")]
    new = [make_slot("a1", "c1", DAY, "10:00", "11:00", source_id="a")]

    once = reconcile(AD_HOC, "a", base, new)
    assert reconcile(AD_HOC, "a", once, new) == once


def test_without_source_keeps_unsourced_slots():
    adhoc = make_slot("adhoc", "c1", DAY, "09:00", "10:00")
    assert without_source(AD_HOC, "a", [adhoc]) == [adhoc]


def test_same_id_of_another_source_type_is_kept():
    class_slot = make_slot("c42", "c1", DAY, "08:00", "09:00", source_id="42", source_type=SlotSourceType.class_session)
    match_slot = make_slot("t42", "c2", DAY, "08:00", "09:00", source_id="42", source_type=SlotSourceType.tournament_match)

    result = reconcile(SlotSourceType.tournament_match, "42", [class_slot, match_slot], [])

    assert result == [class_slot]
    assert without_source(SlotSourceType.class_session, "42", [class_slot, match_slot]) == [match_slot]
