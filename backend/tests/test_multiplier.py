import pytest

from ledger.analytics.multiplier import resolve_multiplier
from ledger.analytics.status import TicketType
from ledger.utils.odds_math import american_to_decimal


def leg(odds, status="open"):
    return {"american_odds": odds, "status": status}


def test_single_uses_its_leg_odds():
    result = resolve_multiplier(TicketType.SINGLE, [leg(150)])
    assert result.valid is True
    assert result.multiplier == 2.5


def test_single_requires_exactly_one_leg():
    assert resolve_multiplier("single", []).valid is False
    assert resolve_multiplier("single", [leg(-110), leg(120)]).valid is False


def test_parlay_multiplies_leg_odds():
    result = resolve_multiplier("parlay", [leg(-110), leg(-110), leg(100)])
    assert result.valid is True
    assert result.multiplier == pytest.approx(american_to_decimal(-110) ** 2 * 2.0)


def test_parlay_requires_two_legs():
    result = resolve_multiplier("parlay", [leg(-110)])
    assert result.valid is False
    assert result.multiplier is None


def test_push_leg_odds_do_not_affect_parlay_price():
    a = resolve_multiplier("parlay", [leg(-110), leg(150, "push")])
    b = resolve_multiplier("parlay", [leg(-110), leg(999, "push")])
    assert a == b
    assert a.multiplier == pytest.approx(american_to_decimal(-110))


def test_void_leg_contributes_exactly_one():
    result = resolve_multiplier("parlay", [leg(200, "won"), leg(-300, "void")])
    assert result.multiplier == 3.0


def test_all_neutral_parlay_is_even():
    result = resolve_multiplier("parlay", [leg(200, "push"), leg(-300, "void")])
    assert result.valid is True
    assert result.multiplier == 1.0


@pytest.mark.parametrize("bad", [0, None, float("nan")])
def test_bad_odds_invalidate_instead_of_defaulting(bad):
    assert resolve_multiplier("parlay", [leg(-110), leg(bad)]).multiplier is None
    assert resolve_multiplier("parlay", [leg(-110), leg(bad, "push")]).valid is False
    assert resolve_multiplier("single", [leg(bad)]).valid is False


def test_accepts_objects_as_legs():
    class Row:
        american_odds = -200
        status = "won"

    assert resolve_multiplier("single", [Row()]).multiplier == 1.5
