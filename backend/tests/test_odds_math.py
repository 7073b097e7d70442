import math

import pytest

from ledger.errors import InvalidOddsError
from ledger.utils.odds_math import (
    american_to_decimal,
    is_valid_american,
    round2,
    stake_from_to_win,
    to_win_from_stake,
)


def test_american_to_decimal_even_money_favorite_and_dog():
    assert american_to_decimal(100) == 2.0
    assert american_to_decimal(150) == 2.5
    assert american_to_decimal(-500) == 1.2
    assert american_to_decimal(1000) == 11.0
    assert american_to_decimal(-110) == pytest.approx(1.909090909)


def test_american_to_decimal_is_not_pre_rounded():
    assert american_to_decimal(-110) == 1 + 100 / 110


def test_monotonic_for_positive_and_negative_odds():
    positives = [101, 120, 150, 250, 1000]
    negatives = [-1000, -250, -150, -120, -101]
    pos_dec = [american_to_decimal(o) for o in positives]
    neg_dec = [american_to_decimal(o) for o in negatives]
    assert pos_dec == sorted(pos_dec)
    assert neg_dec == sorted(neg_dec)
    assert len(set(pos_dec)) == len(pos_dec)


@pytest.mark.parametrize("bad", [0, 0.0, math.nan, math.inf, -math.inf, None, "abc"])
def test_invalid_odds_raise(bad):
    with pytest.raises(InvalidOddsError):
        american_to_decimal(bad)
    assert is_valid_american(bad) is False


def test_invalid_odds_error_is_a_value_error():
    with pytest.raises(ValueError):
        american_to_decimal(0)


def test_round2_rounds_half_up():
    assert round2(0.125) == 0.13
    assert round2(-0.125) == -0.12
    assert round2(190.9090909) == 190.91
    assert round2(95.4545454) == 95.45
    assert round2(-0.001) == 0.0


def test_risk_and_to_win_conversions():
    assert to_win_from_stake(100, 2.5) == 150.0
    assert stake_from_to_win(150, 2.5) == 100.0
    assert to_win_from_stake(100, american_to_decimal(-110)) == 90.91


def test_conversions_blank_when_not_computable():
    assert to_win_from_stake(-1, 2.0) is None
    assert stake_from_to_win(-1, 2.0) is None
    assert stake_from_to_win(10, 1.0) is None
    assert to_win_from_stake(math.nan, 2.0) is None
