from __future__ import annotations

import math

from ledger.errors import InvalidOddsError


def _as_finite(value) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def is_valid_american(american_odds) -> bool:
    number = _as_finite(american_odds)
    return number is not None and number != 0


def american_to_decimal(american_odds: float) -> float:
    """Convert American odds to decimal. -110 -> 1.9090..., +150 -> 2.5"""
    odds = _as_finite(american_odds)
    if odds is None:
        raise InvalidOddsError(f"American odds must be a finite number, got {american_odds!r}")
    if odds == 0:
        raise InvalidOddsError("American odds cannot be 0")
    if odds > 0:
        return 1 + (odds / 100)
    return 1 + (100 / abs(odds))


def round2(value: float) -> float:
    """Round half up to cents: 0.125 -> 0.13, -0.125 -> -0.12."""
    return math.floor(value * 100 + 0.5) / 100


def to_win_from_stake(stake: float, multiplier: float) -> float | None:
    """Net profit if the ticket wins outright. None when it cannot be computed."""
    stake_value = _as_finite(stake)
    if stake_value is None or stake_value < 0 or _as_finite(multiplier) is None:
        return None
    return round2(stake_value * (multiplier - 1))


def stake_from_to_win(to_win: float, multiplier: float) -> float | None:
    """Stake needed to net ``to_win`` at ``multiplier``: to_win / (multiplier - 1)."""
    target = _as_finite(to_win)
    if target is None or target < 0 or _as_finite(multiplier) is None:
        return None
    denom = multiplier - 1
    if denom <= 0:
        return None
    return round2(target / denom)
