from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date, timedelta, tzinfo

from ledger.analytics.bankroll import as_local, local_midnight, realized_profit
from ledger.utils.odds_math import round2
from ledger.utils.records import get_value

UNIT_SIZE_PCT = 0.05
UNIT_SIZE_INCREMENT = 50.0
UNIT_SIZE_CAP = 10_000.0


def compute_unit_size(
    prev_month_ending_bankroll: float,
    pct: float = UNIT_SIZE_PCT,
    increment: float = UNIT_SIZE_INCREMENT,
    cap: float = UNIT_SIZE_CAP,
) -> float:
    """5% of last month's closing bankroll, floored to 50, never below 0 or above 10,000."""
    raw = prev_month_ending_bankroll * pct
    rounded_down = math.floor(raw / increment) * increment
    return float(min(cap, max(0.0, rounded_down)))


def previous_month_end(today: date) -> date:
    return today.replace(day=1) - timedelta(days=1)


def previous_month_ending_bankroll(tickets: Iterable, starting_bankroll: float, today: date, tz: tzinfo) -> float:
    cutoff = local_midnight(today.replace(day=1), tz)
    profit = sum(realized_profit(t) for t in tickets if as_local(get_value(t, "placed_at"), tz) < cutoff)
    return round2(float(starting_bankroll or 0.0) + profit)
