from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ledger.analytics.multiplier import is_neutral_leg
from ledger.analytics.status import TicketStatus, TicketType
from ledger.errors import ValidationError
from ledger.utils.odds_math import american_to_decimal, round2
from ledger.utils.records import get_value


class SettledAtPolicy(str, Enum):
    STAMP = "stamp"
    CLEAR = "clear"


@dataclass(frozen=True)
class Settlement:
    payout: float | None
    profit: float | None
    settled_at_policy: SettledAtPolicy


def _finite(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _won_payout(ticket_type: TicketType, stake: float, legs: Sequence) -> float:
    if ticket_type == TicketType.SINGLE:
        if len(legs) != 1:
            raise ValidationError("Single must have exactly 1 leg.")
        return round2(stake * american_to_decimal(get_value(legs[0], "american_odds")))
    if ticket_type == TicketType.PARLAY:
        multiplier = 1.0
        for leg in legs:
            if is_neutral_leg(leg):
                continue
            multiplier *= american_to_decimal(get_value(leg, "american_odds"))
        return round2(stake * multiplier)
    raise ValueError(f"Unhandled ticket type: {ticket_type!r}")


def compute_settlement(
    ticket_type: TicketType | str,
    stake: float,
    status: TicketStatus | str,
    legs: Sequence,
    payout_override: float | None = None,
) -> Settlement:
    """Payout and profit for a ticket in ``status``.

    A finite ``payout_override`` wins over everything else. It records the
    financials even on an open ticket; only then does ``settled_at`` stay empty.
    Payout is rounded first and profit is rounded again from the rounded payout.
    """
    ticket_type = TicketType(ticket_type)
    status = TicketStatus(status)
    stake_value = _finite(stake)
    if stake_value is None or stake_value <= 0:
        raise ValidationError("Please enter a valid bet amount.")

    override = _finite(payout_override)
    if override is not None:
        payout = round2(override)
        policy = SettledAtPolicy.CLEAR if status == TicketStatus.OPEN else SettledAtPolicy.STAMP
        return Settlement(payout=payout, profit=round2(payout - stake_value), settled_at_policy=policy)

    if status in (TicketStatus.OPEN, TicketStatus.PARTIAL):
        return Settlement(payout=None, profit=None, settled_at_policy=SettledAtPolicy.CLEAR)
    if status in (TicketStatus.PUSH, TicketStatus.VOID):
        return Settlement(payout=round2(stake_value), profit=0.0, settled_at_policy=SettledAtPolicy.STAMP)
    if status == TicketStatus.LOST:
        return Settlement(payout=0.0, profit=round2(-stake_value), settled_at_policy=SettledAtPolicy.STAMP)
    if status == TicketStatus.WON:
        payout = _won_payout(ticket_type, stake_value, legs)
        return Settlement(payout=payout, profit=round2(payout - stake_value), settled_at_policy=SettledAtPolicy.STAMP)

    raise ValueError(f"Unhandled ticket status: {status!r}")


def apply_settled_at(policy: SettledAtPolicy, previous: datetime | None, now: datetime) -> datetime | None:
    """Keep an existing settlement time, stamp ``now`` on first settlement, clear when unsettled."""
    if policy == SettledAtPolicy.CLEAR:
        return None
    if policy == SettledAtPolicy.STAMP:
        return previous or now
    raise ValueError(f"Unhandled settled_at policy: {policy!r}")
