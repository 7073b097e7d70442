from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from math import prod

from ledger.analytics.status import NEUTRAL_LEG_STATUSES, LegStatus, TicketType
from ledger.utils.odds_math import american_to_decimal, is_valid_american
from ledger.utils.records import get_value


@dataclass(frozen=True)
class MultiplierResult:
    multiplier: float | None
    valid: bool


INVALID = MultiplierResult(multiplier=None, valid=False)


def is_neutral_leg(leg) -> bool:
    """Push and void legs drop out of a parlay price."""
    return LegStatus(get_value(leg, "status", LegStatus.OPEN)) in NEUTRAL_LEG_STATUSES


def resolve_multiplier(ticket_type: TicketType | str, legs: Sequence) -> MultiplierResult:
    """Effective decimal multiplier for a ticket.

    Singles use their one leg's decimal odds. Parlays multiply the decimal odds
    of every leg except push/void legs, which contribute exactly 1. An invalid
    result has no multiplier; dependent stake/to-win figures must stay blank.
    """
    ticket_type = TicketType(ticket_type)
    if any(not is_valid_american(get_value(leg, "american_odds")) for leg in legs):
        return INVALID

    if ticket_type == TicketType.SINGLE:
        if len(legs) != 1:
            return INVALID
        return MultiplierResult(american_to_decimal(get_value(legs[0], "american_odds")), True)

    if ticket_type == TicketType.PARLAY:
        if len(legs) < 2:
            return INVALID
        factors = [american_to_decimal(get_value(leg, "american_odds")) for leg in legs if not is_neutral_leg(leg)]
        return MultiplierResult(float(prod(factors)), True)

    raise ValueError(f"Unhandled ticket type: {ticket_type!r}")
