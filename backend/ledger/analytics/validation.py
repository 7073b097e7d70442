from __future__ import annotations

import math
from collections.abc import Sequence

from ledger.analytics.status import TicketType
from ledger.errors import ValidationError
from ledger.utils.odds_math import is_valid_american
from ledger.utils.records import get_value

LEAGUE_OPTIONS = (
    "NBA",
    "NHL",
    "MLB",
    "UFC",
    "NFL",
    "NCAAF",
    "WNBA",
    "SOCCER",
    "NCAAB",
    "TENNIS",
    "OTHER",
)


def validate_stake(stake) -> float:
    try:
        value = float(stake)
    except (TypeError, ValueError):
        raise ValidationError("Please enter a valid bet amount.") from None
    if not math.isfinite(value) or value <= 0:
        raise ValidationError("Please enter a valid bet amount.")
    return value


def validate_leg_count(ticket_type: TicketType | str, leg_count: int) -> None:
    ticket_type = TicketType(ticket_type)
    if ticket_type == TicketType.SINGLE and leg_count != 1:
        raise ValidationError("Single must have exactly 1 leg.")
    if ticket_type == TicketType.PARLAY and leg_count < 2:
        raise ValidationError("Parlay must have 2+ legs.")


def validate_leg(leg) -> None:
    if not str(get_value(leg, "selection") or "").strip():
        raise ValidationError("Please fill all selections.")
    if not is_valid_american(get_value(leg, "american_odds")):
        raise ValidationError("Invalid odds detected.")


def validate_ticket_draft(ticket_type: TicketType | str, stake, league: str | None, legs: Sequence) -> float:
    """Reject a ticket before anything is written. Returns the stake as a float."""
    if not (league or "").strip():
        raise ValidationError("Please select a league.")
    for leg in legs:
        validate_leg(leg)
    validate_leg_count(ticket_type, len(legs))
    return validate_stake(stake)
