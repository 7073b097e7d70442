from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class TicketType(str, Enum):
    SINGLE = "single"
    PARLAY = "parlay"


class TicketStatus(str, Enum):
    OPEN = "open"
    WON = "won"
    LOST = "lost"
    PUSH = "push"
    VOID = "void"
    PARTIAL = "partial"


class LegStatus(str, Enum):
    OPEN = "open"
    WON = "won"
    LOST = "lost"
    PUSH = "push"
    VOID = "void"


UNSETTLED_TICKET_STATUSES = frozenset({TicketStatus.OPEN, TicketStatus.PARTIAL})
NEUTRAL_LEG_STATUSES = frozenset({LegStatus.PUSH, LegStatus.VOID})


def derive_parlay_status(leg_statuses: Iterable[LegStatus | str]) -> TicketStatus:
    """Aggregate parlay status from its legs. First matching rule wins:

    1. any leg lost -> lost
    2. any leg open -> open
    3. every leg void or push -> push
    4. any leg won -> won
    5. otherwise push
    """
    statuses = [LegStatus(s) for s in leg_statuses]

    if any(s == LegStatus.LOST for s in statuses):
        return TicketStatus.LOST
    if any(s == LegStatus.OPEN for s in statuses):
        return TicketStatus.OPEN
    if all(s in NEUTRAL_LEG_STATUSES for s in statuses):
        return TicketStatus.PUSH
    if any(s == LegStatus.WON for s in statuses):
        return TicketStatus.WON
    # unreachable with the current enum members; kept as a catch-all
    return TicketStatus.PUSH


def leg_status_for_ticket(status: TicketStatus | str) -> LegStatus:
    """Leg status mirrored onto the sole leg of a single ticket."""
    status = TicketStatus(status)
    if status == TicketStatus.WON:
        return LegStatus.WON
    if status == TicketStatus.LOST:
        return LegStatus.LOST
    if status == TicketStatus.PUSH:
        return LegStatus.PUSH
    if status == TicketStatus.VOID:
        return LegStatus.VOID
    if status in UNSETTLED_TICKET_STATUSES:
        return LegStatus.OPEN
    raise ValueError(f"Unhandled ticket status: {status!r}")


def ticket_status_for(
    ticket_type: TicketType | str,
    requested_status: TicketStatus | str | None,
    leg_statuses: Iterable[LegStatus | str],
) -> TicketStatus:
    """Status to store: derived for parlays, user-chosen for singles."""
    ticket_type = TicketType(ticket_type)
    if ticket_type == TicketType.PARLAY:
        return derive_parlay_status(leg_statuses)
    if ticket_type == TicketType.SINGLE:
        return TicketStatus(requested_status or TicketStatus.OPEN)
    raise ValueError(f"Unhandled ticket type: {ticket_type!r}")
