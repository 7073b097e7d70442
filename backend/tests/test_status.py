import pytest

from ledger.analytics.status import (
    LegStatus,
    TicketStatus,
    derive_parlay_status,
    leg_status_for_ticket,
    ticket_status_for,
)


def test_lost_leg_beats_open_leg():
    assert derive_parlay_status(["won", "lost", "open"]) == TicketStatus.LOST


def test_open_leg_keeps_parlay_open():
    assert derive_parlay_status(["won", "open", "push"]) == TicketStatus.OPEN


def test_all_void_or_push_is_push():
    assert derive_parlay_status(["push", "void"]) == TicketStatus.PUSH
    assert derive_parlay_status([LegStatus.VOID, LegStatus.VOID]) == TicketStatus.PUSH


def test_won_with_push_leg_is_won():
    assert derive_parlay_status(["won", "push"]) == TicketStatus.WON
    assert derive_parlay_status(["won", "won"]) == TicketStatus.WON


def test_empty_leg_set_falls_back_to_push():
    # catch-all behaviour, not a business rule
    assert derive_parlay_status([]) == TicketStatus.PUSH


def test_unknown_leg_status_rejected():
    with pytest.raises(ValueError):
        derive_parlay_status(["won", "partial"])


@pytest.mark.parametrize(
    ("ticket_status", "leg_status"),
    [
        ("won", LegStatus.WON),
        ("lost", LegStatus.LOST),
        ("push", LegStatus.PUSH),
        ("void", LegStatus.VOID),
        ("open", LegStatus.OPEN),
        ("partial", LegStatus.OPEN),
    ],
)
def test_single_leg_mirrors_ticket_status(ticket_status, leg_status):
    assert leg_status_for_ticket(ticket_status) == leg_status


def test_parlay_status_ignores_requested_value():
    assert ticket_status_for("parlay", "won", ["lost", "won"]) == TicketStatus.LOST
    assert ticket_status_for("single", "void", ["open"]) == TicketStatus.VOID
    assert ticket_status_for("single", None, ["won"]) == TicketStatus.OPEN
