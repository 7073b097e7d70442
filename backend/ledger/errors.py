from __future__ import annotations


class LedgerError(Exception):
    """Base class for errors raised by the ledger."""


class InvalidOddsError(LedgerError, ValueError):
    """American odds of zero, or not a finite number."""


class ValidationError(LedgerError):
    """Input rejected before anything is written; the message is shown to the user."""


class StorageError(LedgerError):
    """The store failed; the in-progress write was rolled back."""


class LegWriteError(StorageError):
    """The ticket row was saved but writing its legs failed.

    Callers should retry the legs for ``ticket_id`` only, never re-create the ticket.
    """

    def __init__(self, ticket_id: int, message: str) -> None:
        super().__init__(message)
        self.ticket_id = ticket_id


class TicketNotFoundError(LedgerError):
    def __init__(self, ticket_id: int) -> None:
        super().__init__(f"ticket {ticket_id} not found")
        self.ticket_id = ticket_id


class LegNotFoundError(LedgerError):
    def __init__(self, ticket_id: int, leg_id: int) -> None:
        super().__init__(f"leg {leg_id} not found on ticket {ticket_id}")
        self.ticket_id = ticket_id
        self.leg_id = leg_id
