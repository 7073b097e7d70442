from __future__ import annotations

from datetime import date

from fastapi import Header, HTTPException

from ledger.analytics.bankroll import BankrollFilter, DatePreset, resolve_date_range
from ledger.analytics.status import TicketStatus
from ledger.errors import (
    InvalidOddsError,
    LedgerError,
    LegNotFoundError,
    LegWriteError,
    StorageError,
    TicketNotFoundError,
    ValidationError,
)
from ledger.services.bankroll_service import ledger_today


async def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """User id asserted by the upstream identity provider."""
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Not logged in")
    return user_id


def http_error(exc: LedgerError) -> HTTPException:
    if isinstance(exc, (ValidationError, InvalidOddsError)):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, (TicketNotFoundError, LegNotFoundError)):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, LegWriteError):
        return HTTPException(status_code=502, detail={"message": str(exc), "ticket_id": exc.ticket_id})
    if isinstance(exc, StorageError):
        return HTTPException(status_code=503, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def build_ticket_filter(
    preset: DatePreset,
    start_date: date | None,
    end_date: date | None,
    league: str | None,
    status: TicketStatus | None,
) -> BankrollFilter:
    """League "ALL" or blank means no league filter."""
    try:
        date_range = resolve_date_range(preset, ledger_today(), start_date, end_date)
    except LedgerError as exc:
        raise http_error(exc) from exc
    league = (league or "").strip()
    return BankrollFilter(
        date_range=date_range,
        league=None if league in ("", "ALL") else league,
        status=status,
    )
