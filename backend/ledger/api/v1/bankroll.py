from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.analytics.bankroll import BankrollFilter, DatePreset
from ledger.analytics.status import TicketStatus
from ledger.api.deps import build_ticket_filter, get_current_user_id, http_error
from ledger.database import get_session
from ledger.errors import LedgerError
from ledger.schemas.bankroll import CurrentBankrollResponse, DashboardResponse, PeriodReportResponse, UnitSizeResponse
from ledger.services.bankroll_service import get_current_bankroll, get_dashboard, get_period_report, get_unit_size

router = APIRouter(prefix="/bankroll", tags=["bankroll"])


def bankroll_filter(
    preset: DatePreset = Query(default=DatePreset.MONTH_TO_DATE),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    league: str | None = Query(default=None),
    status: TicketStatus | None = Query(default=None),
) -> BankrollFilter:
    return build_ticket_filter(preset, start_date, end_date, league, status)


@router.get("/current", response_model=CurrentBankrollResponse)
async def current_bankroll(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> dict:
    try:
        return await get_current_bankroll(session, user_id)
    except LedgerError as exc:
        raise http_error(exc) from exc


@router.get("/report", response_model=PeriodReportResponse)
async def period_report(
    ticket_filter: BankrollFilter = Depends(bankroll_filter),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> dict:
    try:
        return await get_period_report(session, user_id, ticket_filter)
    except LedgerError as exc:
        raise http_error(exc) from exc


@router.get("/unit-size", response_model=UnitSizeResponse)
async def unit_size(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> dict:
    try:
        return await get_unit_size(session, user_id)
    except LedgerError as exc:
        raise http_error(exc) from exc


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    ticket_filter: BankrollFilter = Depends(bankroll_filter),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> dict:
    try:
        return await get_dashboard(session, user_id, ticket_filter)
    except LedgerError as exc:
        raise http_error(exc) from exc
