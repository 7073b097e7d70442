from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.analytics.bankroll import BankrollFilter, DatePreset
from ledger.analytics.multiplier import resolve_multiplier
from ledger.analytics.status import TicketStatus
from ledger.analytics.validation import LEAGUE_OPTIONS
from ledger.api.deps import build_ticket_filter, get_current_user_id, http_error
from ledger.database import get_session
from ledger.errors import LedgerError
from ledger.models.ticket import Ticket
from ledger.schemas.tickets import (
    LeagueOptionsResponse,
    LegResponse,
    LegsCreate,
    LegUpdate,
    TicketCreate,
    TicketQuoteRequest,
    TicketQuoteResponse,
    TicketResponse,
    TicketUpdate,
)
from ledger.services.ticket_service import (
    add_legs,
    create_ticket,
    delete_ticket,
    get_ticket,
    list_tickets,
    quote_ticket,
    update_leg,
    update_ticket,
)

router = APIRouter(prefix="/tickets", tags=["tickets"])


def _serialize_ticket(ticket: Ticket) -> TicketResponse:
    multiplier = resolve_multiplier(ticket.ticket_type, ticket.legs)
    return TicketResponse(
        id=ticket.id,
        ticket_type=ticket.ticket_type,
        stake=ticket.stake,
        league=ticket.league,
        book=ticket.book,
        notes=ticket.notes,
        status=ticket.status,
        payout=ticket.payout,
        profit=ticket.profit,
        placed_at=ticket.placed_at,
        settled_at=ticket.settled_at,
        multiplier=multiplier.multiplier,
        legs=[
            LegResponse(
                id=leg.id,
                ticket_id=leg.ticket_id,
                selection=leg.selection,
                american_odds=leg.american_odds,
                status=leg.status,
                notes=leg.notes,
            )
            for leg in ticket.legs
        ],
    )


def ticket_list_filter(
    preset: DatePreset = Query(default=DatePreset.ALL),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    league: str | None = Query(default=None),
    status: TicketStatus | None = Query(default=None),
) -> BankrollFilter:
    return build_ticket_filter(preset, start_date, end_date, league, status)


@router.get("", response_model=list[TicketResponse])
async def get_tickets(
    settled: bool | None = Query(default=None),
    ticket_filter: BankrollFilter = Depends(ticket_list_filter),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> list[TicketResponse]:
    try:
        tickets = await list_tickets(session, user_id, ticket_filter, settled=settled)
    except LedgerError as exc:
        raise http_error(exc) from exc
    return [_serialize_ticket(t) for t in tickets]


@router.get("/leagues", response_model=LeagueOptionsResponse)
async def get_league_options() -> LeagueOptionsResponse:
    return LeagueOptionsResponse(leagues=list(LEAGUE_OPTIONS))


@router.post("/quote", response_model=TicketQuoteResponse)
async def quote(request: TicketQuoteRequest) -> TicketQuoteResponse:
    return TicketQuoteResponse(**quote_ticket(request))


@router.post("", response_model=TicketResponse, status_code=201)
async def post_ticket(
    request: TicketCreate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> TicketResponse:
    try:
        ticket = await create_ticket(session, user_id, request)
    except LedgerError as exc:
        raise http_error(exc) from exc
    return _serialize_ticket(ticket)


@router.get("/{ticket_id}", response_model=TicketResponse)
async def get_ticket_detail(
    ticket_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> TicketResponse:
    try:
        ticket = await get_ticket(session, user_id, ticket_id)
    except LedgerError as exc:
        raise http_error(exc) from exc
    return _serialize_ticket(ticket)


@router.patch("/{ticket_id}", response_model=TicketResponse)
async def patch_ticket(
    ticket_id: int,
    request: TicketUpdate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> TicketResponse:
    try:
        ticket = await update_ticket(session, user_id, ticket_id, request)
    except LedgerError as exc:
        raise http_error(exc) from exc
    return _serialize_ticket(ticket)


@router.delete("/{ticket_id}", status_code=204)
async def remove_ticket(
    ticket_id: int,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> None:
    try:
        await delete_ticket(session, user_id, ticket_id)
    except LedgerError as exc:
        raise http_error(exc) from exc


@router.post("/{ticket_id}/legs", response_model=TicketResponse)
async def post_legs(
    ticket_id: int,
    request: LegsCreate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> TicketResponse:
    try:
        ticket = await add_legs(session, user_id, ticket_id, request.legs)
    except LedgerError as exc:
        raise http_error(exc) from exc
    return _serialize_ticket(ticket)


@router.patch("/{ticket_id}/legs/{leg_id}", response_model=TicketResponse)
async def patch_leg(
    ticket_id: int,
    leg_id: int,
    request: LegUpdate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> TicketResponse:
    try:
        ticket = await update_leg(session, user_id, ticket_id, leg_id, request)
    except LedgerError as exc:
        raise http_error(exc) from exc
    return _serialize_ticket(ticket)
