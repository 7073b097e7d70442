from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, date, datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ledger.analytics.bankroll import BankrollFilter, filter_tickets, local_midnight
from ledger.analytics.multiplier import resolve_multiplier
from ledger.analytics.settlement import apply_settled_at, compute_settlement
from ledger.analytics.status import LegStatus, TicketStatus, TicketType, leg_status_for_ticket, ticket_status_for
from ledger.analytics.validation import validate_leg, validate_leg_count, validate_stake, validate_ticket_draft
from ledger.config import get_ledger_tz
from ledger.errors import InvalidOddsError, LegNotFoundError, LegWriteError, StorageError, TicketNotFoundError, ValidationError
from ledger.models.ticket import Leg, Ticket
from ledger.schemas.tickets import LegCreate, LegUpdate, TicketCreate, TicketQuoteRequest, TicketUpdate
from ledger.services.store import store_read, store_write
from ledger.utils.odds_math import stake_from_to_win, to_win_from_stake

logger = logging.getLogger(__name__)


def placed_at_for(day: date) -> datetime:
    """Placed dates are stored as local midnight of that day."""
    return local_midnight(day, get_ledger_tz())


def _clean(text: str | None) -> str | None:
    text = (text or "").strip()
    return text or None


def _leg_rows(ticket_type: TicketType, ticket_status: TicketStatus, legs: Sequence[LegCreate]) -> list[dict]:
    rows = []
    for leg in legs:
        status = leg_status_for_ticket(ticket_status) if ticket_type == TicketType.SINGLE else LegStatus(leg.status)
        rows.append(
            {
                "selection": leg.selection.strip(),
                "american_odds": float(leg.american_odds),
                "status": status.value,
                "notes": _clean(leg.notes),
            }
        )
    return rows


def _apply_settlement(ticket: Ticket, status: TicketStatus, legs: Sequence, payout_override: float | None, now: datetime) -> None:
    settlement = compute_settlement(ticket.ticket_type, ticket.stake, status, legs, payout_override)
    ticket.status = status.value
    ticket.payout = settlement.payout
    ticket.profit = settlement.profit
    ticket.settled_at = apply_settled_at(settlement.settled_at_policy, ticket.settled_at, now)


async def _write_legs(session: AsyncSession, ticket_id: int, rows: list[dict]) -> None:
    async with store_write(session, "save legs"):
        session.add_all([Leg(ticket_id=ticket_id, **row) for row in rows])


async def list_tickets(
    session: AsyncSession,
    user_id: str,
    ticket_filter: BankrollFilter | None = None,
    settled: bool | None = None,
) -> list[Ticket]:
    """Newest first. ``settled`` splits the open list from everything else."""
    async with store_read(session, "load tickets"):
        tickets = list(
            (
                await session.scalars(
                    select(Ticket)
                    .where(Ticket.user_id == user_id)
                    .options(selectinload(Ticket.legs))
                    .order_by(Ticket.placed_at.desc(), Ticket.id.desc())
                )
            ).all()
        )
    if ticket_filter is not None:
        tickets = filter_tickets(tickets, ticket_filter, get_ledger_tz())
    if settled is not None:
        tickets = [t for t in tickets if (t.status != TicketStatus.OPEN.value) == settled]
    return tickets


async def get_ticket(session: AsyncSession, user_id: str, ticket_id: int) -> Ticket:
    async with store_read(session, "load ticket"):
        ticket = await session.scalar(
            select(Ticket)
            .where(Ticket.id == ticket_id, Ticket.user_id == user_id)
            .options(selectinload(Ticket.legs))
            .execution_options(populate_existing=True)
        )
    if ticket is None:
        raise TicketNotFoundError(ticket_id)
    return ticket


async def create_ticket(session: AsyncSession, user_id: str, payload: TicketCreate, now: datetime | None = None) -> Ticket:
    """Validate, settle and save a ticket, then its legs.

    A leg failure after the ticket row is saved raises LegWriteError so the
    caller retries only the legs (see ``add_legs``).
    """
    now = now or datetime.now(UTC)
    ticket_type = TicketType(payload.ticket_type)
    stake = validate_ticket_draft(ticket_type, payload.stake, payload.league, payload.legs)

    status = ticket_status_for(ticket_type, payload.status, [leg.status for leg in payload.legs])
    rows = _leg_rows(ticket_type, status, payload.legs)

    ticket = Ticket(
        user_id=user_id,
        ticket_type=ticket_type.value,
        stake=stake,
        league=_clean(payload.league),
        book=_clean(payload.book),
        notes=_clean(payload.notes),
        placed_at=placed_at_for(payload.placed_on),
        settled_at=None,
    )
    _apply_settlement(ticket, status, rows, payload.payout_override, now)

    async with store_write(session, "save ticket"):
        session.add(ticket)
    ticket_id = ticket.id

    try:
        await _write_legs(session, ticket_id, rows)
    except StorageError as exc:
        raise LegWriteError(ticket_id, "Ticket saved, but legs failed to save.") from exc

    logger.info(
        "ticket created: ticket_id=%s user_id=%s type=%s legs=%s status=%s profit=%s",
        ticket_id,
        user_id,
        ticket.ticket_type,
        len(rows),
        ticket.status,
        ticket.profit,
    )
    return await get_ticket(session, user_id, ticket_id)


async def add_legs(
    session: AsyncSession,
    user_id: str,
    ticket_id: int,
    legs: Sequence[LegCreate],
    now: datetime | None = None,
) -> Ticket:
    """Retry the leg write for a ticket whose legs failed to save."""
    now = now or datetime.now(UTC)
    ticket = await get_ticket(session, user_id, ticket_id)
    if ticket.legs:
        raise ValidationError("Ticket already has legs.")
    ticket_type = TicketType(ticket.ticket_type)
    for leg in legs:
        validate_leg(leg)
    validate_leg_count(ticket_type, len(legs))

    requested = TicketStatus(ticket.status)
    status = ticket_status_for(ticket_type, requested, [leg.status for leg in legs])
    rows = _leg_rows(ticket_type, status, legs)
    try:
        await _write_legs(session, ticket_id, rows)
    except StorageError as exc:
        raise LegWriteError(ticket_id, "Ticket saved, but legs failed to save.") from exc

    ticket = await get_ticket(session, user_id, ticket_id)
    async with store_write(session, "settle ticket"):
        _apply_settlement(ticket, status, ticket.legs, None, now)
    logger.info("legs added: ticket_id=%s legs=%s status=%s", ticket_id, len(rows), ticket.status)
    return await get_ticket(session, user_id, ticket_id)


async def update_ticket(
    session: AsyncSession,
    user_id: str,
    ticket_id: int,
    payload: TicketUpdate,
    now: datetime | None = None,
) -> Ticket:
    """Apply edits and re-run settlement. Single legs then mirror the ticket status."""
    now = now or datetime.now(UTC)
    ticket = await get_ticket(session, user_id, ticket_id)
    fields = payload.model_dump(exclude_unset=True)
    ticket_type = TicketType(ticket.ticket_type)

    stake = validate_stake(fields["stake"]) if fields.get("stake") is not None else ticket.stake
    league = ticket.league
    if "league" in fields:
        league = _clean(fields["league"])
        if league is None:
            raise ValidationError("Please select a league.")
    requested = fields.get("status") or ticket.status
    status = ticket_status_for(ticket_type, requested, [leg.status for leg in ticket.legs])
    settlement = compute_settlement(ticket_type, stake, status, ticket.legs, fields.get("payout_override"))

    async with store_write(session, "save ticket"):
        ticket.stake = stake
        ticket.league = league
        if "book" in fields:
            ticket.book = _clean(fields["book"])
        if "notes" in fields:
            ticket.notes = _clean(fields["notes"])
        if fields.get("placed_on") is not None:
            ticket.placed_at = placed_at_for(fields["placed_on"])
        ticket.status = status.value
        ticket.payout = settlement.payout
        ticket.profit = settlement.profit
        ticket.settled_at = apply_settled_at(settlement.settled_at_policy, ticket.settled_at, now)

    if ticket_type == TicketType.SINGLE and ticket.legs:
        mirrored = leg_status_for_ticket(status).value
        try:
            async with store_write(session, "sync single leg status"):
                ticket.legs[0].status = mirrored
        except StorageError as exc:
            raise LegWriteError(ticket_id, "Saved ticket, but failed to sync single leg status.") from exc

    logger.info(
        "ticket updated: ticket_id=%s status=%s payout=%s profit=%s",
        ticket_id,
        ticket.status,
        ticket.payout,
        ticket.profit,
    )
    return await get_ticket(session, user_id, ticket_id)


async def update_leg(
    session: AsyncSession,
    user_id: str,
    ticket_id: int,
    leg_id: int,
    payload: LegUpdate,
    now: datetime | None = None,
) -> Ticket:
    """Edit one leg and re-settle its ticket from the legs."""
    now = now or datetime.now(UTC)
    ticket = await get_ticket(session, user_id, ticket_id)
    leg = next((candidate for candidate in ticket.legs if candidate.id == leg_id), None)
    if leg is None:
        raise LegNotFoundError(ticket_id, leg_id)

    fields = payload.model_dump(exclude_unset=True)
    ticket_type = TicketType(ticket.ticket_type)
    selection = fields["selection"].strip() if fields.get("selection") is not None else leg.selection
    odds = fields["american_odds"] if fields.get("american_odds") is not None else leg.american_odds
    validate_leg({"selection": selection, "american_odds": odds})

    leg_status = leg.status
    if fields.get("status") is not None:
        leg_status = LegStatus(fields["status"]).value
        if ticket_type == TicketType.SINGLE and leg_status != leg.status:
            raise ValidationError("A single's leg status follows the ticket status.")

    async with store_write(session, "save leg"):
        leg.selection = selection
        leg.american_odds = float(odds)
        leg.status = leg_status
        if "notes" in fields:
            leg.notes = _clean(fields["notes"])
        status = ticket_status_for(ticket_type, ticket.status, [candidate.status for candidate in ticket.legs])
        _apply_settlement(ticket, status, ticket.legs, None, now)

    logger.info("leg updated: ticket_id=%s leg_id=%s leg_status=%s ticket_status=%s", ticket_id, leg_id, leg.status, ticket.status)
    return await get_ticket(session, user_id, ticket_id)


async def delete_ticket(session: AsyncSession, user_id: str, ticket_id: int) -> None:
    """Delete a ticket and its legs, legs first so none are orphaned."""
    await get_ticket(session, user_id, ticket_id)
    async with store_write(session, "delete ticket"):
        await session.execute(delete(Leg).where(Leg.ticket_id == ticket_id))
        await session.execute(delete(Ticket).where(Ticket.id == ticket_id, Ticket.user_id == user_id))
    logger.info("ticket deleted: ticket_id=%s user_id=%s", ticket_id, user_id)


def quote_ticket(payload: TicketQuoteRequest) -> dict:
    """Live preview for a draft ticket: multiplier, risk/to-win pair and settlement."""
    ticket_type = TicketType(payload.ticket_type)
    status = ticket_status_for(ticket_type, payload.status, [leg.status for leg in payload.legs])
    legs = [
        {"american_odds": leg.american_odds, "status": row["status"]}
        for leg, row in zip(payload.legs, _leg_rows(ticket_type, status, payload.legs))
    ]
    result = resolve_multiplier(ticket_type, legs)

    stake, to_win = payload.stake, payload.to_win
    out = {
        "multiplier": result.multiplier,
        "multiplier_valid": result.valid,
        "stake": stake,
        "to_win": to_win,
        "status": status,
        "payout": None,
        "profit": None,
        "reason": "",
    }
    if not result.valid:
        out["reason"] = "invalid_multiplier"
        return out

    if stake is not None:
        out["to_win"] = to_win_from_stake(stake, result.multiplier)
    elif to_win is not None:
        out["stake"] = stake_from_to_win(to_win, result.multiplier)

    if out["stake"] is None:
        out["reason"] = "missing_stake"
        return out
    try:
        settlement = compute_settlement(ticket_type, out["stake"], status, legs, payload.payout_override)
    except (ValidationError, InvalidOddsError) as exc:
        out["reason"] = str(exc)
        return out
    out["payout"] = settlement.payout
    out["profit"] = settlement.profit
    return out
