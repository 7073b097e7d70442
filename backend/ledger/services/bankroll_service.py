from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime, tzinfo

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.analytics.bankroll import BankrollFilter, PeriodReport, build_period_report, current_bankroll
from ledger.analytics.status import TicketStatus
from ledger.analytics.unit_size import compute_unit_size, previous_month_end, previous_month_ending_bankroll
from ledger.config import get_ledger_tz, settings
from ledger.models.ticket import Ticket
from ledger.services.profile_service import get_or_create_profile
from ledger.services.store import store_read
from ledger.utils.odds_math import round2


async def _load(session: AsyncSession, user_id: str) -> tuple[list[Ticket], float]:
    profile = await get_or_create_profile(session, user_id)
    async with store_read(session, "load tickets"):
        tickets = (await session.scalars(select(Ticket).where(Ticket.user_id == user_id))).all()
    return list(tickets), float(profile.starting_bankroll or 0.0)


def ledger_today(tz: tzinfo | None = None) -> date:
    return datetime.now(tz or get_ledger_tz()).date()


def bankroll_card(tickets: list[Ticket], starting: float) -> dict:
    current = current_bankroll(tickets, starting)
    return {
        "starting_bankroll": starting,
        "current_bankroll": current,
        "all_time_profit": round2(current - starting),
    }


def unit_card(tickets: list[Ticket], starting: float, today: date, tz: tzinfo) -> dict:
    ending = previous_month_ending_bankroll(tickets, starting, today, tz)
    return {
        "prev_month_end": previous_month_end(today),
        "prev_month_ending_bankroll": ending,
        "unit_size": compute_unit_size(
            ending,
            pct=settings.unit_size_pct,
            increment=settings.unit_size_increment,
            cap=settings.unit_size_cap,
        ),
    }


def report_to_dict(report: PeriodReport, ticket_filter: BankrollFilter) -> dict:
    summary = asdict(report.summary)
    summary["record"] = report.summary.record
    return {
        "range_start": ticket_filter.date_range.start,
        "range_end": ticket_filter.date_range.end,
        "league": ticket_filter.league,
        "status": TicketStatus(ticket_filter.status).value if ticket_filter.status else None,
        "baseline_bankroll": report.baseline_bankroll,
        "series": [asdict(point) for point in report.series],
        "summary": summary,
    }


async def get_current_bankroll(session: AsyncSession, user_id: str) -> dict:
    tickets, starting = await _load(session, user_id)
    return bankroll_card(tickets, starting)


async def get_period_report(session: AsyncSession, user_id: str, ticket_filter: BankrollFilter) -> dict:
    tickets, starting = await _load(session, user_id)
    report = build_period_report(tickets, starting, ticket_filter, get_ledger_tz())
    return report_to_dict(report, ticket_filter)


async def get_unit_size(session: AsyncSession, user_id: str, today: date | None = None) -> dict:
    tz = get_ledger_tz()
    tickets, starting = await _load(session, user_id)
    return unit_card(tickets, starting, today or ledger_today(tz), tz)


async def get_dashboard(session: AsyncSession, user_id: str, ticket_filter: BankrollFilter, today: date | None = None) -> dict:
    tz = get_ledger_tz()
    tickets, starting = await _load(session, user_id)
    report = build_period_report(tickets, starting, ticket_filter, tz)
    return {
        "bankroll": bankroll_card(tickets, starting),
        "unit": unit_card(tickets, starting, today or ledger_today(tz), tz),
        "report": report_to_dict(report, ticket_filter),
    }
