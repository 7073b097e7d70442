from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo
from enum import Enum

from ledger.analytics.status import TicketStatus
from ledger.errors import ValidationError
from ledger.utils.odds_math import round2
from ledger.utils.records import get_value


class DatePreset(str, Enum):
    LAST_7_DAYS = "7D"
    LAST_30_DAYS = "30D"
    MONTH_TO_DATE = "MTD"
    LAST_MONTH = "LAST_MONTH"
    ALL = "ALL"
    CUSTOM = "CUSTOM"


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-day range; ``None`` leaves that side unbounded."""

    start: date | None = None
    end: date | None = None


@dataclass(frozen=True)
class BankrollFilter:
    date_range: DateRange = field(default_factory=DateRange)
    league: str | None = None
    status: TicketStatus | None = None


@dataclass
class BankrollPoint:
    date: date
    bankroll: float
    cumulative_profit: float


@dataclass
class PeriodSummary:
    total_profit: float
    total_bet: float
    roi: float
    wins: int
    losses: int
    pushes: int

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}-{self.pushes}"


@dataclass
class PeriodReport:
    baseline_bankroll: float
    series: list[BankrollPoint]
    summary: PeriodSummary


MAX_RANGE_DAYS = 3660


def _first_of_month(d: date) -> date:
    return d.replace(day=1)


def _check_custom_range(start: date | None, end: date | None, today: date) -> None:
    if start and end and start > end:
        raise ValidationError("Start date must be on or before end date.")
    if end == date.max:
        raise ValidationError("End date is out of range.")
    if start and ((end or max(today, start)) - start).days >= MAX_RANGE_DAYS:
        raise ValidationError("Date range cannot span more than 10 years.")


def resolve_date_range(
    preset: DatePreset | str,
    today: date,
    custom_start: date | None = None,
    custom_end: date | None = None,
) -> DateRange:
    preset = DatePreset(preset)
    if preset == DatePreset.ALL:
        return DateRange()
    if preset == DatePreset.CUSTOM:
        _check_custom_range(custom_start, custom_end, today)
        return DateRange(custom_start, custom_end)
    if preset == DatePreset.LAST_7_DAYS:
        return DateRange(today - timedelta(days=6), today)
    if preset == DatePreset.LAST_30_DAYS:
        return DateRange(today - timedelta(days=29), today)
    if preset == DatePreset.MONTH_TO_DATE:
        return DateRange(_first_of_month(today), today)
    if preset == DatePreset.LAST_MONTH:
        last_month_end = _first_of_month(today) - timedelta(days=1)
        return DateRange(_first_of_month(last_month_end), last_month_end)
    raise ValueError(f"Unhandled date preset: {preset!r}")


def local_midnight(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def as_local(moment: datetime, tz: tzinfo) -> datetime:
    """Naive datetimes are taken to be ledger-local already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


def local_day(moment: datetime, tz: tzinfo) -> date:
    return as_local(moment, tz).date()


def realized_profit(ticket) -> float:
    """Stored profit, or 0 for an unsettled ticket."""
    profit = get_value(ticket, "profit")
    if profit is None or isinstance(profit, bool):
        return 0.0
    profit = float(profit)
    return profit if math.isfinite(profit) else 0.0


def _league_matches(ticket, league: str | None) -> bool:
    return league is None or (get_value(ticket, "league") or "") == league


def _range_bounds(date_range: DateRange, tz: tzinfo) -> tuple[datetime | None, datetime | None]:
    start_at = local_midnight(date_range.start, tz) if date_range.start else None
    end_before = None
    if date_range.end and date_range.end < date.max:
        end_before = local_midnight(date_range.end + timedelta(days=1), tz)
    return start_at, end_before


def split_by_range(tickets: Iterable, ticket_filter: BankrollFilter, tz: tzinfo) -> tuple[float, list]:
    """League-matching tickets in the date range, plus the profit of those placed before it."""
    start_at, end_before = _range_bounds(ticket_filter.date_range, tz)

    profit_before = 0.0
    in_range = []
    for ticket in tickets:
        if not _league_matches(ticket, ticket_filter.league):
            continue
        placed = as_local(get_value(ticket, "placed_at"), tz)
        if start_at is not None and placed < start_at:
            profit_before += realized_profit(ticket)
            continue
        if end_before is not None and placed >= end_before:
            continue
        in_range.append(ticket)
    return profit_before, in_range


def _with_status(tickets: Iterable, status: TicketStatus | str | None) -> list:
    if status is None:
        return list(tickets)
    wanted = TicketStatus(status)
    return [t for t in tickets if TicketStatus(get_value(t, "status")) == wanted]


def filter_tickets(tickets: Iterable, ticket_filter: BankrollFilter, tz: tzinfo) -> list:
    """Tickets passing the league, date range and status filters, in input order."""
    _, in_range = split_by_range(tickets, ticket_filter, tz)
    return _with_status(in_range, ticket_filter.status)


def summarize(tickets: Iterable) -> PeriodSummary:
    total_profit = total_bet = 0.0
    wins = losses = pushes = 0
    for ticket in tickets:
        total_bet += float(get_value(ticket, "stake") or 0.0)
        total_profit += realized_profit(ticket)
        status = TicketStatus(get_value(ticket, "status"))
        if status == TicketStatus.WON:
            wins += 1
        elif status == TicketStatus.LOST:
            losses += 1
        elif status in (TicketStatus.PUSH, TicketStatus.VOID):
            pushes += 1

    return PeriodSummary(
        total_profit=round2(total_profit),
        total_bet=round2(total_bet),
        roi=(total_profit / total_bet * 100.0) if total_bet > 0 else 0.0,
        wins=wins,
        losses=losses,
        pushes=pushes,
    )


def build_period_report(
    tickets: Sequence,
    starting_bankroll: float,
    ticket_filter: BankrollFilter,
    tz: tzinfo,
) -> PeriodReport:
    """Bankroll curve and summary for one filtered period.

    The curve starts from the bankroll as it stood when the range opened
    (starting bankroll plus every league-matching ticket placed earlier) and
    has one point per calendar day. Cumulative profit counts only in-range
    tickets. The summary further narrows the in-range tickets by status.
    """
    profit_before, in_range = split_by_range(tickets, ticket_filter, tz)
    baseline = round2(float(starting_bankroll or 0.0) + profit_before)

    by_day: dict[date, float] = {}
    for ticket in in_range:
        day = local_day(get_value(ticket, "placed_at"), tz)
        by_day[day] = by_day.get(day, 0.0) + realized_profit(ticket)

    series: list[BankrollPoint] = []
    first_day = ticket_filter.date_range.start or (min(by_day) if by_day else None)
    last_day = ticket_filter.date_range.end or (max(by_day) if by_day else None)
    if first_day is not None and last_day is not None:
        running_bankroll = baseline
        running_profit = 0.0
        for offset in range((last_day - first_day).days + 1):
            day = first_day + timedelta(days=offset)
            day_profit = by_day.get(day, 0.0)
            running_bankroll += day_profit
            running_profit += day_profit
            series.append(BankrollPoint(date=day, bankroll=round2(running_bankroll), cumulative_profit=round2(running_profit)))

    summary = summarize(_with_status(in_range, ticket_filter.status))
    return PeriodReport(baseline_bankroll=baseline, series=series, summary=summary)


def current_bankroll(tickets: Iterable, starting_bankroll: float) -> float:
    """Starting bankroll plus all-time profit. Ignores every dashboard filter."""
    return round2(float(starting_bankroll or 0.0) + sum(realized_profit(t) for t in tickets))
