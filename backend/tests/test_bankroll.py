from datetime import UTC, date, datetime
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from ledger.analytics.bankroll import (
    BankrollFilter,
    DatePreset,
    DateRange,
    build_period_report,
    current_bankroll,
    filter_tickets,
    local_day,
    resolve_date_range,
    summarize,
)
from ledger.errors import ValidationError

NY = ZoneInfo("America/New_York")


def _ticket(day, profit, stake=10.0, status="won", league="NBA", placed_at=None):
    return SimpleNamespace(
        stake=stake,
        status=status,
        profit=profit,
        league=league,
        placed_at=placed_at or datetime(day.year, day.month, day.day, tzinfo=NY),
    )


@pytest.fixture
def tickets():
    return [
        _ticket(date(2026, 9, 28), 50.0),
        _ticket(date(2026, 9, 30), -20.0, status="lost", league="NHL"),
        _ticket(date(2026, 10, 2), 90.91, stake=100.0),
        _ticket(date(2026, 10, 2), -50.0, stake=50.0, status="lost"),
        _ticket(date(2026, 10, 4), None, stake=25.0, status="open"),
        _ticket(date(2026, 10, 5), 30.0, stake=20.0, league="NHL"),
    ]


def test_presets_resolve_to_inclusive_day_ranges():
    today = date(2026, 10, 17)
    assert resolve_date_range("7D", today) == DateRange(date(2026, 10, 11), today)
    assert resolve_date_range("30D", today) == DateRange(date(2026, 9, 18), today)
    assert resolve_date_range(DatePreset.MONTH_TO_DATE, today) == DateRange(date(2026, 10, 1), today)
    assert resolve_date_range("LAST_MONTH", today) == DateRange(date(2026, 9, 1), date(2026, 9, 30))
    assert resolve_date_range("ALL", today) == DateRange(None, None)


def test_last_month_crosses_year_boundary():
    assert resolve_date_range("LAST_MONTH", date(2027, 1, 9)) == DateRange(date(2026, 12, 1), date(2026, 12, 31))


def test_custom_range_passes_through_and_rejects_reversed_dates():
    today = date(2026, 10, 17)
    assert resolve_date_range("CUSTOM", today, date(2026, 1, 1), None) == DateRange(date(2026, 1, 1), None)
    with pytest.raises(ValidationError):
        resolve_date_range("CUSTOM", today, date(2026, 2, 1), date(2026, 1, 1))


def test_league_report_starts_from_baseline_and_fills_every_day(tickets):
    ticket_filter = BankrollFilter(DateRange(date(2026, 10, 1), date(2026, 10, 5)), league="NBA")
    report = build_period_report(tickets, 1000.0, ticket_filter, NY)

    assert report.baseline_bankroll == 1050.0
    assert [p.date for p in report.series] == [date(2026, 10, d) for d in range(1, 6)]
    assert report.series[0].bankroll == 1050.0
    assert report.series[0].cumulative_profit == 0.0
    assert report.series[1].bankroll == 1090.91
    assert report.series[1].cumulative_profit == 40.91
    assert report.series[-1].bankroll == 1090.91

    assert report.summary.total_profit == 40.91
    assert report.summary.total_bet == 175.0
    assert report.summary.roi == pytest.approx(40.91 / 175.0 * 100)
    assert report.summary.record == "1-1-0"


def test_report_without_league_filter(tickets):
    ticket_filter = BankrollFilter(DateRange(date(2026, 10, 1), date(2026, 10, 5)))
    report = build_period_report(tickets, 1000.0, ticket_filter, NY)
    assert report.baseline_bankroll == 1030.0
    assert report.series[-1].bankroll == 1100.91
    assert report.series[-1].cumulative_profit == 70.91


def test_status_filter_narrows_summary_not_curve(tickets):
    ticket_filter = BankrollFilter(DateRange(date(2026, 10, 1), date(2026, 10, 5)), status="won")
    report = build_period_report(tickets, 1000.0, ticket_filter, NY)
    assert report.summary.total_profit == 120.91
    assert report.summary.total_bet == 120.0
    assert (report.summary.wins, report.summary.losses, report.summary.pushes) == (2, 0, 0)
    assert report.series[-1].bankroll == 1100.91


def test_all_time_series_spans_first_to_last_ticket_day(tickets):
    report = build_period_report(tickets, 0.0, BankrollFilter(), NY)
    assert report.baseline_bankroll == 0.0
    assert report.series[0].date == date(2026, 9, 28)
    assert report.series[-1].date == date(2026, 10, 5)
    assert len(report.series) == 8
    assert report.series[-1].bankroll == 100.91


def test_empty_history_gives_empty_all_time_series():
    report = build_period_report([], 250.0, BankrollFilter(), NY)
    assert report.series == []
    assert report.baseline_bankroll == 250.0
    assert report.summary.roi == 0.0


def test_day_key_uses_local_calendar_date():
    late_night = datetime(2026, 10, 3, 3, 30, tzinfo=UTC)  # 23:30 on Oct 2 in New York
    assert local_day(late_night, NY) == date(2026, 10, 2)

    tickets = [
        _ticket(None, 10.0, placed_at=late_night),
        _ticket(None, 5.0, placed_at=datetime(2026, 10, 1, 3, 0, tzinfo=UTC)),
    ]
    ticket_filter = BankrollFilter(DateRange(date(2026, 10, 2), date(2026, 10, 2)))
    report = build_period_report(tickets, 100.0, ticket_filter, NY)
    assert report.baseline_bankroll == 105.0
    assert [(p.date, p.bankroll) for p in report.series] == [(date(2026, 10, 2), 115.0)]


def test_naive_datetimes_are_ledger_local():
    assert local_day(datetime(2026, 10, 2, 0, 0), NY) == date(2026, 10, 2)


def test_summary_counts_void_as_push_and_never_divides_by_zero():
    summary = summarize(
        [
            {"stake": 10, "status": "push", "profit": 0},
            {"stake": 10, "status": "void", "profit": 0},
            {"stake": 10, "status": "open", "profit": None},
        ]
    )
    assert summary.record == "0-0-2"
    assert summary.roi == 0.0
    assert summarize([]).roi == 0.0


def test_current_bankroll_ignores_filters(tickets):
    assert current_bankroll(tickets, 1000.0) == 1100.91
    ranged = build_period_report(tickets, 1000.0, BankrollFilter(DateRange(date(2026, 10, 5), date(2026, 10, 5)), league="NHL"), NY)
    assert ranged.baseline_bankroll == 980.0
    assert ranged.series[-1].bankroll == 1010.0


def test_custom_range_rejects_unbounded_end_and_oversized_spans():
    today = date(2026, 10, 17)
    with pytest.raises(ValidationError):
        resolve_date_range("CUSTOM", today, date(2026, 1, 1), date.max)
    with pytest.raises(ValidationError):
        resolve_date_range("CUSTOM", today, date(1, 1, 1), date(9998, 12, 31))
    with pytest.raises(ValidationError):
        resolve_date_range("CUSTOM", today, date(2000, 1, 1), None)
    ten_years = resolve_date_range("CUSTOM", today, date(2016, 10, 18), date(2026, 10, 17))
    assert ten_years.start == date(2016, 10, 18)


def test_report_tolerates_range_ending_on_last_representable_day():
    report = build_period_report([], 0.0, BankrollFilter(DateRange(date.max, date.max)), NY)
    assert [p.date for p in report.series] == [date.max]
    assert report.series[0].bankroll == 0.0


def test_filter_tickets_applies_league_range_and_status(tickets):
    ticket_filter = BankrollFilter(DateRange(date(2026, 10, 1), date(2026, 10, 5)), league="NBA")
    assert [t.profit for t in filter_tickets(tickets, ticket_filter, NY)] == [90.91, -50.0, None]

    won_only = BankrollFilter(DateRange(date(2026, 10, 1), None), status="won")
    assert [t.profit for t in filter_tickets(tickets, won_only, NY)] == [90.91, 30.0]
    assert len(filter_tickets(tickets, BankrollFilter(), NY)) == len(tickets)
