from datetime import UTC, date, datetime
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from ledger.analytics.unit_size import compute_unit_size, previous_month_end, previous_month_ending_bankroll

NY = ZoneInfo("America/New_York")


@pytest.mark.parametrize(
    ("bankroll", "unit"),
    [
        (0, 0),
        (-500, 0),
        (1000, 50),
        (1230, 50),
        (1999.99, 50),
        (2000, 100),
        (300000, 10000),
    ],
)
def test_unit_size_boundaries(bankroll, unit):
    assert compute_unit_size(bankroll) == unit


def test_previous_month_end_label():
    assert previous_month_end(date(2026, 10, 17)) == date(2026, 9, 30)
    assert previous_month_end(date(2027, 1, 1)) == date(2026, 12, 31)


def test_previous_month_ending_bankroll_cuts_at_local_month_start():
    tickets = [
        SimpleNamespace(profit=100.0, placed_at=datetime(2026, 9, 15, tzinfo=NY)),
        # 23:00 on Sep 30 in New York
        SimpleNamespace(profit=25.0, placed_at=datetime(2026, 10, 1, 3, 0, tzinfo=UTC)),
        SimpleNamespace(profit=-40.0, placed_at=datetime(2026, 10, 1, tzinfo=NY)),
        SimpleNamespace(profit=None, placed_at=datetime(2026, 9, 20, tzinfo=NY)),
    ]
    assert previous_month_ending_bankroll(tickets, 1000.0, date(2026, 10, 17), NY) == 1125.0
