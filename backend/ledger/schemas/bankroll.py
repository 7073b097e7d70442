from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class ProfileResponse(BaseModel):
    id: str
    starting_bankroll: float


class ProfileUpdate(BaseModel):
    starting_bankroll: float = Field(allow_inf_nan=False)


class CurrentBankrollResponse(BaseModel):
    starting_bankroll: float
    current_bankroll: float
    all_time_profit: float


class BankrollPointResponse(BaseModel):
    date: date
    bankroll: float
    cumulative_profit: float


class PeriodSummaryResponse(BaseModel):
    total_profit: float
    total_bet: float
    roi: float
    wins: int
    losses: int
    pushes: int
    record: str


class PeriodReportResponse(BaseModel):
    range_start: date | None
    range_end: date | None
    league: str | None
    status: str | None
    baseline_bankroll: float
    series: list[BankrollPointResponse]
    summary: PeriodSummaryResponse


class UnitSizeResponse(BaseModel):
    prev_month_end: date
    prev_month_ending_bankroll: float
    unit_size: float


class DashboardResponse(BaseModel):
    bankroll: CurrentBankrollResponse
    unit: UnitSizeResponse
    report: PeriodReportResponse
