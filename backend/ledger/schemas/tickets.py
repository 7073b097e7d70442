from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from ledger.analytics.status import LegStatus, TicketStatus, TicketType


class LegCreate(BaseModel):
    selection: str
    american_odds: float
    status: LegStatus = LegStatus.OPEN
    notes: str | None = None


class LegUpdate(BaseModel):
    selection: str | None = None
    american_odds: float | None = None
    status: LegStatus | None = None
    notes: str | None = None


class LegResponse(BaseModel):
    id: int
    ticket_id: int
    selection: str
    american_odds: float
    status: LegStatus
    notes: str | None = None


class TicketCreate(BaseModel):
    ticket_type: TicketType = TicketType.SINGLE
    stake: float
    league: str | None = None
    book: str | None = None
    notes: str | None = None
    placed_on: date
    # ignored for parlays, whose status is derived from the legs
    status: TicketStatus = TicketStatus.OPEN
    payout_override: float | None = None
    legs: list[LegCreate]


class TicketUpdate(BaseModel):
    stake: float | None = None
    league: str | None = None
    book: str | None = None
    notes: str | None = None
    placed_on: date | None = None
    status: TicketStatus | None = None
    payout_override: float | None = None


class LegsCreate(BaseModel):
    legs: list[LegCreate]


class TicketResponse(BaseModel):
    id: int
    ticket_type: TicketType
    stake: float
    league: str | None
    book: str | None
    notes: str | None = None
    status: TicketStatus
    payout: float | None
    profit: float | None
    placed_at: datetime
    settled_at: datetime | None
    multiplier: float | None = None
    legs: list[LegResponse] = []


class TicketQuoteRequest(BaseModel):
    ticket_type: TicketType = TicketType.SINGLE
    legs: list[LegCreate]
    stake: float | None = None
    to_win: float | None = None
    status: TicketStatus = TicketStatus.OPEN
    payout_override: float | None = None


class TicketQuoteResponse(BaseModel):
    multiplier: float | None
    multiplier_valid: bool
    stake: float | None
    to_win: float | None
    status: TicketStatus
    payout: float | None = None
    profit: float | None = None
    reason: str = ""


class LeagueOptionsResponse(BaseModel):
    leagues: list[str] = Field(default_factory=list)
