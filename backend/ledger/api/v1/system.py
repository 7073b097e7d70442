from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import APIRouter, Depends

from ledger.database import get_session
from ledger.models.ticket import Ticket

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/health")
async def health(session: AsyncSession = Depends(get_session)) -> dict[str, str | int | None]:
    ticket_count = int((await session.scalar(select(func.count(Ticket.id)))) or 0)
    last_placed_at = await session.scalar(select(func.max(Ticket.placed_at)))

    return {
        "status": "ok",
        "ticket_count": ticket_count,
        "last_placed_at": last_placed_at.isoformat() if last_placed_at else None,
    }
