from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.api.deps import get_current_user_id, http_error
from ledger.database import get_session
from ledger.errors import LedgerError
from ledger.schemas.bankroll import ProfileResponse, ProfileUpdate
from ledger.services.profile_service import get_or_create_profile, set_starting_bankroll

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
async def read_profile(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    try:
        profile = await get_or_create_profile(session, user_id)
    except LedgerError as exc:
        raise http_error(exc) from exc
    return ProfileResponse(id=profile.id, starting_bankroll=profile.starting_bankroll)


@router.put("", response_model=ProfileResponse)
async def save_profile(
    request: ProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    try:
        profile = await set_starting_bankroll(session, user_id, request.starting_bankroll)
    except LedgerError as exc:
        raise http_error(exc) from exc
    return ProfileResponse(id=profile.id, starting_bankroll=profile.starting_bankroll)
