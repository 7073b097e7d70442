from __future__ import annotations

import logging
import math

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.errors import StorageError
from ledger.models.profile import Profile
from ledger.services.store import store_read, store_write

logger = logging.getLogger(__name__)


async def _find_profile(session: AsyncSession, user_id: str) -> Profile | None:
    async with store_read(session, "load profile"):
        return await session.scalar(select(Profile).where(Profile.id == user_id))


async def get_or_create_profile(session: AsyncSession, user_id: str) -> Profile:
    """Profiles are created lazily with a zero starting bankroll.

    A concurrent first load may insert the row first; the loser reloads it.
    """
    profile = await _find_profile(session, user_id)
    if profile is not None:
        return profile

    profile = Profile(id=user_id, starting_bankroll=0.0)
    try:
        async with store_write(session, "create profile"):
            session.add(profile)
    except StorageError as exc:
        if not isinstance(exc.__cause__, IntegrityError):
            raise
        profile = await _find_profile(session, user_id)
        if profile is None:
            raise
        logger.info("profile already created concurrently: user_id=%s", user_id)
        return profile

    logger.info("profile created: user_id=%s", user_id)
    return profile


async def set_starting_bankroll(session: AsyncSession, user_id: str, amount: float) -> Profile:
    safe = float(amount) if amount is not None and math.isfinite(float(amount)) else 0.0
    profile = await get_or_create_profile(session, user_id)
    async with store_write(session, "save starting bankroll"):
        profile.starting_bankroll = safe
    logger.info("starting bankroll saved: user_id=%s starting_bankroll=%s", user_id, safe)
    return profile
