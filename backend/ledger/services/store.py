from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.errors import StorageError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def store_write(session: AsyncSession, action: str):
    """Commit the block's changes as one write; roll back and raise StorageError on failure."""
    try:
        yield
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("store write failed: action=%s", action)
        raise StorageError(f"Failed to {action}.") from exc


@asynccontextmanager
async def store_read(session: AsyncSession, action: str):
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("store read failed: action=%s", action)
        raise StorageError(f"Failed to {action}.") from exc
