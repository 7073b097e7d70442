import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ledger.api.v1.router import api_router
from ledger.config import get_database_identity, settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db_host, db_name = get_database_identity()
    logger.info(
        "api startup: database_host=%s database_name=%s ledger_timezone=%s",
        db_host,
        db_name,
        settings.ledger_timezone,
    )
    yield


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(api_router, prefix="/api/v1")
