from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine.url import URL, make_url


class Settings(BaseSettings):
    app_name: str = "BetLedger"
    database_url: str = "postgresql+asyncpg://postgres:postgres@db:5432/betledger"
    ledger_timezone: str = "America/New_York"
    unit_size_pct: float = 0.05
    unit_size_increment: float = 50.0
    unit_size_cap: float = 10_000.0

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()


def get_database_url() -> str:
    return settings.database_url


def get_database_identity() -> tuple[str, str]:
    parsed: URL = make_url(get_database_url())
    return parsed.host or "<unknown>", parsed.database or "<unknown>"


@lru_cache
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def get_ledger_tz() -> ZoneInfo:
    """Timezone whose calendar days define placed dates and range boundaries."""
    return _zone(settings.ledger_timezone)
