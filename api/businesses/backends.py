"""
Backend accessors for the business listing.

One interface, three variants chosen once at startup:
- `PoolBackend` over an asyncpg pool (direct DSN or parsed fields)
- `SupabaseBackend` over a shared httpx client
- `DisabledBackend` when nothing usable is configured
"""

from __future__ import annotations

import abc
import logging

import asyncpg
import httpx
import pydantic

from core import db, supabase
from core.errors import (
    DATABASE_NOT_CONFIGURED,
    SUPABASE_NOT_CONFIGURED,
    BackendQueryError,
    BackendUnavailableError,
    UnauthorizedError,
)
from core.settings import (
    BACKEND_SUPABASE,
    DirectPoolConfig,
    ParsedPoolConfig,
    Settings,
    SupabaseConfig,
)

from . import repository, schemas

BUSINESS_COLUMNS = ["id", "name", "created_at"]

logger = logging.getLogger(__name__)


def _validated(rows: list[dict]) -> list[dict]:
    return [schemas.BusinessRecord.model_validate(row).model_dump() for row in rows]


class BusinessBackend(abc.ABC):
    name: str = "abstract"

    @abc.abstractmethod
    async def fetch_recent(self, *, limit: int, authorization: str | None = None) -> list[dict]:
        """
        Return up to `limit` records, newest `created_at` first.
        """

    async def close(self) -> None:
        return None


class DisabledBackend(BusinessBackend):
    name = "disabled"

    def __init__(self, message: str = DATABASE_NOT_CONFIGURED) -> None:
        self.message = message

    async def fetch_recent(self, *, limit: int, authorization: str | None = None) -> list[dict]:
        raise BackendUnavailableError(self.message)


class PoolBackend(BusinessBackend):
    def __init__(self, pool: asyncpg.Pool, *, name: str = "direct") -> None:
        self.pool = pool
        self.name = name

    async def fetch_recent(self, *, limit: int, authorization: str | None = None) -> list[dict]:
        try:
            rows = await repository.list_recent_businesses(self.pool, limit=limit)
            return _validated(rows)
        except Exception as exc:
            logger.exception("business_query_failed backend=%s", self.name)
            raise BackendQueryError() from exc

    async def close(self) -> None:
        await self.pool.close()


class SupabaseBackend(BusinessBackend):
    name = BACKEND_SUPABASE

    def __init__(self, client: httpx.AsyncClient, config: SupabaseConfig) -> None:
        self.client = client
        self.config = config

    async def fetch_recent(self, *, limit: int, authorization: str | None = None) -> list[dict]:
        if not authorization:
            raise UnauthorizedError()

        try:
            rows = await supabase.select_rows(
                self.client,
                table=self.config.table,
                api_key=self.config.api_key,
                authorization=authorization,
                columns=BUSINESS_COLUMNS,
                order="created_at.desc",
                limit=limit,
            )
            return _validated(rows)
        except supabase.SupabaseError as exc:
            logger.error("supabase_query_failed table=%s error=%s", self.config.table, exc)
            # Upstream error statuses pass through; transport failures stay 500.
            passthrough = exc.status_code if exc.status_code and exc.status_code >= 400 else None
            raise BackendQueryError(status_code=passthrough) from exc
        except pydantic.ValidationError as exc:
            logger.error("supabase_rows_invalid table=%s error=%s", self.config.table, exc)
            raise BackendQueryError() from exc

    async def close(self) -> None:
        await self.client.aclose()


def _disabled_message(kind: str) -> str:
    return SUPABASE_NOT_CONFIGURED if kind == BACKEND_SUPABASE else DATABASE_NOT_CONFIGURED


async def build_backend(settings: Settings) -> BusinessBackend:
    """
    Create the process-wide backend for the configured variant.

    Initialization failures disable the listing instead of aborting startup.
    """
    config = settings.backend
    if config is None:
        logger.warning("business_backend_disabled kind=%s", settings.backend_kind or "<unset>")
        return DisabledBackend(_disabled_message(settings.backend_kind))

    if isinstance(config, SupabaseConfig):
        try:
            client = supabase.create_client(config.base_url)
        except supabase.SupabaseError:
            logger.exception("business_backend_init_failed kind=%s", settings.backend_kind)
            return DisabledBackend(SUPABASE_NOT_CONFIGURED)
        logger.info("business_backend_ready kind=supabase table=%s", config.table)
        return SupabaseBackend(client, config)

    if isinstance(config, (DirectPoolConfig, ParsedPoolConfig)):
        try:
            pool = await db.create_pool(config)
        except Exception:
            logger.exception("business_backend_init_failed kind=%s", settings.backend_kind)
            return DisabledBackend(DATABASE_NOT_CONFIGURED)
        logger.info("business_backend_ready kind=%s", settings.backend_kind)
        return PoolBackend(pool, name=settings.backend_kind)

    return DisabledBackend(_disabled_message(settings.backend_kind))
