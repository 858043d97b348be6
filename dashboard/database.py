"""
Database connection for PostgreSQL (Railway) with a SQLite fallback.

Env vars (set in Railway Variables or .env):
    DATABASE_URL  -- full postgres:// connection string
                     Railway auto-sets this when you add a Postgres plugin.
    DATABASE_URL_FALLBACK -- optional sqlite+aiosqlite:///./local.db for local dev
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Optional, Union

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql import Executable

from dashboard.config_env import DATABASE_URL_FALLBACK, DATABASE_URL_RAW

logger = logging.getLogger(__name__)


def _normalise_url(raw: str) -> str:
    if raw.startswith("postgres://"):
        return raw.replace("postgres://", "postgresql+asyncpg://", 1)
    if raw.startswith("postgresql://"):
        return raw.replace("postgresql://", "postgresql+asyncpg://", 1)
    return raw


DATABASE_URL = _normalise_url(DATABASE_URL_RAW) if DATABASE_URL_RAW else DATABASE_URL_FALLBACK

engine = create_async_engine(DATABASE_URL, echo=False)


class Base(DeclarativeBase):
    pass


class DatabaseError(RuntimeError):
    """A query failed; the message is safe to show to the user."""


async def init_db():
    """Create all tables (safe to call multiple times)."""
    # models must be imported so their tables are registered on Base.metadata
    from dashboard import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready (%s)", engine.url.get_backend_name())


async def query_database(
    statement: Union[str, Executable],
    params: Optional[dict[str, Any]] = None,
) -> list[dict[str, Any]]:
    """
    Run one statement on a pooled connection and return its rows as dicts.

    Raw SQL strings are wrapped in ``text()`` and take ``:name`` parameters.
    The connection goes back to the pool when the block exits; writes are
    committed unless the statement raised.
    """
    if isinstance(statement, str):
        statement = text(statement)

    async with engine.begin() as conn:
        result = await conn.execute(statement, params or {})
        if not result.returns_rows:
            return []
        return [dict(row) for row in result.mappings().all()]


async def gather_queries(*queries: Awaitable[Any]) -> list[Any]:
    """
    Await several queries concurrently and return their results in order.

    Every query runs to completion before anything is raised, so a second
    failure is never left unretrieved. The first failure (in argument order)
    is re-raised.
    """
    results = await asyncio.gather(*queries, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
