"""
The users API talks to Postgres only through `Database.execute`.

One `Database` exists per process. `main.create_app` opens it in the lifespan,
parks it on `app.state.database` and hands it to routes via `get_database`.
Statements use asyncpg's numbered placeholders ($1, $2, ...) and every
driver failure comes back as `DatabaseError`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import asyncpg
from fastapi import Request

from .errors import DatabaseError
from .settings import Settings

logger = logging.getLogger(__name__)

# Failures that mean "the storage layer could not do it".
_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


@dataclass
class QueryResult:
    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0


def _row_count(status: str | None, rows: list[dict[str, Any]]) -> int:
    """
    Parse the affected-row count from a command tag such as
    "SELECT 3", "INSERT 0 1", "UPDATE 1" or "DELETE 0".
    """
    last = (status or "").rsplit(" ", 1)[-1]
    if last.isdigit():
        return int(last)
    return len(rows)


class Database:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool: asyncpg.Pool | None = pool

    @property
    def is_closed(self) -> bool:
        return self._pool is None

    async def execute(self, sql: str, *args: Any) -> QueryResult:
        """
        Run one parameterized statement and return its rows and row count.

        Raises DatabaseError on any driver failure. No retries.
        """
        if self._pool is None:
            raise DatabaseError("Database pool is closed.")
        try:
            async with self._pool.acquire() as conn:
                stmt = await conn.prepare(sql)
                records = await stmt.fetch(*args)
                status = stmt.get_statusmsg()
        except _DRIVER_ERRORS as exc:
            raise DatabaseError(f"{type(exc).__name__}: {exc}") from exc

        rows = [dict(r) for r in records]
        return QueryResult(rows=rows, row_count=_row_count(status, rows))

    async def close(self) -> None:
        if self._pool is None:
            return None
        pool, self._pool = self._pool, None
        await pool.close()
        logger.info("db_pool_closed")


async def connect(settings: Settings) -> Database:
    try:
        pool = await asyncpg.create_pool(
            dsn=settings.dsn,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=30,
        )
    except _DRIVER_ERRORS as exc:
        raise DatabaseError(f"Could not open pool: {type(exc).__name__}: {exc}") from exc
    logger.info(
        "db_pool_opened host=%s port=%s db=%s max_size=%s",
        settings.db_host,
        settings.db_port,
        settings.db_name,
        settings.db_pool_max_size,
    )
    return Database(pool)


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not initialized. Open it in the app lifespan.")
    return database
