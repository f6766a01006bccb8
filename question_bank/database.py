from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

import asyncpg

logger = logging.getLogger(__name__)


class Database:
    """asyncpg pool shared by the job, topic and question repositories."""

    def __init__(
        self,
        dsn: str,
        reshape_schema_query: str | None = None,
        *,
        min_pool_size: int = 1,
        max_pool_size: int = 5,
    ) -> None:
        self._dsn = dsn
        self._reshape_schema_query = reshape_schema_query or ""
        self._min_pool_size = min_pool_size
        self._max_pool_size = max_pool_size
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self._pool is not None:
            return
        logger.info("opening question bank database pool", extra={"max_pool_size": self._max_pool_size})
        self._pool = await asyncpg.create_pool(
            dsn=self._dsn,
            min_size=self._min_pool_size,
            max_size=self._max_pool_size,
            init=self._on_new_connection,
        )

    async def disconnect(self) -> None:
        pool, self._pool = self._pool, None
        if pool is not None:
            await pool.close()
            logger.info("question bank database pool closed")

    async def fetchrow(self, query: str, *args: Any) -> asyncpg.Record | None:
        async with self._connection() as connection:
            return await connection.fetchrow(query, *args)

    async def fetch(self, query: str, *args: Any) -> Sequence[asyncpg.Record]:
        async with self._connection() as connection:
            return await connection.fetch(query, *args)

    async def execute(self, query: str, *args: Any) -> str:
        async with self._connection() as connection:
            return await connection.execute(query, *args)

    async def executemany(self, query: str, args: Sequence[Sequence[Any]]) -> None:
        """Run ``query`` once per argument tuple inside a single transaction."""
        async with self._connection() as connection, connection.transaction():
            await connection.executemany(query, args)

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[asyncpg.Connection]:
        if self._pool is None:
            raise RuntimeError("question bank database is not connected")
        async with self._pool.acquire() as connection:
            yield connection

    async def _on_new_connection(self, connection: asyncpg.Connection) -> None:
        if self._reshape_schema_query.strip():
            await connection.execute(self._reshape_schema_query)
