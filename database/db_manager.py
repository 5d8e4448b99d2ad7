from __future__ import annotations

from pathlib import Path
from typing import Optional

import asyncpg

from database.repositories import GameRepositoryDB, ResultRepositoryDB, ScoreRepositoryDB


class DatabaseManager:
    """
    Bundles the asyncpg repositories behind one handle.

    Exposes ``games``, ``scores`` and ``results``, the same attributes as
    ``InMemoryStorage``, so either can back the scoring service.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool
        self.games = GameRepositoryDB(pool)
        self.scores = ScoreRepositoryDB(pool)
        self.results = ResultRepositoryDB(pool)

    async def initialize_schema(self, schema_path: Optional[str] = None) -> None:
        """Create schemas/tables defined in `database/schema.sql`."""
        path = Path(schema_path or Path(__file__).with_name("schema.sql")).resolve()
        sql_text = path.read_text(encoding="utf-8")
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute(sql_text)

    async def reset_schema(self) -> None:
        """Drop every games table, then recreate the schema."""
        async with self._pool.acquire() as conn:
            await conn.execute("DROP SCHEMA IF EXISTS games CASCADE")
        await self.initialize_schema()
