"""CRUD operations for per-hole score entries."""

import asyncpg
from typing import List, Optional, Sequence
from uuid import UUID

from models import Hole, ScoreEntry
from database.converters import placeholder_rows, score_entry_from_row
from database.exceptions import NotFoundError


class ScoreRepositoryDB:
    """Async CRUD for games.score_entries. Entries are upserted, never deleted."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_score_entries(
        self, game_id: str, player_id: Optional[str] = None
    ) -> List[ScoreEntry]:
        async with self._pool.acquire() as conn:
            if player_id:
                rows = await conn.fetch(
                    """SELECT * FROM games.score_entries
                       WHERE game_id = $1 AND player_id = $2
                       ORDER BY hole_number""",
                    UUID(game_id), player_id,
                )
            else:
                rows = await conn.fetch(
                    """SELECT * FROM games.score_entries
                       WHERE game_id = $1
                       ORDER BY player_id, hole_number""",
                    UUID(game_id),
                )
            return [score_entry_from_row(r) for r in rows]

    async def upsert_score_entry(
        self, game_id: str, player_id: str, hole: int, strokes: Optional[int], par: int
    ) -> ScoreEntry:
        """Insert or update a single (game, player, hole) entry."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO games.score_entries
                       (game_id, player_id, hole_number, strokes, par)
                       VALUES ($1, $2, $3, $4, $5)
                       ON CONFLICT (game_id, player_id, hole_number)
                       DO UPDATE SET strokes = EXCLUDED.strokes,
                                     updated_at = NOW()
                       RETURNING *""",
                    UUID(game_id), player_id, hole, strokes, par,
                )
                return score_entry_from_row(row)
        except asyncpg.ForeignKeyViolationError as e:
            raise NotFoundError(f"Game {game_id} not found") from e

    async def initialize_scorecards(
        self, game_id: str, player_ids: Sequence[str], holes: Sequence[Hole]
    ) -> None:
        """Pre-populate null-stroke placeholders for every player and hole."""
        rows = placeholder_rows(UUID(game_id), player_ids, holes)
        if not rows:
            return
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                await conn.executemany(
                    """INSERT INTO games.score_entries
                       (game_id, player_id, hole_number, strokes, par)
                       VALUES ($1, $2, $3, $4, $5)
                       ON CONFLICT (game_id, player_id, hole_number) DO NOTHING""",
                    rows,
                )
