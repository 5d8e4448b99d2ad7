"""Persistence of final game results."""

import asyncpg
from datetime import datetime
from typing import List, Sequence
from uuid import UUID

from models import GameResult
from database.converters import game_result_from_row, game_result_to_row
from database.exceptions import DuplicateError


class ResultRepositoryDB:
    """Async access to games.game_results. Rows are inserted once, never updated."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_game_results(self, game_id: str) -> List[GameResult]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM games.game_results
                   WHERE game_id = $1 ORDER BY position""",
                UUID(game_id),
            )
            return [game_result_from_row(r) for r in rows]

    async def complete_game(
        self, game_id: str, results: Sequence[GameResult], completed_at: datetime
    ) -> bool:
        """Flip in_progress -> completed and insert every result row in one transaction.

        The status UPDATE doubles as the at-most-once guard: a concurrent
        completion that already flipped the row makes it match nothing.
        """
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    flipped = await conn.fetchrow(
                        """UPDATE games.games
                           SET status = 'completed', completed_at = $2
                           WHERE id = $1 AND status = 'in_progress'
                           RETURNING id""",
                        UUID(game_id), completed_at,
                    )
                    if not flipped:
                        return False
                    if results:
                        await conn.executemany(
                            """INSERT INTO games.game_results
                               (game_id, player_id, total_strokes, total_par,
                                holes_played, net_score, handicap, position,
                                is_winner, created_at)
                               VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)""",
                            [game_result_to_row(r) for r in results],
                        )
            return True
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(f"Results already recorded for game {game_id}") from e
