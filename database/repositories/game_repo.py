"""CRUD operations for games and their rosters."""

import asyncpg
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from models import Game, GamePlayer, GameStatus
from database.converters import game_from_row, game_player_from_row, game_to_row
from database.exceptions import DuplicateError, IntegrityError


class GameRepositoryDB:
    """Async CRUD for games.games and games.game_players."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_game(self, game_id: str) -> Optional[Game]:
        try:
            key = UUID(game_id)
        except ValueError:
            return None  # not a game id this store could have issued
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM games.games WHERE id = $1", key
            )
            return game_from_row(row) if row else None

    async def get_game_by_code(self, game_code: str) -> Optional[Game]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM games.games WHERE game_code = $1", game_code.upper()
            )
            return game_from_row(row) if row else None

    async def get_games_for_player(self, player_id: str) -> List[Game]:
        """Games a player has joined, newest first."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT g.* FROM games.games g
                   JOIN games.game_players gp ON gp.game_id = g.id
                   WHERE gp.player_id = $1
                   ORDER BY g.created_at DESC""",
                player_id,
            )
            return [game_from_row(r) for r in rows]

    async def get_roster(self, game_id: str) -> List[GamePlayer]:
        """Roster in join order."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM games.game_players
                   WHERE game_id = $1 ORDER BY joined_at, player_id""",
                UUID(game_id),
            )
            return [game_player_from_row(r) for r in rows]

    # ================================================================
    # Create
    # ================================================================

    async def create_game(self, game: Game) -> Game:
        data = game_to_row(game)
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO games.games
                       (game_code, host_id, course_name, number_of_holes,
                        max_players, status, pars)
                       VALUES ($1, $2, $3, $4, $5, $6, $7)
                       RETURNING *""",
                    data["game_code"], data["host_id"], data["course_name"],
                    data["number_of_holes"], data["max_players"],
                    data["status"], data["pars"],
                )
                return game_from_row(row)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(f"Game code already in use: {e}") from e

    async def add_player(self, player: GamePlayer) -> GamePlayer:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO games.game_players
                       (game_id, player_id, name, handicap, is_host)
                       VALUES ($1, $2, $3, $4, $5)
                       RETURNING *""",
                    UUID(player.game_id), player.player_id,
                    player.name, player.handicap, player.is_host,
                )
                return game_player_from_row(row)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(str(e)) from e
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(str(e)) from e

    # ================================================================
    # Update
    # ================================================================

    async def update_game_status(
        self,
        game_id: str,
        status: GameStatus,
        *,
        expected: Optional[GameStatus] = None,
        at: Optional[datetime] = None,
    ) -> bool:
        """Set status, guarded by ``expected`` when given. Returns True if a row changed."""
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                """UPDATE games.games
                   SET status = $2,
                       started_at = CASE WHEN $2 = 'in_progress' THEN $3 ELSE started_at END,
                       completed_at = CASE WHEN $2 = 'completed' THEN $3 ELSE completed_at END
                   WHERE id = $1 AND ($4::text IS NULL OR status = $4)""",
                UUID(game_id), status.value,
                at or datetime.now(timezone.utc),
                expected.value if expected is not None else None,
            )
            return result == "UPDATE 1"
