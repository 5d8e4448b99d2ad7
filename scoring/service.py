"""Game orchestration over an injected storage backend.

Fetches roster, par table and score entries from the stores, runs the pure
aggregation/ranking functions, and performs the one state transition that
matters for results: in_progress -> completed at finalization.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timezone
from pydantic import ValidationError
from typing import Callable, Dict, List, Optional

from models import Game, GamePlayer, GameResult, GameStatus, Hole, LeaderboardRow, PlayerAggregate, ScoreEntry
from database.exceptions import DuplicateError, NotFoundError
from database.stores import StorageBackend
from scoring.exceptions import (
    AlreadyFinalizedError,
    GameFullError,
    InvalidGameSettingsError,
    InvalidStateError,
    NotAuthorizedError,
)
from scoring.leaderboard import build_results, live_leaderboard
from scoring.scorecard import aggregate, aggregate_game, standard_par_table

logger = logging.getLogger(__name__)

GAME_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"  # no 0/O, 1/I
GAME_CODE_LENGTH = 6
MAX_CODE_ATTEMPTS = 10
MIN_PLAYERS_TO_START = 2


def generate_game_code() -> str:
    return "".join(secrets.choice(GAME_CODE_ALPHABET) for _ in range(GAME_CODE_LENGTH))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GameScoringService:
    """Entry point for lobby, score entry, leaderboard and finalization."""

    def __init__(
        self,
        store: StorageBackend,
        *,
        code_factory: Callable[[], str] = generate_game_code,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._store = store
        self._code_factory = code_factory
        self._clock = clock

    # ================================================================
    # Lookups
    # ================================================================

    async def get_game(self, game_id: str) -> Game:
        game = await self._store.games.get_game(game_id)
        if game is None:
            raise NotFoundError(f"Game {game_id} not found")
        return game

    async def get_game_by_code(self, game_code: str) -> Game:
        game = await self._store.games.get_game_by_code(game_code)
        if game is None:
            raise NotFoundError(f"Game {game_code} not found")
        return game

    async def get_roster(self, game_id: str) -> List[GamePlayer]:
        await self.get_game(game_id)
        return await self._store.games.get_roster(game_id)

    async def get_par_table(self, game_id: str) -> List[Hole]:
        return (await self.get_game(game_id)).holes

    async def get_score_entries(
        self, game_id: str, player_id: Optional[str] = None
    ) -> List[ScoreEntry]:
        await self.get_game(game_id)
        return await self._store.scores.get_score_entries(game_id, player_id)

    async def get_player_games(self, player_id: str) -> List[Game]:
        return await self._store.games.get_games_for_player(player_id)

    # ================================================================
    # Lobby
    # ================================================================

    async def create_game(
        self,
        host_id: str,
        host_name: str,
        course_name: str,
        *,
        number_of_holes: int = 18,
        max_players: int = 4,
        handicap: int = 0,
    ) -> Game:
        """Create a waiting game with a fresh code; the host joins first."""
        try:
            holes = standard_par_table(number_of_holes)
        except ValueError as e:
            raise InvalidGameSettingsError(str(e)) from e
        for _ in range(MAX_CODE_ATTEMPTS):
            code = self._code_factory()
            if await self._store.games.get_game_by_code(code):
                continue
            try:
                game = Game(
                    game_code=code,
                    host_id=host_id,
                    course_name=course_name,
                    number_of_holes=number_of_holes,
                    max_players=max_players,
                    holes=holes,
                )
            except ValidationError as e:
                raise InvalidGameSettingsError(e.errors()[0]["msg"]) from e
            try:
                game = await self._store.games.create_game(game)
            except DuplicateError:
                continue
            break
        else:
            raise DuplicateError(f"Could not allocate a unique game code after {MAX_CODE_ATTEMPTS} attempts")

        await self._store.games.add_player(GamePlayer(
            game_id=game.id,
            player_id=host_id,
            name=host_name,
            handicap=handicap,
            is_host=True,
        ))
        logger.info("Game %s (%s) created by %s", game.id, game.game_code, host_id)
        return game

    async def join_game(
        self, game_code: str, player_id: str, name: str, handicap: int = 0
    ) -> List[GamePlayer]:
        """Add a player to a waiting game. Returns the updated roster."""
        game = await self.get_game_by_code(game_code)
        if game.status != GameStatus.WAITING:
            raise InvalidStateError("Game is no longer accepting players")

        roster = await self._store.games.get_roster(game.id)
        if any(p.player_id == player_id for p in roster):
            raise DuplicateError("Already joined this game")
        if len(roster) >= game.max_players:
            raise GameFullError("Game is full")

        await self._store.games.add_player(GamePlayer(
            game_id=game.id, player_id=player_id, name=name, handicap=handicap,
        ))
        return await self._store.games.get_roster(game.id)

    async def start_game(self, game_id: str, host_id: str) -> Game:
        """Host-only: move a waiting game in progress and lay down empty scorecards."""
        game = await self.get_game(game_id)
        if game.host_id != host_id:
            raise NotAuthorizedError("Only the host can start the game")
        if game.status != GameStatus.WAITING:
            raise InvalidStateError(f"Game is {game.status.value}, not waiting")

        roster = await self._store.games.get_roster(game_id)
        if len(roster) < MIN_PLAYERS_TO_START:
            raise InvalidStateError(f"Need at least {MIN_PLAYERS_TO_START} players to start")

        started = await self._store.games.update_game_status(
            game_id, GameStatus.IN_PROGRESS, expected=GameStatus.WAITING, at=self._clock(),
        )
        if not started:
            raise InvalidStateError("Game was started concurrently")

        await self._store.scores.initialize_scorecards(
            game_id, [p.player_id for p in roster], game.holes,
        )
        logger.info("Game %s started with %d players", game_id, len(roster))
        return await self.get_game(game_id)

    # ================================================================
    # Scores
    # ================================================================

    async def record_score(
        self, game_id: str, player_id: str, hole: int, strokes: Optional[int]
    ) -> ScoreEntry:
        """Upsert one hole for one player. Range checks belong to the caller."""
        game = await self.get_game(game_id)
        if game.status != GameStatus.IN_PROGRESS:
            raise InvalidStateError(f"Scores can only be entered while in progress (game is {game.status.value})")

        par_hole = game.get_hole(hole)
        if par_hole is None:
            raise NotFoundError(f"Hole {hole} is not part of game {game_id}")

        roster = await self._store.games.get_roster(game_id)
        if not any(p.player_id == player_id for p in roster):
            raise NotFoundError(f"Player {player_id} is not in game {game_id}")

        return await self._store.scores.upsert_score_entry(
            game_id, player_id, hole, strokes, par_hole.par,
        )

    async def get_player_aggregate(self, game_id: str, player_id: str) -> PlayerAggregate:
        game = await self.get_game(game_id)
        roster = await self._store.games.get_roster(game_id)
        if not any(p.player_id == player_id for p in roster):
            raise NotFoundError(f"Player {player_id} is not in game {game_id}")
        entries = await self._store.scores.get_score_entries(game_id, player_id)
        return aggregate(player_id, entries, game.holes)

    async def get_aggregates(self, game_id: str) -> Dict[str, PlayerAggregate]:
        game = await self.get_game(game_id)
        roster = await self._store.games.get_roster(game_id)
        return await self._aggregate_roster(game, roster)

    async def _aggregate_roster(
        self, game: Game, roster: List[GamePlayer]
    ) -> Dict[str, PlayerAggregate]:
        entries = await self._store.scores.get_score_entries(game.id)
        return aggregate_game([p.player_id for p in roster], entries, game.holes)

    # ================================================================
    # Leaderboard
    # ================================================================

    async def compute_live_leaderboard(self, game_id: str) -> List[LeaderboardRow]:
        """Advisory standings from whatever has been entered so far."""
        game = await self.get_game(game_id)
        roster = await self._store.games.get_roster(game_id)
        aggregates = await self._aggregate_roster(game, roster)
        return live_leaderboard(roster, aggregates)

    async def finalize_game(self, game_id: str) -> List[GameResult]:
        """Rank every roster player and record the results exactly once.

        Host authorization is the caller's job. On any failure nothing is
        written and the game keeps its status.
        """
        game = await self.get_game(game_id)
        if game.status == GameStatus.COMPLETED:
            raise AlreadyFinalizedError(f"Game {game_id} is already completed")
        if await self._store.results.get_game_results(game_id):
            raise AlreadyFinalizedError(f"Results already recorded for game {game_id}")
        if game.status != GameStatus.IN_PROGRESS:
            raise InvalidStateError(f"Cannot finalize a game that is {game.status.value}")

        roster = await self._store.games.get_roster(game_id)
        aggregates = await self._aggregate_roster(game, roster)
        now = self._clock()
        results = build_results(game_id, roster, aggregates, now)

        try:
            completed = await self._store.results.complete_game(game_id, results, now)
        except DuplicateError as e:
            logger.warning("Finalize of game %s raced with another completion", game_id)
            raise AlreadyFinalizedError(str(e)) from e
        if not completed:
            logger.warning("Finalize of game %s lost the status guard", game_id)
            raise AlreadyFinalizedError(f"Game {game_id} was completed concurrently")

        logger.info(
            "Game %s finalized: %d results, winners=%s",
            game_id, len(results), [r.player_id for r in results if r.is_winner],
        )
        return results

    async def get_game_results(self, game_id: str) -> List[GameResult]:
        """Stored final results, ordered by position then roster order."""
        game = await self.get_game(game_id)
        if game.status != GameStatus.COMPLETED:
            raise InvalidStateError(f"Game {game_id} has not been completed")
        results = await self._store.results.get_game_results(game_id)
        roster = await self._store.games.get_roster(game_id)
        order = {p.player_id: i for i, p in enumerate(roster)}
        return sorted(results, key=lambda r: (r.position, order.get(r.player_id, len(order))))
