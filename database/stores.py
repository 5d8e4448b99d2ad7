"""Storage interfaces consumed by the scoring service.

Any class with matching method signatures satisfies these protocols. Two
backends ship: the in-memory store (``database.memory``) and the asyncpg
repositories bundled by ``DatabaseManager``.
"""

from datetime import datetime
from typing import List, Optional, Protocol, Sequence

from models import Game, GamePlayer, GameResult, GameStatus, Hole, ScoreEntry


class GameStore(Protocol):
    """Games and their rosters."""

    async def get_game(self, game_id: str) -> Optional[Game]:
        ...

    async def get_game_by_code(self, game_code: str) -> Optional[Game]:
        ...

    async def create_game(self, game: Game) -> Game:
        """Insert a game. Raises DuplicateError if the code is taken."""
        ...

    async def update_game_status(
        self,
        game_id: str,
        status: GameStatus,
        *,
        expected: Optional[GameStatus] = None,
        at: Optional[datetime] = None,
    ) -> bool:
        """Set status, only if the current status equals ``expected`` when given.

        Returns False when the game is missing or the guard did not match.
        """
        ...

    async def get_games_for_player(self, player_id: str) -> List[Game]:
        ...

    async def get_roster(self, game_id: str) -> List[GamePlayer]:
        """Roster in join order."""
        ...

    async def add_player(self, player: GamePlayer) -> GamePlayer:
        """Add a roster entry. Raises DuplicateError if already joined."""
        ...


class ScoreStore(Protocol):
    """Per-hole score entries, keyed by (game_id, player_id, hole)."""

    async def get_score_entries(
        self, game_id: str, player_id: Optional[str] = None
    ) -> List[ScoreEntry]:
        """Entries ordered by player then hole."""
        ...

    async def upsert_score_entry(
        self, game_id: str, player_id: str, hole: int, strokes: Optional[int], par: int
    ) -> ScoreEntry:
        ...

    async def initialize_scorecards(
        self, game_id: str, player_ids: Sequence[str], holes: Sequence[Hole]
    ) -> None:
        """Create ``strokes=None`` placeholders, leaving existing entries alone."""
        ...


class ResultStore(Protocol):
    """Immutable final results."""

    async def get_game_results(self, game_id: str) -> List[GameResult]:
        """Rows ordered by position."""
        ...

    async def complete_game(
        self, game_id: str, results: Sequence[GameResult], completed_at: datetime
    ) -> bool:
        """Write all result rows and flip the game to completed, atomically.

        Returns False, writing nothing, when the game is no longer
        in progress. Raises DuplicateError if rows already exist.
        """
        ...


class StorageBackend(Protocol):
    """What the scoring service needs: one handle per store."""

    games: GameStore
    scores: ScoreStore
    results: ResultStore
