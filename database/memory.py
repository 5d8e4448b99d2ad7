"""Process-local storage backend.

Used when no DATABASE_URL is configured, and by the tests. State lives in
plain dicts shared by the three repositories; a single asyncio lock makes
game completion atomic.
"""

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import uuid4

from models import Game, GamePlayer, GameResult, GameStatus, Hole, ScoreEntry
from database.exceptions import DuplicateError, IntegrityError, NotFoundError


def _now() -> datetime:
    return datetime.now(timezone.utc)


class _MemoryState:
    def __init__(self):
        self.games: Dict[str, Game] = {}
        self.players: Dict[str, List[GamePlayer]] = {}
        self.scores: Dict[Tuple[str, str, int], ScoreEntry] = {}
        self.results: Dict[str, List[GameResult]] = {}
        self.lock = asyncio.Lock()


class InMemoryGameRepository:
    """Games and rosters held in memory."""

    def __init__(self, state: _MemoryState):
        self._state = state

    async def get_game(self, game_id: str) -> Optional[Game]:
        game = self._state.games.get(game_id)
        return game.model_copy(deep=True) if game else None

    async def get_game_by_code(self, game_code: str) -> Optional[Game]:
        for game in self._state.games.values():
            if game.game_code == game_code.upper():
                return game.model_copy(deep=True)
        return None

    async def create_game(self, game: Game) -> Game:
        if await self.get_game_by_code(game.game_code):
            raise DuplicateError(f"Game code {game.game_code} already in use")
        stored = game.model_copy(update={
            "id": game.id or str(uuid4()),
            "created_at": game.created_at or _now(),
        })
        self._state.games[stored.id] = stored
        self._state.players[stored.id] = []
        return stored.model_copy(deep=True)

    async def update_game_status(
        self,
        game_id: str,
        status: GameStatus,
        *,
        expected: Optional[GameStatus] = None,
        at: Optional[datetime] = None,
    ) -> bool:
        async with self._state.lock:
            return self._set_status(game_id, status, expected=expected, at=at)

    def _set_status(self, game_id, status, *, expected=None, at=None) -> bool:
        game = self._state.games.get(game_id)
        if game is None:
            return False
        if expected is not None and game.status != expected:
            return False
        updates = {"status": status}
        if status == GameStatus.IN_PROGRESS:
            updates["started_at"] = at or _now()
        elif status == GameStatus.COMPLETED:
            updates["completed_at"] = at or _now()
        self._state.games[game_id] = game.model_copy(update=updates)
        return True

    async def get_games_for_player(self, player_id: str) -> List[Game]:
        game_ids = [
            gid for gid, roster in self._state.players.items()
            if any(p.player_id == player_id for p in roster)
        ]
        games = [self._state.games[gid].model_copy(deep=True) for gid in game_ids]
        return sorted(games, key=lambda g: g.created_at, reverse=True)

    async def get_roster(self, game_id: str) -> List[GamePlayer]:
        return [p.model_copy() for p in self._state.players.get(game_id, [])]

    async def add_player(self, player: GamePlayer) -> GamePlayer:
        roster = self._state.players.get(player.game_id)
        if roster is None:
            raise IntegrityError(f"Game {player.game_id} does not exist")
        if any(p.player_id == player.player_id for p in roster):
            raise DuplicateError(f"Player {player.player_id} already in game {player.game_id}")
        stored = player.model_copy(update={"joined_at": player.joined_at or _now()})
        roster.append(stored)
        return stored.model_copy()


class InMemoryScoreRepository:
    """Score entries keyed by (game_id, player_id, hole)."""

    def __init__(self, state: _MemoryState):
        self._state = state

    async def get_score_entries(
        self, game_id: str, player_id: Optional[str] = None
    ) -> List[ScoreEntry]:
        entries = [
            e for (gid, pid, _), e in self._state.scores.items()
            if gid == game_id and (player_id is None or pid == player_id)
        ]
        return sorted(entries, key=lambda e: (e.player_id, e.hole))

    async def upsert_score_entry(
        self, game_id: str, player_id: str, hole: int, strokes: Optional[int], par: int
    ) -> ScoreEntry:
        if game_id not in self._state.games:
            raise NotFoundError(f"Game {game_id} not found")
        key = (game_id, player_id, hole)
        existing = self._state.scores.get(key)
        entry = ScoreEntry(
            game_id=game_id,
            player_id=player_id,
            hole=hole,
            strokes=strokes,
            par=existing.par if existing else par,
            updated_at=_now(),
        )
        self._state.scores[key] = entry
        return entry

    async def initialize_scorecards(
        self, game_id: str, player_ids: Sequence[str], holes: Sequence[Hole]
    ) -> None:
        for player_id in player_ids:
            for hole in holes:
                key = (game_id, player_id, hole.number)
                if key not in self._state.scores:
                    self._state.scores[key] = ScoreEntry(
                        game_id=game_id,
                        player_id=player_id,
                        hole=hole.number,
                        strokes=None,
                        par=hole.par,
                        updated_at=_now(),
                    )


class InMemoryResultRepository:
    """Final results; written together with the status flip."""

    def __init__(self, state: _MemoryState, games: InMemoryGameRepository):
        self._state = state
        self._games = games

    async def get_game_results(self, game_id: str) -> List[GameResult]:
        return sorted(self._state.results.get(game_id, []), key=lambda r: r.position)

    async def complete_game(
        self, game_id: str, results: Sequence[GameResult], completed_at: datetime
    ) -> bool:
        async with self._state.lock:
            if game_id in self._state.results:
                raise DuplicateError(f"Results already recorded for game {game_id}")
            game = self._state.games.get(game_id)
            if game is None or game.status != GameStatus.IN_PROGRESS:
                return False
            self._state.results[game_id] = list(results)
            self._games._set_status(game_id, GameStatus.COMPLETED, at=completed_at)
            return True


class InMemoryStorage:
    """Bundles the in-memory repositories behind the same attributes as DatabaseManager."""

    def __init__(self):
        state = _MemoryState()
        self.games = InMemoryGameRepository(state)
        self.scores = InMemoryScoreRepository(state)
        self.results = InMemoryResultRepository(state, self.games)
