from datetime import datetime
from pydantic import Field
from typing import List, Optional

from .base import FrozenGolfModel


class PlayerAggregate(FrozenGolfModel):
    """Totals derived from one player's score entries. Never persisted."""

    player_id: str
    front9_total: int = 0
    back9_total: int = 0
    total: int = 0
    holes_played: int = 0
    total_par: int = 0  # par over played holes only
    per_hole_diff: List[Optional[int]] = Field(default_factory=list)

    def diff_for_hole(self, hole_number: int) -> Optional[int]:
        if 1 <= hole_number <= len(self.per_hole_diff):
            return self.per_hole_diff[hole_number - 1]
        return None


class LeaderboardRow(FrozenGolfModel):
    """A ranked line of the live leaderboard."""

    player_id: str
    name: Optional[str] = None
    handicap: int = 0
    total_strokes: int
    net_score: int
    holes_played: int
    rank: int


class GameResult(FrozenGolfModel):
    """Final standing of one player in a completed game. Written once."""

    game_id: str
    player_id: str
    total_strokes: int
    total_par: int
    holes_played: int
    net_score: int
    handicap: int
    position: int = Field(..., ge=1)
    is_winner: bool
    created_at: datetime
