"""API request and response models."""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from models import Game, GamePlayer, GameStatus, ScoreType


class CreateGameRequest(BaseModel):
    host_id: str
    host_name: str
    course_name: str
    number_of_holes: int = 18
    max_players: int = Field(4, ge=2, le=8)
    handicap: int = 0


class JoinGameRequest(BaseModel):
    player_id: str
    name: str
    handicap: int = 0


class HostActionRequest(BaseModel):
    """Identifies the caller for host-only actions."""
    player_id: str


class ScoreUpdate(BaseModel):
    player_id: str
    hole: int = Field(..., ge=1, le=18)
    strokes: Optional[int] = Field(None, ge=1, le=15)


class GameDetailResponse(BaseModel):
    game: Game
    players: List[GamePlayer]


class JoinableGameResponse(BaseModel):
    game: Game
    player_count: int


class GameSummaryResponse(BaseModel):
    """Game for history/list views."""
    id: str
    game_code: str
    course_name: str
    status: GameStatus
    number_of_holes: int
    is_host: bool
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class ScorecardResponse(BaseModel):
    """One player's aggregated card, with per-hole score types."""
    player_id: str
    front9_total: int
    back9_total: int
    total: int
    holes_played: int
    total_par: int
    per_hole_diff: List[Optional[int]]
    score_types: List[Optional[ScoreType]]
    score_type_counts: Dict[str, int]
