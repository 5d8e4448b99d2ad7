from datetime import datetime
from enum import Enum
from pydantic import Field, model_validator
from typing import List, Optional

from .base import BaseGolfModel
from .hole import Hole


class GameStatus(str, Enum):
    """Lifecycle of a game: waiting -> in_progress -> completed."""
    WAITING = "waiting"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Game(BaseGolfModel):
    """A round of golf shared by a roster of players."""
    id: Optional[str] = None
    game_code: str = Field(..., min_length=6, max_length=6)
    host_id: str
    course_name: str
    number_of_holes: int = 18
    max_players: int = Field(4, ge=2, le=8)
    status: GameStatus = GameStatus.WAITING
    holes: List[Hole] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @model_validator(mode='after')
    def validate_par_table(self):
        if self.number_of_holes not in (9, 18):
            raise ValueError(f"number_of_holes must be 9 or 18, got {self.number_of_holes}")
        if self.holes:
            numbers = [h.number for h in self.holes]
            if numbers != list(range(1, self.number_of_holes + 1)):
                raise ValueError("Par table must list holes 1..N in order")
        return self

    @property
    def course_par(self) -> int:
        return sum(h.par for h in self.holes)

    def get_hole(self, number: int) -> Optional[Hole]:
        """Get a hole by its number."""
        if 1 <= number <= len(self.holes):
            return self.holes[number - 1]
        return None


class GamePlayer(BaseGolfModel):
    """Roster entry: a player who joined a game."""
    game_id: Optional[str] = None
    player_id: str
    name: str
    handicap: int = 0
    is_host: bool = False
    joined_at: Optional[datetime] = None
