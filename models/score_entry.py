from datetime import datetime
from enum import Enum
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class ScoreType(str, Enum):
    """Display classification of a hole score relative to par."""
    EAGLE = "eagle"                # -2 or better
    BIRDIE = "birdie"
    PAR = "par"
    BOGEY = "bogey"
    DOUBLE_BOGEY = "double_bogey"  # +2 or worse


def classify_to_par(diff: Optional[int]) -> Optional[ScoreType]:
    """Map a stroke-to-par differential to its score type."""
    if diff is None:
        return None
    if diff <= -2:
        return ScoreType.EAGLE
    if diff >= 2:
        return ScoreType.DOUBLE_BOGEY
    return {
        -1: ScoreType.BIRDIE,
        0: ScoreType.PAR,
        1: ScoreType.BOGEY,
    }[diff]


class ScoreEntry(BaseGolfModel):
    """One player's strokes on one hole of a game.

    ``strokes`` is None until the hole is played. Stored values are not
    range-checked here; the input layer enforces 1-15.
    """
    game_id: str
    player_id: str
    hole: int = Field(..., ge=1, le=18)
    strokes: Optional[int] = None
    par: int
    updated_at: Optional[datetime] = None

    @property
    def is_played(self) -> bool:
        return self.strokes is not None

    def to_par(self, par: Optional[int] = None) -> Optional[int]:
        """Strokes relative to par. Explicit ``par`` overrides the stored one."""
        if self.strokes is None:
            return None
        return self.strokes - (par if par is not None else self.par)

    def get_score_type(self, par: Optional[int] = None) -> Optional[ScoreType]:
        """Get the score type (eagle, birdie, par, bogey, double_bogey)."""
        return classify_to_par(self.to_par(par))
