from .base import BaseGolfModel, FrozenGolfModel
from .game import Game, GamePlayer, GameStatus
from .hole import Hole
from .results import GameResult, LeaderboardRow, PlayerAggregate
from .score_entry import ScoreEntry, ScoreType, classify_to_par

__all__ = [
    "BaseGolfModel",
    "FrozenGolfModel",
    "Game",
    "GamePlayer",
    "GameResult",
    "GameStatus",
    "Hole",
    "LeaderboardRow",
    "PlayerAggregate",
    "ScoreEntry",
    "ScoreType",
    "classify_to_par",
]
