from .exceptions import (
    AlreadyFinalizedError,
    GameFullError,
    InvalidGameSettingsError,
    InvalidStateError,
    NotAuthorizedError,
    ScoringError,
)
from .leaderboard import build_results, competition_positions, live_leaderboard
from .scorecard import aggregate, aggregate_game, score_types, standard_par_table
from .service import GameScoringService

__all__ = [
    "aggregate",
    "aggregate_game",
    "score_types",
    "standard_par_table",
    "live_leaderboard",
    "competition_positions",
    "build_results",
    "GameScoringService",
    "ScoringError",
    "InvalidStateError",
    "AlreadyFinalizedError",
    "NotAuthorizedError",
    "GameFullError",
    "InvalidGameSettingsError",
]
