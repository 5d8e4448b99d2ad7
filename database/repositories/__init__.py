from .game_repo import GameRepositoryDB
from .score_repo import ScoreRepositoryDB
from .result_repo import ResultRepositoryDB

__all__ = ["GameRepositoryDB", "ScoreRepositoryDB", "ResultRepositoryDB"]
