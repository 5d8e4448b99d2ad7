"""Conversion between asyncpg database rows and Pydantic domain models.

Centralizes all mapping logic between the games schema and the models.
"""

from typing import Optional, Sequence
from uuid import UUID

from models import Game, GamePlayer, GameResult, GameStatus, Hole, ScoreEntry


# ================================================================
# Row -> Model (reads)
# ================================================================

def holes_from_pars(pars: Optional[Sequence[int]]) -> list:
    """games.games.pars array -> ordered Hole list."""
    return [Hole(number=i, par=par) for i, par in enumerate(pars or [], start=1)]


def game_from_row(row) -> Game:
    """games.games row -> Game model."""
    return Game(
        id=str(row["id"]),
        game_code=row["game_code"],
        host_id=row["host_id"],
        course_name=row["course_name"],
        number_of_holes=row["number_of_holes"],
        max_players=row["max_players"],
        status=GameStatus(row["status"]),
        holes=holes_from_pars(row["pars"]),
        created_at=row["created_at"],
        started_at=row["started_at"],
        completed_at=row["completed_at"],
    )


def game_player_from_row(row) -> GamePlayer:
    """games.game_players row -> GamePlayer model."""
    return GamePlayer(
        game_id=str(row["game_id"]),
        player_id=row["player_id"],
        name=row["name"],
        handicap=row["handicap"] or 0,
        is_host=bool(row["is_host"]),
        joined_at=row["joined_at"],
    )


def score_entry_from_row(row) -> ScoreEntry:
    """games.score_entries row -> ScoreEntry model."""
    return ScoreEntry(
        game_id=str(row["game_id"]),
        player_id=row["player_id"],
        hole=row["hole_number"],
        strokes=row["strokes"],
        par=row["par"],
        updated_at=row["updated_at"],
    )


def game_result_from_row(row) -> GameResult:
    """games.game_results row -> GameResult model."""
    return GameResult(
        game_id=str(row["game_id"]),
        player_id=row["player_id"],
        total_strokes=row["total_strokes"],
        total_par=row["total_par"],
        holes_played=row["holes_played"],
        net_score=row["net_score"],
        handicap=row["handicap"],
        position=row["position"],
        is_winner=row["is_winner"],
        created_at=row["created_at"],
    )


# ================================================================
# Model -> Row (writes)
# ================================================================

def game_to_row(game: Game) -> dict:
    """Game -> dict for games.games INSERT."""
    return {
        "game_code": game.game_code,
        "host_id": game.host_id,
        "course_name": game.course_name,
        "number_of_holes": game.number_of_holes,
        "max_players": game.max_players,
        "status": game.status.value,
        "pars": [h.par for h in game.holes],
    }


def placeholder_rows(game_id: UUID, player_ids: Sequence[str], holes: Sequence[Hole]) -> list:
    """Null-stroke score_entries tuples for every player and hole (for executemany)."""
    return [
        (game_id, player_id, hole.number, None, hole.par)
        for player_id in player_ids
        for hole in holes
    ]


def game_result_to_row(result: GameResult) -> tuple:
    """GameResult -> tuple for games.game_results INSERT (for executemany)."""
    return (
        UUID(result.game_id), result.player_id,
        result.total_strokes, result.total_par, result.holes_played,
        result.net_score, result.handicap,
        result.position, result.is_winner, result.created_at,
    )
