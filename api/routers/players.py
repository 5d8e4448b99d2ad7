"""Player history endpoints."""

from fastapi import APIRouter, Depends
from typing import List

from api.dependencies import get_service
from api.schemas import GameSummaryResponse
from scoring.service import GameScoringService

router = APIRouter()


@router.get("/{player_id}/games", response_model=List[GameSummaryResponse])
async def get_player_games(player_id: str, service: GameScoringService = Depends(get_service)):
    games = await service.get_player_games(player_id)
    return [
        GameSummaryResponse(
            id=g.id,
            game_code=g.game_code,
            course_name=g.course_name,
            status=g.status,
            number_of_holes=g.number_of_holes,
            is_host=g.host_id == player_id,
            created_at=g.created_at,
            completed_at=g.completed_at,
        )
        for g in games
    ]
