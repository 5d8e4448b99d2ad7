from fastapi import Request
from scoring.service import GameScoringService


def get_service(request: Request) -> GameScoringService:
    """FastAPI dependency that provides the GameScoringService."""
    return request.app.state.scoring_service
