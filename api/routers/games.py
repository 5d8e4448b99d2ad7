"""Game API endpoints: lobby, score entry, leaderboard, results."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from api.dependencies import get_service
from api.schemas import (
    CreateGameRequest,
    GameDetailResponse,
    HostActionRequest,
    JoinableGameResponse,
    JoinGameRequest,
    ScorecardResponse,
    ScoreUpdate,
)
from database.exceptions import DuplicateError, NotFoundError
from models import Game, GamePlayer, GameResult, GameStatus, LeaderboardRow, ScoreEntry
from scoring.exceptions import (
    AlreadyFinalizedError,
    GameFullError,
    InvalidGameSettingsError,
    InvalidStateError,
    NotAuthorizedError,
)
from scoring.scorecard import score_type_counts, score_types
from scoring.service import GameScoringService

logger = logging.getLogger(__name__)

router = APIRouter()


# ================================================================
# Lobby
# ================================================================

@router.post("", response_model=Game, status_code=201)
async def create_game(req: CreateGameRequest, service: GameScoringService = Depends(get_service)):
    try:
        return await service.create_game(
            req.host_id,
            req.host_name,
            req.course_name,
            number_of_holes=req.number_of_holes,
            max_players=req.max_players,
            handicap=req.handicap,
        )
    except InvalidGameSettingsError as e:
        raise HTTPException(400, str(e))


@router.get("/code/{game_code}", response_model=JoinableGameResponse)
async def get_joinable_game(game_code: str, service: GameScoringService = Depends(get_service)):
    try:
        game = await service.get_game_by_code(game_code)
    except NotFoundError:
        raise HTTPException(404, "Game not found")
    if game.status != GameStatus.WAITING:
        raise HTTPException(400, "Game is no longer accepting players")
    players = await service.get_roster(game.id)
    if len(players) >= game.max_players:
        raise HTTPException(400, "Game is full")
    return JoinableGameResponse(game=game, player_count=len(players))


@router.post("/code/{game_code}/join", response_model=GameDetailResponse)
async def join_game(
    game_code: str,
    req: JoinGameRequest,
    service: GameScoringService = Depends(get_service),
):
    try:
        players = await service.join_game(game_code, req.player_id, req.name, req.handicap)
        game = await service.get_game_by_code(game_code)
    except NotFoundError:
        raise HTTPException(404, "Game not found")
    except DuplicateError:
        raise HTTPException(409, "Already joined this game")
    except (InvalidStateError, GameFullError) as e:
        raise HTTPException(400, str(e))
    return GameDetailResponse(game=game, players=players)


@router.get("/{game_id}", response_model=GameDetailResponse)
async def get_game(game_id: str, service: GameScoringService = Depends(get_service)):
    try:
        game = await service.get_game(game_id)
    except NotFoundError:
        raise HTTPException(404, "Game not found")
    players = await service.get_roster(game_id)
    return GameDetailResponse(game=game, players=players)


@router.get("/{game_id}/players", response_model=List[GamePlayer])
async def get_roster(game_id: str, service: GameScoringService = Depends(get_service)):
    try:
        return await service.get_roster(game_id)
    except NotFoundError:
        raise HTTPException(404, "Game not found")


@router.post("/{game_id}/start", response_model=Game)
async def start_game(
    game_id: str,
    req: HostActionRequest,
    service: GameScoringService = Depends(get_service),
):
    try:
        return await service.start_game(game_id, req.player_id)
    except NotFoundError:
        raise HTTPException(404, "Game not found")
    except NotAuthorizedError as e:
        raise HTTPException(403, str(e))
    except InvalidStateError as e:
        raise HTTPException(400, str(e))


# ================================================================
# Scores
# ================================================================

@router.post("/{game_id}/scores", response_model=ScoreEntry)
async def update_score(
    game_id: str,
    req: ScoreUpdate,
    service: GameScoringService = Depends(get_service),
):
    try:
        return await service.record_score(game_id, req.player_id, req.hole, req.strokes)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except InvalidStateError as e:
        raise HTTPException(400, str(e))


@router.get("/{game_id}/scores", response_model=List[ScoreEntry])
async def get_scores(
    game_id: str,
    player_id: Optional[str] = Query(None),
    service: GameScoringService = Depends(get_service),
):
    try:
        return await service.get_score_entries(game_id, player_id)
    except NotFoundError:
        raise HTTPException(404, "Game not found")


@router.get("/{game_id}/scorecard/{player_id}", response_model=ScorecardResponse)
async def get_scorecard(
    game_id: str,
    player_id: str,
    service: GameScoringService = Depends(get_service),
):
    try:
        agg = await service.get_player_aggregate(game_id, player_id)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    return ScorecardResponse(
        **agg.model_dump(),
        score_types=score_types(agg),
        score_type_counts=score_type_counts(agg),
    )


# ================================================================
# Leaderboard & results
# ================================================================

@router.get("/{game_id}/leaderboard", response_model=List[LeaderboardRow])
async def get_leaderboard(game_id: str, service: GameScoringService = Depends(get_service)):
    try:
        return await service.compute_live_leaderboard(game_id)
    except NotFoundError:
        raise HTTPException(404, "Game not found")


@router.post("/{game_id}/complete", response_model=List[GameResult])
async def complete_game(
    game_id: str,
    req: HostActionRequest,
    service: GameScoringService = Depends(get_service),
):
    """Host ends the game: rank everyone and record the results once."""
    try:
        game = await service.get_game(game_id)
        if game.host_id != req.player_id:
            raise HTTPException(403, "Only the host can complete the game")
        return await service.finalize_game(game_id)
    except NotFoundError:
        raise HTTPException(404, "Game not found")
    except AlreadyFinalizedError as e:
        raise HTTPException(409, str(e))
    except InvalidStateError as e:
        raise HTTPException(400, str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Finalize failed for game %s", game_id)
        raise HTTPException(500, f"Completing the game failed, it is still in progress: {type(e).__name__}")


@router.get("/{game_id}/results", response_model=List[GameResult])
async def get_results(game_id: str, service: GameScoringService = Depends(get_service)):
    try:
        return await service.get_game_results(game_id)
    except NotFoundError:
        raise HTTPException(404, "Game not found")
    except InvalidStateError as e:
        raise HTTPException(400, str(e))
