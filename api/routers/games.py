"""Game API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from api.dependencies import get_manager
from api.schemas import (
    ContinueRequest,
    CreateGameRequest,
    EditHoleRequest,
    GameSummaryResponse,
    LeaderboardResponse,
    StandingRow,
    SubmitHoleRequest,
)
from models import Game, GameStatus
from scoring import engine, leaderboard
from scoring.exceptions import (
    GameStateError,
    IncompleteHoleInput,
    InvalidConfiguration,
    InvalidHoleInput,
    ScoringError,
)
from storage.exceptions import DuplicateError, NotFoundError, StorageError, VersionConflictError
from storage.manager import GameManager

logger = logging.getLogger(__name__)

router = APIRouter()

_STATUS_CODES = [
    (NotFoundError, 404),
    (VersionConflictError, 409),
    (DuplicateError, 409),
    (GameStateError, 409),
    (InvalidConfiguration, 400),
    (IncompleteHoleInput, 422),
    (InvalidHoleInput, 422),
]


def _http_error(e: Exception) -> HTTPException:
    for error_type, status in _STATUS_CODES:
        if isinstance(e, error_type):
            return HTTPException(status, str(e))
    logger.exception("Unhandled engine error")
    return HTTPException(500, f"{type(e).__name__}: {e}")


def summarize_game(g: Game) -> GameSummaryResponse:
    """Project a full Game into a lightweight summary."""
    return GameSummaryResponse(
        id=g.id,
        name=g.name,
        format=g.config.format,
        status=g.status,
        course_name=g.course.name,
        holes_played=len(g.holes),
        planned_holes=g.planned_holes,
        winner=g.winner,
        final_result=g.final_result,
        version=g.version,
        created_at=g.created_at,
    )


@router.post("", status_code=201)
async def create_game(req: CreateGameRequest, manager: GameManager = Depends(get_manager)):
    try:
        return await manager.create_game(
            req.course, req.config, players=req.players, teams=req.teams, name=req.name
        )
    except (ScoringError, StorageError) as e:
        raise _http_error(e) from e


@router.get("", response_model=List[GameSummaryResponse])
async def list_games(
    status: Optional[GameStatus] = Query(None),
    manager: GameManager = Depends(get_manager),
):
    games = await manager.games.list_games(status=status)
    return [summarize_game(g) for g in games]


@router.get("/{game_id}")
async def get_game(game_id: str, manager: GameManager = Depends(get_manager)):
    try:
        return await manager.get_game(game_id)
    except StorageError as e:
        raise _http_error(e) from e


@router.post("/{game_id}/holes", status_code=201)
async def submit_hole(
    game_id: str,
    req: SubmitHoleRequest,
    manager: GameManager = Depends(get_manager),
):
    try:
        return await manager.submit_hole(
            game_id, req.hole_number, req.scores, expected_version=req.expected_version, **req.extras()
        )
    except (ScoringError, StorageError) as e:
        raise _http_error(e) from e


@router.put("/{game_id}/holes/{hole_number}")
async def edit_hole(
    game_id: str,
    hole_number: int,
    req: EditHoleRequest,
    manager: GameManager = Depends(get_manager),
):
    """Correct a scored hole; every later running total is re-derived."""
    try:
        return await manager.edit_hole(
            game_id, hole_number, req.scores, expected_version=req.expected_version,
            truncate=req.truncate, **req.extras()
        )
    except (ScoringError, StorageError) as e:
        raise _http_error(e) from e


@router.post("/{game_id}/continue")
async def continue_playing(
    game_id: str,
    req: ContinueRequest,
    manager: GameManager = Depends(get_manager),
):
    try:
        return await manager.continue_playing(
            game_id, req.extra_holes, expected_version=req.expected_version
        )
    except (ScoringError, StorageError) as e:
        raise _http_error(e) from e


@router.get("/{game_id}/result")
async def get_result(game_id: str, manager: GameManager = Depends(get_manager)):
    try:
        return await manager.get_result(game_id)
    except (ScoringError, StorageError) as e:
        raise _http_error(e) from e


@router.get("/{game_id}/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(game_id: str, manager: GameManager = Depends(get_manager)):
    try:
        game = await manager.get_game(game_id)
        result = engine.current_result(game)
    except (ScoringError, StorageError) as e:
        raise _http_error(e) from e

    return LeaderboardResponse(
        game_id=game.id,
        status=game.status,
        standings=[StandingRow(**row) for row in leaderboard.standings(game)],
        match_status=leaderboard.match_status_text(game),
        winner=result.winner,
        result=result.final_result,
        payout=result.final_payout,
    )


@router.delete("/{game_id}", status_code=204)
async def delete_game(game_id: str, manager: GameManager = Depends(get_manager)):
    deleted = await manager.games.delete_game(game_id)
    if not deleted:
        raise HTTPException(404, "Game not found")
