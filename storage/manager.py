"""Boundary used by callers: load a game, run the engine, save with a version check."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from models import Course, FinalResult, Game, GameConfig, HoleInput, HoleRecord, Player, Team
from scoring import engine
from scoring.exceptions import InvalidHoleInput
from scoring.formats import scorer_for
from storage.exceptions import NotFoundError, VersionConflictError
from storage.repository import GameRepository, InMemoryGameRepository

logger = logging.getLogger(__name__)


class GameManager:
    """Owns a GameRepository and applies engine operations to stored games.

    Concurrent edits of the same game are serialized by the repository's
    version check: the loser of a race gets VersionConflictError and must
    reload and resubmit.
    """

    def __init__(self, repository: Optional[GameRepository] = None):
        self.games = repository or InMemoryGameRepository()

    async def _load(self, game_id: str, expected_version: Optional[int] = None) -> Game:
        game = await self.games.get_game(game_id)
        if game is None:
            raise NotFoundError(f"Game {game_id} not found")
        if expected_version is not None and expected_version != game.version:
            raise VersionConflictError(
                f"Game {game_id} is at version {game.version}, request was based on {expected_version}"
            )
        return game

    @staticmethod
    def build_input(game: Game, hole_number: int, raw_scores: Sequence[Any], extras: dict) -> HoleInput:
        """Hole input of the type the game's format expects."""
        input_type = scorer_for(game).input_type
        try:
            return input_type(hole_number=hole_number, scores=list(raw_scores), **extras)
        except ValidationError as e:
            raise InvalidHoleInput(f"Hole {hole_number}: {e.errors()[0]['msg']}") from e

    # ================================================================
    # Lifecycle
    # ================================================================

    async def create_game(
        self,
        course: Course,
        config: GameConfig,
        players: Optional[List[Player]] = None,
        teams: Optional[List[Team]] = None,
        name: Optional[str] = None,
        game_id: Optional[str] = None,
    ) -> Game:
        """Create and start a game. Configuration errors surface here, before any hole."""
        game = engine.create_game(course, config, players, teams, game_id=game_id, name=name)
        game = engine.start_game(game)
        return await self.games.create_game(game)

    async def get_game(self, game_id: str) -> Game:
        return await self._load(game_id)

    async def submit_hole(
        self,
        game_id: str,
        hole_number: int,
        raw_scores: Sequence[Any],
        expected_version: Optional[int] = None,
        **extras: Any,
    ) -> HoleRecord:
        game = await self._load(game_id, expected_version)
        hole = self.build_input(game, hole_number, raw_scores, extras)
        updated = engine.submit_hole(game, hole)
        saved = await self.games.save_game(updated, expected_version=game.version)
        return saved.holes[hole_number - 1]

    async def edit_hole(
        self,
        game_id: str,
        hole_number: int,
        raw_scores: Sequence[Any],
        expected_version: Optional[int] = None,
        truncate: bool = False,
        **extras: Any,
    ) -> Game:
        game = await self._load(game_id, expected_version)
        hole = self.build_input(game, hole_number, raw_scores, extras)
        updated = engine.edit_hole(game, hole, truncate=truncate)
        logger.info("Edited hole %d of game %s", hole_number, game_id)
        return await self.games.save_game(updated, expected_version=game.version)

    async def continue_playing(
        self, game_id: str, extra_holes: int = 1, expected_version: Optional[int] = None
    ) -> Game:
        game = await self._load(game_id, expected_version)
        updated = engine.continue_playing(game, extra_holes)
        return await self.games.save_game(updated, expected_version=game.version)

    async def get_result(self, game_id: str) -> FinalResult:
        game = await self._load(game_id)
        return engine.current_result(game)
