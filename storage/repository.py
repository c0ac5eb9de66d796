"""Persistence collaborator for games.

Storage is a cache of engine output: it keeps the Game aggregate with its
ordered hole records and rejects writes made against a stale version.
"""

import asyncio
from typing import Dict, List, Optional, Protocol

from models import Game, GameStatus
from storage.exceptions import DuplicateError, NotFoundError, VersionConflictError


class GameRepository(Protocol):
    """Interface for game storage.

    Implementors must return hole records in hole-number order and must
    reject a save whose ``expected_version`` is not the stored version.
    """

    async def get_game(self, game_id: str) -> Optional[Game]:
        ...

    async def create_game(self, game: Game) -> Game:
        ...

    async def save_game(self, game: Game, expected_version: int) -> Game:
        """Store ``game`` and return it with its version bumped."""
        ...

    async def list_games(self, status: Optional[GameStatus] = None) -> List[Game]:
        ...

    async def delete_game(self, game_id: str) -> bool:
        ...


class InMemoryGameRepository:
    """Process-local storage. Every read and write hands out a copy."""

    def __init__(self):
        self._games: Dict[str, Game] = {}
        self._lock = asyncio.Lock()

    # ================================================================
    # Read
    # ================================================================

    async def get_game(self, game_id: str) -> Optional[Game]:
        game = self._games.get(game_id)
        return game.model_copy(deep=True) if game else None

    async def list_games(self, status: Optional[GameStatus] = None) -> List[Game]:
        games = [g for g in self._games.values() if status is None or g.status == status]
        games.sort(key=lambda g: (g.created_at is None, g.created_at))
        return [g.model_copy(deep=True) for g in games]

    # ================================================================
    # Write
    # ================================================================

    async def create_game(self, game: Game) -> Game:
        async with self._lock:
            if game.id in self._games:
                raise DuplicateError(f"Game {game.id} already exists")
            stored = game.model_copy(deep=True, update={"version": 1})
            self._games[game.id] = stored
            return stored.model_copy(deep=True)

    async def save_game(self, game: Game, expected_version: int) -> Game:
        async with self._lock:
            current = self._games.get(game.id)
            if current is None:
                raise NotFoundError(f"Game {game.id} not found")
            if current.version != expected_version:
                raise VersionConflictError(
                    f"Game {game.id} is at version {current.version}, write was based on {expected_version}"
                )
            stored = game.model_copy(deep=True, update={"version": expected_version + 1})
            self._games[game.id] = stored
            return stored.model_copy(deep=True)

    async def delete_game(self, game_id: str) -> bool:
        async with self._lock:
            return self._games.pop(game_id, None) is not None
