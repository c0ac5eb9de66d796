from storage.exceptions import DuplicateError, NotFoundError, StorageError, VersionConflictError
from storage.manager import GameManager
from storage.repository import GameRepository, InMemoryGameRepository

__all__ = [
    "GameManager",
    "GameRepository",
    "InMemoryGameRepository",
    "StorageError",
    "NotFoundError",
    "DuplicateError",
    "VersionConflictError",
]
