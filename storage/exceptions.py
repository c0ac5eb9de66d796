class StorageError(Exception):
    """Base for all storage errors."""


class NotFoundError(StorageError):
    """Entity not found."""


class DuplicateError(StorageError):
    """Entity with this id already exists."""


class VersionConflictError(StorageError):
    """Write based on a stale version of the game (optimistic concurrency)."""
