from typing import Sequence


class ScoringError(Exception):
    """Base for all scoring engine errors."""


class IncompleteHoleInput(ScoringError):
    """A required score is missing. The hole is simply not scored yet."""

    def __init__(self, hole_number: int, missing: Sequence[int], detail: str = ""):
        self.hole_number = hole_number
        self.missing = tuple(missing)
        message = f"Hole {hole_number} is incomplete: missing positions {list(self.missing)}"
        if detail:
            message = f"Hole {hole_number} is incomplete: {detail}"
        super().__init__(message)


class InvalidHoleInput(ScoringError):
    """Hole submission that can never be scored as given."""


class InvalidHandicap(ScoringError, UserWarning):
    """Non-numeric or out-of-range handicap. Emitted as a warning; zero strokes are allocated."""


class InvalidConfiguration(ScoringError):
    """Game cannot start: wrong roster size for the format, unusable course, etc."""


class GameStateError(ScoringError):
    """Operation not allowed in the game's current status."""


class EditTruncatesGame(GameStateError):
    """An edit decides the game before its last scored hole.

    ``dropped`` holds the hole inputs that would be discarded; pass
    ``truncate=True`` to apply the edit anyway.
    """

    def __init__(self, game_id: str, decided_after: int, dropped: Sequence):
        self.decided_after = decided_after
        self.dropped = tuple(dropped)
        numbers = [hole.hole_number for hole in self.dropped]
        super().__init__(
            f"Game {game_id} would be decided after hole {decided_after}; holes {numbers} would be dropped"
        )
