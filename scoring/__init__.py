from .exceptions import (
    EditTruncatesGame,
    GameStateError,
    IncompleteHoleInput,
    InvalidConfiguration,
    InvalidHandicap,
    InvalidHoleInput,
    ScoringError,
)
from .handicap import allocate, allocate_group, normalize_handicap
from .formats import SCORERS, FormatScorer, ScoredHole, scorer_for
from .engine import (
    continue_playing,
    create_game,
    current_result,
    edit_hole,
    replay,
    start_game,
    submit_hole,
)
from .leaderboard import match_status_text, skins_leaderboard, standings

__all__ = [
    "EditTruncatesGame",
    "GameStateError",
    "IncompleteHoleInput",
    "InvalidConfiguration",
    "InvalidHandicap",
    "InvalidHoleInput",
    "ScoringError",
    "allocate",
    "allocate_group",
    "normalize_handicap",
    "SCORERS",
    "FormatScorer",
    "ScoredHole",
    "scorer_for",
    "continue_playing",
    "create_game",
    "current_result",
    "edit_hole",
    "replay",
    "start_game",
    "submit_hole",
    "match_status_text",
    "skins_leaderboard",
    "standings",
]
