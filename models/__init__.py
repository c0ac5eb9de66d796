from .base import BaseGolfModel, FrozenGolfModel
from .config import CopenhagenTable, GameConfig, GameFormat
from .course import Course
from .game import Game, GameStatus
from .hole import CourseHole
from .hole_score import CONCEDED, Score, normalize_score, score_type
from .player import Player, Team
from .records import (
    BestBallHoleRecord,
    CopenhagenHoleRecord,
    FinalResult,
    HoleContext,
    HoleInput,
    HoleRecord,
    MatchPlayHoleRecord,
    ScoringState,
    SkinsHoleRecord,
    StrokeAllocation,
    UmbriagoHoleInput,
    UmbriagoHoleRecord,
    WolfHoleInput,
    WolfHoleRecord,
)

__all__ = [
    "BaseGolfModel",
    "FrozenGolfModel",
    "CopenhagenTable",
    "GameConfig",
    "GameFormat",
    "Course",
    "CourseHole",
    "Game",
    "GameStatus",
    "CONCEDED",
    "Score",
    "normalize_score",
    "score_type",
    "Player",
    "Team",
    "BestBallHoleRecord",
    "CopenhagenHoleRecord",
    "FinalResult",
    "HoleContext",
    "HoleInput",
    "HoleRecord",
    "MatchPlayHoleRecord",
    "ScoringState",
    "SkinsHoleRecord",
    "StrokeAllocation",
    "UmbriagoHoleInput",
    "UmbriagoHoleRecord",
    "WolfHoleInput",
    "WolfHoleRecord",
]
