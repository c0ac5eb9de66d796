from datetime import datetime
from enum import Enum
from pydantic import Field, SerializeAsAny
from typing import Dict, List, Optional, Tuple

from .base import BaseGolfModel
from .config import GameConfig
from .course import Course
from .player import Player, Team
from .records import HoleRecord, ScoringState


class GameStatus(str, Enum):
    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Game(BaseGolfModel):
    """A game in one format: roster, configuration, ordered hole records and outcome.

    Team formats list their players through ``teams``; individual formats use
    ``players``. ``state`` always equals the fold of ``holes`` and is only
    written by the scoring engine.
    """
    id: Optional[str] = None
    name: Optional[str] = None
    course: Course
    config: GameConfig
    players: List[Player] = Field(default_factory=list)
    teams: List[Team] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    status: GameStatus = GameStatus.SETUP
    planned_holes: Optional[int] = None  # config.planned_holes plus any extra holes
    stroke_table: Dict[int, Tuple[int, ...]] = Field(default_factory=dict)
    holes: List[SerializeAsAny[HoleRecord]] = Field(default_factory=list)
    state: Optional[ScoringState] = None

    # Set only by the finalizer
    winner: Optional[str] = None
    winner_position: Optional[int] = None
    final_result: Optional[str] = None
    final_payout: Optional[float] = None

    version: int = 0

    @property
    def is_finished(self) -> bool:
        return self.status == GameStatus.FINISHED

    @property
    def roster(self) -> List[Player]:
        """Every player in score-entry order (team players flattened in team order)."""
        if self.teams:
            return [p for team in self.teams for p in team.players]
        return list(self.players)

    @property
    def side_names(self) -> List[str]:
        if self.teams:
            return [t.name for t in self.teams]
        return [p.name for p in self.players]

    @property
    def next_hole_number(self) -> int:
        return len(self.holes) + 1

    def get_hole_record(self, hole_number: int) -> Optional[HoleRecord]:
        """Get the record for a hole. Assumes holes in order."""
        if 1 <= hole_number <= len(self.holes):
            return self.holes[hole_number - 1]
        return None

    def running_totals_after(self, hole_number: int) -> Optional[Tuple[float, ...]]:
        record = self.get_hole_record(hole_number)
        return record.running_totals if record else None

    def calculate_front_nine(self) -> Optional[Tuple[float, ...]]:
        """Hole points per side for holes 1-9."""
        return self._sum_points(self.holes[:9])

    def calculate_back_nine(self) -> Optional[Tuple[float, ...]]:
        """Hole points per side for holes 10-18."""
        return self._sum_points(self.holes[9:18])

    @staticmethod
    def _sum_points(records: List[HoleRecord]) -> Optional[Tuple[float, ...]]:
        if not records:
            return None
        return tuple(sum(column) for column in zip(*(r.points for r in records)))
