"""API-specific request and response models."""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Literal, Optional, Union

from models import Course, GameConfig, GameFormat, GameStatus, Player, Team

RawScore = Optional[Union[int, str]]


class CreateGameRequest(BaseModel):
    name: Optional[str] = None
    course: Course
    config: GameConfig
    players: List[Player] = Field(default_factory=list)
    teams: List[Team] = Field(default_factory=list)


class HoleScoresRequest(BaseModel):
    """Scores for one hole in player (or team) order plus any format-specific calls."""
    scores: List[RawScore]
    mulligans: List[bool] = Field(default_factory=list)
    expected_version: Optional[int] = None

    # Wolf
    wolf_choice: Optional[Literal["lone", "partner"]] = None
    partner: Optional[int] = None
    doubled: Optional[bool] = None
    doubled_back: Optional[bool] = None

    # Umbriago
    closest_to_pin: Optional[int] = None
    double_called_by: Optional[int] = None
    roll_called_by: Optional[int] = None

    def extras(self) -> dict:
        """Format-specific fields the caller actually sent."""
        return self.model_dump(exclude_none=True, exclude={"scores", "expected_version", "hole_number", "truncate"})


class SubmitHoleRequest(HoleScoresRequest):
    hole_number: int


class EditHoleRequest(HoleScoresRequest):
    # Apply an edit even if it decides the game before later scored holes.
    truncate: bool = False


class ContinueRequest(BaseModel):
    extra_holes: int = Field(1, ge=1)
    expected_version: Optional[int] = None


class GameSummaryResponse(BaseModel):
    """Lightweight game for list views."""
    id: str
    name: Optional[str] = None
    format: GameFormat
    status: GameStatus
    course_name: Optional[str] = None
    holes_played: int = 0
    planned_holes: Optional[int] = None
    winner: Optional[str] = None
    final_result: Optional[str] = None
    version: int
    created_at: Optional[datetime] = None


class StandingRow(BaseModel):
    position: int
    name: str
    total: float
    holes_conceded: int = 0


class LeaderboardResponse(BaseModel):
    """Current standings for the scoreboard page."""
    game_id: str
    status: GameStatus
    standings: List[StandingRow]
    match_status: Optional[str] = None
    winner: Optional[str] = None
    result: str
    payout: Optional[float] = None
