from pydantic import Field, SerializeAsAny, field_validator
from typing import Literal, Optional, Tuple

from .base import FrozenGolfModel
from .hole_score import Score, normalize_score


# ================================================================
# Hole inputs
# ================================================================

class HoleInput(FrozenGolfModel):
    """Raw scores submitted for one hole, in player (or team) position order."""
    hole_number: int = Field(..., ge=1)
    scores: Tuple[Optional[Score], ...]
    mulligans: Tuple[bool, ...] = ()

    @field_validator('scores', mode='before')
    @classmethod
    def normalize_scores(cls, v):
        return tuple(normalize_score(s) for s in v)

    @property
    def missing_positions(self) -> Tuple[int, ...]:
        return tuple(i for i, s in enumerate(self.scores) if s is None)


class WolfHoleInput(HoleInput):
    """Wolf hole: the wolf's decision plus any double/press."""
    wolf_choice: Optional[Literal["lone", "partner"]] = None
    partner: Optional[int] = Field(None, ge=0)
    doubled: bool = False
    doubled_back: bool = False


class UmbriagoHoleInput(HoleInput):
    """Umbriago hole. Team positions are 0 (team A) and 1 (team B)."""
    closest_to_pin: Optional[int] = Field(None, ge=0, le=1)
    double_called_by: Optional[int] = Field(None, ge=0, le=1)
    doubled_back: bool = False
    roll_called_by: Optional[int] = Field(None, ge=0, le=1)


class HoleContext(FrozenGolfModel):
    """Course facts for the hole being scored and the strokes each position receives."""
    number: int
    par: int
    stroke_index: int
    strokes_received: Tuple[int, ...] = ()

    def strokes_for(self, position: int) -> int:
        if position < len(self.strokes_received):
            return self.strokes_received[position]
        return 0


# ================================================================
# Running state
# ================================================================

class ScoringState(FrozenGolfModel):
    """Cumulative state after the last scored hole. Totals are indexed by side position."""
    holes_played: int = 0
    holes_remaining: int
    totals: Tuple[float, ...]
    match_status: int = 0           # positive = side 0 up
    skins_available: int = 1        # skins riding on the next hole
    mulligans_used: Tuple[int, ...] = ()
    rolls_used: Tuple[int, ...] = ()
    conceded_holes: Tuple[int, ...] = ()


# ================================================================
# Hole records
# ================================================================

class HoleRecord(FrozenGolfModel):
    """Scored hole: raw input, derived net scores, hole points and running totals."""
    hole_number: int
    par: int
    stroke_index: int
    input: SerializeAsAny[HoleInput]
    gross: Tuple[Optional[Score], ...]
    net: Tuple[Optional[Score], ...]
    strokes_received: Tuple[int, ...]
    points: Tuple[float, ...]
    running_totals: Tuple[float, ...]


class MatchPlayHoleRecord(HoleRecord):
    result: int                     # 1 = side 0 won, -1 = side 1 won, 0 = halved
    match_status: int
    holes_remaining: int


class BestBallHoleRecord(MatchPlayHoleRecord):
    counting_scores: Tuple[Optional[Score], ...]
    counting_players: Tuple[Tuple[int, ...], ...]


class CopenhagenHoleRecord(HoleRecord):
    is_sweep: bool = False
    sweep_winner: Optional[int] = None


class WolfHoleRecord(HoleRecord):
    wolf: int
    wolf_choice: Literal["lone", "partner"]
    partner: Optional[int] = None
    multiplier: int = 1
    winning_side: Literal["wolf", "opponents", "tie"]


class UmbriagoHoleRecord(HoleRecord):
    team_low_winner: Optional[int] = None
    individual_low_winner: Optional[int] = None
    closest_to_pin_winner: Optional[int] = None
    birdie_counts: Tuple[int, int] = (0, 0)
    is_umbriago: bool = False
    multiplier: int = 1
    roll_called_by: Optional[int] = None


class SkinsHoleRecord(HoleRecord):
    skins_available: int
    winner: Optional[int] = None
    skins_won: int = 0
    value_won: float = 0.0
    is_carryover: bool = False


# ================================================================
# Results
# ================================================================

class FinalResult(FrozenGolfModel):
    """Terminal outcome. Ties leave ``winner`` empty."""
    winner: Optional[str] = None
    winner_position: Optional[int] = None
    final_result: str
    final_payout: Optional[float] = None
    is_tie: bool = False


class StrokeAllocation(FrozenGolfModel):
    """Strokes received on one hole by each side of a pairing."""
    strokes_a: int = 0
    strokes_b: int = 0
