from enum import Enum
from pydantic import Field, model_validator
from typing import Literal, Optional, Tuple

from .base import BaseGolfModel


class GameFormat(str, Enum):
    """Which scoring format a game is played under."""
    STROKE_PLAY = "stroke_play"
    MATCH_PLAY = "match_play"
    BEST_BALL = "best_ball"
    COPENHAGEN = "copenhagen"
    WOLF = "wolf"
    UMBRIAGO = "umbriago"
    SKINS = "skins"
    SCRAMBLE = "scramble"


class CopenhagenTable(BaseGolfModel):
    """Points per finishing pattern, listed best to worst. Every tier sums to the pool."""
    pool: int = Field(6, ge=1)
    outright: Tuple[int, int, int] = (4, 2, 0)
    tie_for_first: Tuple[int, int, int] = (3, 3, 0)
    tie_for_second: Tuple[int, int, int] = (4, 1, 1)
    three_way_tie: Tuple[int, int, int] = (2, 2, 2)
    sweep_requires_birdie: bool = True
    sweep_margin: int = Field(2, ge=1)

    @model_validator(mode='after')
    def validate_tiers_fill_pool(self):
        for name in ("outright", "tie_for_first", "tie_for_second", "three_way_tie"):
            tier = getattr(self, name)
            if sum(tier) != self.pool:
                raise ValueError(f"Copenhagen tier '{name}' {tier} does not sum to pool {self.pool}")
        if self.tie_for_first[0] != self.tie_for_first[1]:
            raise ValueError("Players tied for first must receive equal points")
        if self.tie_for_second[1] != self.tie_for_second[2]:
            raise ValueError("Players tied for second must receive equal points")
        if len(set(self.three_way_tie)) != 1:
            raise ValueError("A three-way tie must split points evenly")
        return self


class GameConfig(BaseGolfModel):
    """Per-game settings, fixed when the game is created."""
    format: GameFormat
    planned_holes: int = Field(18, ge=1, le=36)

    # Handicaps
    handicap_enabled: bool = False
    handicap_mode: Optional[Literal["gross", "net"]] = None

    mulligans_per_player: int = Field(0, ge=0)

    # Skins
    skin_value: float = Field(1.0, ge=0)
    carryover_enabled: bool = True

    # Wolf
    wolf_position: Literal["first", "last"] = "last"
    lone_wolf_win_points: int = Field(3, ge=0)
    lone_wolf_loss_points: int = Field(1, ge=0)
    team_win_points: int = Field(1, ge=0)
    double_enabled: bool = True

    # Umbriago
    stake_per_point: float = Field(1.0, ge=0)
    payout_mode: Literal["difference", "total"] = "difference"
    rolls_per_team: int = Field(1, ge=0)
    umbriago_bonus_per_stroke: int = Field(8, ge=1)

    copenhagen: CopenhagenTable = Field(default_factory=CopenhagenTable)

    # Best Ball / Match Play
    best_ball_mode: Literal["match", "stroke"] = "match"
    stroke_play_enabled: bool = True

    # Scramble
    min_drives_per_player: Optional[int] = Field(None, ge=0)

    # Point-accumulation games end once any side reaches this total
    target_score: Optional[float] = Field(None, gt=0)

    @property
    def net_scoring(self) -> bool:
        """Whether scores are compared net of handicap strokes."""
        if self.handicap_mode is not None:
            return self.handicap_mode == "net"
        return self.handicap_enabled
