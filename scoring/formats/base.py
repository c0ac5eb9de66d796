from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, List, NamedTuple, Optional, Sequence, Tuple

from models import (
    FinalResult,
    GameConfig,
    GameFormat,
    HoleContext,
    HoleInput,
    HoleRecord,
    Player,
    Score,
    ScoringState,
    Team,
)
from models.hole_score import apply_strokes, is_numeric
from scoring.exceptions import IncompleteHoleInput, InvalidConfiguration, InvalidHoleInput
from scoring import finalizer

logger = logging.getLogger(__name__)


class ScoredHole(NamedTuple):
    record: HoleRecord
    state: ScoringState


class FormatScorer(ABC):
    """Scoring rules for one game format.

    A scorer is built once per game and is stateless between calls:
    ``score_hole`` maps (hole input, hole context, prior state) to a new
    record and state without touching anything else, so recomputing a hole
    from the same prior state always gives the same answer.
    """

    format: ClassVar[GameFormat]
    input_type: ClassVar[type] = HoleInput
    team_format: ClassVar[bool] = False
    scores_per_team: ClassVar[bool] = False
    # Highest total wins and ``target_score`` applies; stroke formats turn this off.
    accumulates_points: ClassVar[bool] = True
    # Label for running totals in result text.
    unit: ClassVar[str] = "pts"

    def __init__(self, config: GameConfig, team_sizes: Sequence[int] = (), player_count: int = 0):
        self.config = config
        self.team_sizes = tuple(team_sizes)
        self.player_count = sum(self.team_sizes) if self.team_sizes else player_count

    # ----------------------------------------------------------------
    # Roster
    # ----------------------------------------------------------------

    def validate_roster(self, players: List[Player], teams: List[Team]) -> None:
        """Raise InvalidConfiguration when the roster does not fit the format."""
        if self.team_format:
            if players and not teams:
                raise InvalidConfiguration(f"{self.format.value} is played in teams")
            if any(not team.players for team in teams):
                raise InvalidConfiguration("Every team needs at least one player")
        elif teams:
            raise InvalidConfiguration(f"{self.format.value} is played by individual players")

    @property
    def side_count(self) -> int:
        return len(self.team_sizes) if self.team_format else self.player_count

    @property
    def score_positions(self) -> int:
        """Number of score entries expected per hole."""
        if self.scores_per_team:
            return len(self.team_sizes)
        return self.player_count

    def team_positions(self, team: int) -> Tuple[int, ...]:
        start = sum(self.team_sizes[:team])
        return tuple(range(start, start + self.team_sizes[team]))

    # ----------------------------------------------------------------
    # State
    # ----------------------------------------------------------------

    def initial_state(self, planned_holes: int) -> ScoringState:
        return ScoringState(
            holes_remaining=planned_holes,
            totals=(0.0,) * self.side_count,
            mulligans_used=(0,) * self.score_positions,
            conceded_holes=(0,) * self.side_count,
        )

    def extend(self, state: ScoringState, extra_holes: int) -> ScoringState:
        return state.model_copy(update={"holes_remaining": state.holes_remaining + extra_holes})

    def is_finished(self, state: ScoringState) -> bool:
        if state.holes_remaining <= 0:
            return True
        return self.target_reached(state)

    def target_reached(self, state: ScoringState) -> bool:
        target = self.config.target_score
        if not self.accumulates_points or target is None or not state.totals:
            return False
        return max(state.totals) >= target

    # ----------------------------------------------------------------
    # Scoring
    # ----------------------------------------------------------------

    def score_hole(self, hole: HoleInput, context: HoleContext, prior: ScoringState) -> ScoredHole:
        """Score one hole. Raises IncompleteHoleInput / InvalidHoleInput without side effects."""
        if not isinstance(hole, self.input_type):
            raise InvalidHoleInput(
                f"{self.format.value} expects {self.input_type.__name__}, got {type(hole).__name__}"
            )
        if len(hole.scores) != self.score_positions:
            raise InvalidHoleInput(
                f"Hole {hole.hole_number}: expected {self.score_positions} scores, got {len(hole.scores)}"
            )
        if hole.missing_positions:
            raise IncompleteHoleInput(hole.hole_number, hole.missing_positions)

        mulligans_used = self._count_mulligans(hole, prior)
        net = self.net_scores(hole.scores, context)
        scored = self._score(hole, context, prior, net)
        state = scored.state.model_copy(update={"mulligans_used": mulligans_used})
        logger.debug("%s hole %d scored: points=%s totals=%s",
                     self.format.value, hole.hole_number, scored.record.points, state.totals)
        return ScoredHole(scored.record, state)

    @abstractmethod
    def _score(
        self,
        hole: HoleInput,
        context: HoleContext,
        prior: ScoringState,
        net: Tuple[Optional[Score], ...],
    ) -> ScoredHole:
        """Format rules. ``net`` equals the gross scores when handicaps are off."""

    def net_scores(self, gross: Sequence[Optional[Score]], context: HoleContext) -> Tuple[Optional[Score], ...]:
        if not self.config.net_scoring:
            return tuple(gross)
        return tuple(apply_strokes(score, context.strokes_for(i)) for i, score in enumerate(gross))

    def _count_mulligans(self, hole: HoleInput, prior: ScoringState) -> Tuple[int, ...]:
        used = list(prior.mulligans_used) or [0] * self.score_positions
        if not hole.mulligans:
            return tuple(used)
        if len(hole.mulligans) != self.score_positions:
            raise InvalidHoleInput(
                f"Hole {hole.hole_number}: expected {self.score_positions} mulligan flags, got {len(hole.mulligans)}"
            )
        allowance = self.config.mulligans_per_player
        for position, took in enumerate(hole.mulligans):
            if not took:
                continue
            if used[position] + 1 > allowance:
                raise InvalidHoleInput(
                    f"Hole {hole.hole_number}: position {position} has no mulligans left ({allowance} allowed)"
                )
            used[position] += 1
        return tuple(used)

    # ----------------------------------------------------------------
    # Helpers for subclasses
    # ----------------------------------------------------------------

    def base_record_fields(
        self,
        hole: HoleInput,
        context: HoleContext,
        net: Tuple[Optional[Score], ...],
        points: Sequence[float],
        running_totals: Sequence[float],
    ) -> dict:
        return {
            "hole_number": hole.hole_number,
            "par": context.par,
            "stroke_index": context.stroke_index,
            "input": hole,
            "gross": hole.scores,
            "net": net,
            "strokes_received": tuple(context.strokes_for(i) for i in range(self.score_positions)),
            "points": tuple(float(p) for p in points),
            "running_totals": tuple(float(t) for t in running_totals),
        }

    @staticmethod
    def add_points(totals: Sequence[float], points: Sequence[float]) -> Tuple[float, ...]:
        return tuple(float(t + p) for t, p in zip(totals, points))

    @staticmethod
    def advance(prior: ScoringState, totals: Sequence[float], **updates) -> ScoringState:
        """Next state after one more hole has been played."""
        fields = {
            "holes_played": prior.holes_played + 1,
            "holes_remaining": prior.holes_remaining - 1,
            "totals": tuple(totals),
        }
        fields.update(updates)
        return prior.model_copy(update=fields)

    @staticmethod
    def lowest_positions(scores: Sequence[Optional[Score]], positions: Sequence[int]) -> Tuple[Optional[int], Tuple[int, ...]]:
        """Lowest numeric score among ``positions`` and every position holding it.

        Conceded and missing scores never count as low.
        """
        numeric = [(scores[p], p) for p in positions if is_numeric(scores[p])]
        if not numeric:
            return None, ()
        low = min(value for value, _ in numeric)
        return low, tuple(p for value, p in numeric if value == low)

    # ----------------------------------------------------------------
    # Outcome
    # ----------------------------------------------------------------

    def finalize(self, state: ScoringState, side_names: Sequence[str]) -> FinalResult:
        return finalizer.highest_total(state.totals, side_names, unit=self.unit)

    def standing(self, state: ScoringState, side_names: Sequence[str]) -> FinalResult:
        """Where an unfinished game stands. Never names a winner or a payout."""
        return FinalResult(final_result=finalizer.standings_text(state.totals, side_names, self.unit))
