from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from models import (
    FinalResult,
    GameFormat,
    HoleContext,
    HoleInput,
    MatchPlayHoleRecord,
    Player,
    Score,
    ScoringState,
    Team,
)
from models.hole_score import is_conceded, is_numeric
from scoring import finalizer
from scoring.exceptions import InvalidConfiguration
from scoring.formats.base import FormatScorer, ScoredHole


def hole_result(score_a: Optional[Score], score_b: Optional[Score]) -> int:
    """1 if side A wins the hole, -1 if side B wins, 0 if halved.

    A conceded (or absent) score loses to any real score; two concessions halve.
    """
    a_ok, b_ok = is_numeric(score_a), is_numeric(score_b)
    if not a_ok and not b_ok:
        return 0
    if not b_ok:
        return 1
    if not a_ok:
        return -1
    if score_a < score_b:
        return 1
    if score_b < score_a:
        return -1
    return 0


class MatchPlayScorer(FormatScorer):
    """Two players, hole by hole. Cumulative strokes are kept alongside for the stroke-play view."""

    format = GameFormat.MATCH_PLAY
    accumulates_points = False
    unit = "strokes"
    record_type = MatchPlayHoleRecord
    # Best ball in stroke mode sums counting scores instead of playing holes.
    stroke_mode = False

    def validate_roster(self, players: List[Player], teams: List[Team]) -> None:
        super().validate_roster(players, teams)
        if len(players) != 2:
            raise InvalidConfiguration(f"Match play needs exactly 2 players, got {len(players)}")

    def is_finished(self, state: ScoringState) -> bool:
        return state.holes_remaining <= 0 or finalizer.is_match_decided(
            state.match_status, state.holes_remaining
        )

    def _score(self, hole: HoleInput, context: HoleContext, prior: ScoringState, net) -> ScoredHole:
        result = hole_result(net[0], net[1])
        strokes, conceded = self._stroke_columns(net, prior)
        return self._build(hole, context, prior, net, result, strokes, conceded)

    def _stroke_columns(
        self, counted: Sequence[Optional[Score]], prior: ScoringState
    ) -> Tuple[Tuple[float, ...], Tuple[int, ...]]:
        strokes = tuple(float(s) if is_numeric(s) else 0.0 for s in counted)
        conceded = tuple(c + (1 if is_conceded(s) else 0) for c, s in zip(prior.conceded_holes, counted))
        return strokes, conceded

    def _build(self, hole, context, prior, net, result, strokes, conceded, **extra) -> ScoredHole:
        match_status = prior.match_status + result
        totals = self.add_points(prior.totals, strokes)
        state = self.advance(prior, totals, match_status=match_status, conceded_holes=conceded)
        record = self.record_type(
            **self.base_record_fields(hole, context, net, strokes, totals),
            result=result,
            match_status=match_status,
            holes_remaining=state.holes_remaining,
            **extra,
        )
        return ScoredHole(record, state)

    def finalize(self, state: ScoringState, side_names: Sequence[str]) -> FinalResult:
        return finalizer.match_result(state.match_status, state.holes_remaining, side_names)

    def standing(self, state: ScoringState, side_names: Sequence[str]) -> FinalResult:
        if self.stroke_mode:
            return super().standing(state, side_names)
        return FinalResult(final_result=finalizer.format_match_status_with_holes(
            state.match_status, state.holes_remaining, side_names
        ))

    def stroke_play_result(self, state: ScoringState, side_names: Sequence[str]) -> Optional[FinalResult]:
        """Stroke-play reading of the same card, when enabled for the game."""
        if not self.config.stroke_play_enabled:
            return None
        eligible = [c == 0 for c in state.conceded_holes]
        return finalizer.lowest_total(state.totals, side_names, eligible)
