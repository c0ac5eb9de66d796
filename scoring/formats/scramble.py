from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from models import FinalResult, GameFormat, HoleContext, HoleInput, HoleRecord, Player, ScoringState, Team
from models.hole_score import is_conceded, is_numeric
from scoring import finalizer
from scoring.exceptions import InvalidConfiguration
from scoring.formats.base import FormatScorer, ScoredHole


def validate_min_drives(drives_used: Mapping[str, int], minimum: int) -> Dict[str, int]:
    """Players short of the minimum drive requirement, with how many drives they lack."""
    return {
        player: minimum - used
        for player, used in drives_used.items()
        if used < minimum
    }


class StrokeScorer(FormatScorer):
    """Cumulative strokes per side; lowest complete card wins."""

    accumulates_points = False
    unit = "strokes"

    def _score(self, hole: HoleInput, context: HoleContext, prior: ScoringState, net) -> ScoredHole:
        strokes = [float(s) if is_numeric(s) else 0.0 for s in net]
        conceded = tuple(c + (1 if is_conceded(s) else 0) for c, s in zip(prior.conceded_holes, net))
        totals = self.add_points(prior.totals, strokes)
        record = HoleRecord(**self.base_record_fields(hole, context, net, strokes, totals))
        return ScoredHole(record, self.advance(prior, totals, conceded_holes=conceded))

    def finalize(self, state: ScoringState, side_names: Sequence[str]) -> FinalResult:
        eligible = [c == 0 for c in state.conceded_holes]
        return finalizer.lowest_total(state.totals, side_names, eligible)


class StrokePlayScorer(StrokeScorer):
    format = GameFormat.STROKE_PLAY

    def validate_roster(self, players: List[Player], teams: List[Team]) -> None:
        super().validate_roster(players, teams)
        if not players:
            raise InvalidConfiguration("Stroke play needs at least 1 player")


class ScrambleScorer(StrokeScorer):
    """One score per team per hole. ``min_drives_per_player`` is checked after the round."""

    format = GameFormat.SCRAMBLE
    team_format = True
    scores_per_team = True

    def validate_roster(self, players: List[Player], teams: List[Team]) -> None:
        super().validate_roster(players, teams)
        if not teams:
            raise InvalidConfiguration("Scramble needs at least 1 team")
