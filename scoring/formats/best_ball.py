from __future__ import annotations

from typing import List, Sequence

from models import (
    BestBallHoleRecord,
    CONCEDED,
    FinalResult,
    GameConfig,
    GameFormat,
    HoleContext,
    HoleInput,
    Player,
    ScoringState,
    Team,
)
from scoring import finalizer
from scoring.exceptions import InvalidConfiguration
from scoring.formats.base import FormatScorer, ScoredHole
from scoring.formats.match_play import MatchPlayScorer, hole_result


class BestBallScorer(MatchPlayScorer):
    """Each team counts its lowest score per hole.

    ``best_ball_mode`` "match" plays the counting scores as a match between
    two teams; "stroke" sums them and the lowest total wins.
    """

    format = GameFormat.BEST_BALL
    team_format = True
    record_type = BestBallHoleRecord

    def __init__(self, config: GameConfig, team_sizes: Sequence[int] = (), player_count: int = 0):
        super().__init__(config, team_sizes, player_count)
        self.stroke_mode = config.best_ball_mode == "stroke"

    def validate_roster(self, players: List[Player], teams: List[Team]) -> None:
        FormatScorer.validate_roster(self, players, teams)
        if self.stroke_mode:
            if len(teams) < 2:
                raise InvalidConfiguration(f"Best ball stroke play needs at least 2 teams, got {len(teams)}")
        elif len(teams) != 2:
            raise InvalidConfiguration(f"Best ball match play needs exactly 2 teams, got {len(teams)}")

    def is_finished(self, state: ScoringState) -> bool:
        if self.stroke_mode:
            return state.holes_remaining <= 0
        return super().is_finished(state)

    def _score(self, hole: HoleInput, context: HoleContext, prior: ScoringState, net) -> ScoredHole:
        counting_scores = []
        counting_players = []
        for team in range(len(self.team_sizes)):
            low, tied = self.lowest_positions(net, self.team_positions(team))
            counting_scores.append(low if low is not None else CONCEDED)
            counting_players.append(tied)

        result = 0
        if not self.stroke_mode:
            result = hole_result(counting_scores[0], counting_scores[1])
        strokes, conceded = self._stroke_columns(counting_scores, prior)
        return self._build(
            hole, context, prior, net, result, strokes, conceded,
            counting_scores=tuple(counting_scores),
            counting_players=tuple(counting_players),
        )

    def finalize(self, state: ScoringState, side_names: Sequence[str]) -> FinalResult:
        if self.stroke_mode:
            eligible = [c == 0 for c in state.conceded_holes]
            return finalizer.lowest_total(state.totals, side_names, eligible)
        return super().finalize(state, side_names)
