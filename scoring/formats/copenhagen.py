from __future__ import annotations

from itertools import groupby
from typing import List, Optional, Sequence, Tuple

from models import (
    CopenhagenHoleRecord,
    CopenhagenTable,
    GameFormat,
    HoleContext,
    HoleInput,
    Player,
    Score,
    ScoringState,
    Team,
)
from models.hole_score import is_numeric
from scoring.exceptions import InvalidConfiguration
from scoring.formats.base import FormatScorer, ScoredHole

# Conceded scores rank behind every real score.
_CONCEDED_RANK = float("inf")


def _rank_value(score: Optional[Score]) -> float:
    return score if is_numeric(score) else _CONCEDED_RANK


def is_sweep(scores: Sequence[Optional[Score]], par: int, table: CopenhagenTable) -> Optional[int]:
    """Position of the sweeping player, if any.

    A sweep needs one player strictly lowest with no ties, at least
    ``sweep_margin`` clear of both others and, if required, birdie or better.
    """
    values = [_rank_value(s) for s in scores]
    best = min(values)
    if best == _CONCEDED_RANK or values.count(best) != 1:
        return None
    winner = values.index(best)
    if table.sweep_requires_birdie and best > par - 1:
        return None
    others = [v for i, v in enumerate(values) if i != winner]
    if all(v - best >= table.sweep_margin for v in others):
        return winner
    return None


def copenhagen_points(
    scores: Sequence[Optional[Score]],
    par: int,
    table: CopenhagenTable,
) -> Tuple[Tuple[int, int, int], Optional[int]]:
    """Points for three players on one hole plus the sweep winner position.

    Points always sum to ``table.pool``.
    """
    sweeper = is_sweep(scores, par, table)
    if sweeper is not None:
        points = [0, 0, 0]
        points[sweeper] = table.pool
        return tuple(points), sweeper

    ranked = sorted(range(3), key=lambda i: _rank_value(scores[i]))
    groups = [len(list(g)) for _, g in groupby(ranked, key=lambda i: _rank_value(scores[i]))]
    if groups == [3]:
        tier = table.three_way_tie
    elif groups == [2, 1]:
        tier = table.tie_for_first
    elif groups == [1, 2]:
        tier = table.tie_for_second
    else:
        tier = table.outright

    points = [0, 0, 0]
    for position, value in zip(ranked, tier):
        points[position] = value
    return tuple(points), None


class CopenhagenScorer(FormatScorer):
    """Three players share a fixed pool of points on every hole."""

    format = GameFormat.COPENHAGEN

    def validate_roster(self, players: List[Player], teams: List[Team]) -> None:
        super().validate_roster(players, teams)
        if len(players) != 3:
            raise InvalidConfiguration(f"Copenhagen needs exactly 3 players, got {len(players)}")

    def _score(self, hole: HoleInput, context: HoleContext, prior: ScoringState, net) -> ScoredHole:
        points, sweeper = copenhagen_points(net, context.par, self.config.copenhagen)
        totals = self.add_points(prior.totals, points)
        record = CopenhagenHoleRecord(
            **self.base_record_fields(hole, context, net, points, totals),
            is_sweep=sweeper is not None,
            sweep_winner=sweeper,
        )
        return ScoredHole(record, self.advance(prior, totals))
