from __future__ import annotations

from typing import List, Sequence

from models import (
    FinalResult,
    GameFormat,
    HoleContext,
    HoleInput,
    Player,
    ScoringState,
    SkinsHoleRecord,
    Team,
)
from scoring import finalizer
from scoring.exceptions import InvalidConfiguration
from scoring.formats.base import FormatScorer, ScoredHole


class SkinsScorer(FormatScorer):
    """The single lowest score takes the skins on offer; ties carry them to the next hole.

    Totals count skins won. Their value is ``skins * skin_value``.
    """

    format = GameFormat.SKINS
    unit = "skins"

    def validate_roster(self, players: List[Player], teams: List[Team]) -> None:
        super().validate_roster(players, teams)
        if len(players) < 2:
            raise InvalidConfiguration(f"Skins needs at least 2 players, got {len(players)}")

    def _score(self, hole: HoleInput, context: HoleContext, prior: ScoringState, net) -> ScoredHole:
        available = prior.skins_available
        _, lowest = self.lowest_positions(net, range(self.player_count))

        points = [0] * self.player_count
        winner = None
        skins_won = 0
        if len(lowest) == 1:
            winner = lowest[0]
            skins_won = available
            points[winner] = skins_won
            next_available = 1
        elif self.config.carryover_enabled:
            next_available = available + 1
        else:
            next_available = 1

        totals = self.add_points(prior.totals, points)
        record = SkinsHoleRecord(
            **self.base_record_fields(hole, context, net, points, totals),
            skins_available=available,
            winner=winner,
            skins_won=skins_won,
            value_won=skins_won * self.config.skin_value,
            is_carryover=winner is None and self.config.carryover_enabled,
        )
        return ScoredHole(record, self.advance(prior, totals, skins_available=next_available))

    def finalize(self, state: ScoringState, side_names: Sequence[str]) -> FinalResult:
        result = finalizer.highest_total(state.totals, side_names, unit=self.unit)
        if result.winner_position is None:
            return result
        payout = state.totals[result.winner_position] * self.config.skin_value
        return result.model_copy(update={"final_payout": payout})
