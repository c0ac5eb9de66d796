from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from models import (
    FinalResult,
    GameFormat,
    HoleContext,
    Player,
    Score,
    ScoringState,
    Team,
    UmbriagoHoleInput,
    UmbriagoHoleRecord,
)
from models.hole_score import is_numeric
from scoring import finalizer
from scoring.exceptions import InvalidConfiguration, InvalidHoleInput
from scoring.formats.base import FormatScorer, ScoredHole

TEAM_A, TEAM_B = 0, 1
MAX_MULTIPLIER = 4


def team_low_winner(team_a: Sequence[Optional[Score]], team_b: Sequence[Optional[Score]]) -> Optional[int]:
    """Lower combined score wins. A team with a conceded score cannot win this category."""
    a_ok = all(is_numeric(s) for s in team_a)
    b_ok = all(is_numeric(s) for s in team_b)
    if not a_ok and not b_ok:
        return None
    if not a_ok:
        return TEAM_B
    if not b_ok:
        return TEAM_A
    total_a, total_b = sum(team_a), sum(team_b)
    if total_a < total_b:
        return TEAM_A
    if total_b < total_a:
        return TEAM_B
    return None


def individual_low_winner(team_a: Sequence[Optional[Score]], team_b: Sequence[Optional[Score]]) -> Optional[int]:
    """Team of the single lowest score; no winner when both teams share it."""
    entries = [(s, TEAM_A) for s in team_a if is_numeric(s)] + [(s, TEAM_B) for s in team_b if is_numeric(s)]
    if not entries:
        return None
    low = min(s for s, _ in entries)
    teams = {team for s, team in entries if s == low}
    return teams.pop() if len(teams) == 1 else None


def birdie_count(scores: Sequence[Optional[Score]], par: int) -> int:
    """One point per player under par."""
    return sum(1 for s in scores if is_numeric(s) and s < par)


def strokes_under_par(scores: Sequence[Optional[Score]], par: int) -> int:
    return sum(max(0, par - s) for s in scores if is_numeric(s))


def hole_multiplier(double_called_by: Optional[int], doubled_back: bool, rolled: bool) -> int:
    """1, 2 after a double, 4 after a double back. A roll makes the hole at least x2."""
    multiplier = 1
    if double_called_by is not None:
        multiplier = 2
        if doubled_back:
            multiplier = 4
    if rolled:
        multiplier = max(multiplier, 2)
    return min(multiplier, MAX_MULTIPLIER)


class UmbriagoScorer(FormatScorer):
    """Two teams of two compete for team low, individual low, closest to pin and birdies.

    Taking team low, individual low and closest to pin with at least one
    birdie is an Umbriago: the sweeping team scores
    ``umbriago_bonus_per_stroke`` per net stroke under par and the other
    team nothing.
    """

    format = GameFormat.UMBRIAGO
    input_type = UmbriagoHoleInput
    team_format = True

    def validate_roster(self, players: List[Player], teams: List[Team]) -> None:
        super().validate_roster(players, teams)
        if len(teams) != 2 or any(len(team.players) != 2 for team in teams):
            raise InvalidConfiguration("Umbriago needs exactly 2 teams of 2 players")

    def initial_state(self, planned_holes: int) -> ScoringState:
        state = super().initial_state(planned_holes)
        return state.model_copy(update={"rolls_used": (0, 0)})

    def _check_calls(self, hole: UmbriagoHoleInput, prior: ScoringState) -> Tuple[int, ...]:
        if hole.doubled_back and hole.double_called_by is None:
            raise InvalidHoleInput(f"Hole {hole.hole_number}: double back without a double")
        if hole.double_called_by is not None and not self.config.double_enabled:
            raise InvalidHoleInput(f"Hole {hole.hole_number}: doubles are not enabled for this game")

        rolls_used = prior.rolls_used or (0, 0)
        team = hole.roll_called_by
        if team is None:
            return rolls_used
        if rolls_used[team] >= self.config.rolls_per_team:
            raise InvalidHoleInput(f"Hole {hole.hole_number}: team {team} has no rolls remaining")
        updated = list(rolls_used)
        updated[team] += 1
        return tuple(updated)

    def _score(self, hole: UmbriagoHoleInput, context: HoleContext, prior: ScoringState, net) -> ScoredHole:
        rolls_used = self._check_calls(hole, prior)
        team_a = [net[p] for p in self.team_positions(TEAM_A)]
        team_b = [net[p] for p in self.team_positions(TEAM_B)]
        par = context.par

        team_low = team_low_winner(team_a, team_b)
        individual_low = individual_low_winner(team_a, team_b)
        closest = hole.closest_to_pin
        birdies = (birdie_count(team_a, par), birdie_count(team_b, par))

        categories = [0, 0]
        for winner in (team_low, individual_low, closest):
            if winner is not None:
                categories[winner] += 1
        categories[TEAM_A] += birdies[TEAM_A]
        categories[TEAM_B] += birdies[TEAM_B]

        sweeper = None
        for team in (TEAM_A, TEAM_B):
            if team_low == individual_low == closest == team and birdies[team] > 0:
                sweeper = team

        points = list(categories)
        if sweeper is not None:
            under = (strokes_under_par(team_a, par), strokes_under_par(team_b, par))
            net_under = under[sweeper] - under[1 - sweeper]
            points = [0, 0]
            points[sweeper] = max(1, net_under) * self.config.umbriago_bonus_per_stroke

        rolled = hole.roll_called_by is not None
        multiplier = hole_multiplier(hole.double_called_by, hole.doubled_back, rolled)
        points = [p * multiplier for p in points]

        carried = prior.totals
        if rolled:
            carried = tuple(float(math.floor(t / 2)) for t in prior.totals)
        totals = self.add_points(carried, points)

        record = UmbriagoHoleRecord(
            **self.base_record_fields(hole, context, net, points, totals),
            team_low_winner=team_low,
            individual_low_winner=individual_low,
            closest_to_pin_winner=closest,
            birdie_counts=birdies,
            is_umbriago=sweeper is not None,
            multiplier=multiplier,
            roll_called_by=hole.roll_called_by,
        )
        return ScoredHole(record, self.advance(prior, totals, rolls_used=rolls_used))

    def finalize(self, state: ScoringState, side_names: Sequence[str]) -> FinalResult:
        points_a, points_b = state.totals
        winner, payout = finalizer.calculate_payout(
            points_a, points_b, self.config.stake_per_point, self.config.payout_mode
        )
        if winner is None:
            return FinalResult(final_result=f"Tie at {points_a:g} pts", final_payout=0.0, is_tie=True)
        return FinalResult(
            winner=side_names[winner],
            winner_position=winner,
            final_result=f"{side_names[winner]} wins {max(points_a, points_b):g}-{min(points_a, points_b):g}",
            final_payout=payout,
        )
