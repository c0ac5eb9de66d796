from __future__ import annotations

from typing import List, Literal, Optional, Sequence, Tuple

from models import (
    GameFormat,
    HoleContext,
    Player,
    Score,
    ScoringState,
    Team,
    WolfHoleInput,
    WolfHoleRecord,
)
from models.hole_score import is_numeric
from scoring.exceptions import IncompleteHoleInput, InvalidConfiguration, InvalidHoleInput
from scoring.formats.base import FormatScorer, ScoredHole

MIN_PLAYERS = 3
MAX_PLAYERS = 6


def wolf_for_hole(hole_number: int, player_count: int, wolf_position: Literal["first", "last"] = "last") -> int:
    """Position (0-based) of the wolf on a hole; the role rotates through tee order.

    "last": the last player is wolf on hole 1, then player 1 on hole 2, and so on.
    "first": player 1 on hole 1, player 2 on hole 2, and so on.
    """
    if wolf_position == "last":
        return (hole_number - 2 + player_count) % player_count
    return (hole_number - 1) % player_count


def multiplier_for(doubled: bool, doubled_back: bool) -> int:
    """Doubles compound: 1, 2 after a double, 4 after a double back."""
    multiplier = 1
    if doubled:
        multiplier *= 2
        if doubled_back:
            multiplier *= 2
    return multiplier


def _side_best(scores: Sequence[Optional[Score]], positions: Sequence[int]) -> Optional[int]:
    numeric = [scores[p] for p in positions if is_numeric(scores[p])]
    return min(numeric) if numeric else None


def winning_side(wolf_best: Optional[int], others_best: Optional[int]) -> Literal["wolf", "opponents", "tie"]:
    """A side with no real score (all conceded) loses to any real score."""
    if wolf_best is None and others_best is None:
        return "tie"
    if others_best is None or (wolf_best is not None and wolf_best < others_best):
        return "wolf"
    if wolf_best is None or others_best < wolf_best:
        return "opponents"
    return "tie"


class WolfScorer(FormatScorer):
    """Rotating wolf picks a partner or goes alone; points go to the winning side."""

    format = GameFormat.WOLF
    input_type = WolfHoleInput

    def validate_roster(self, players: List[Player], teams: List[Team]) -> None:
        super().validate_roster(players, teams)
        if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
            raise InvalidConfiguration(
                f"Wolf needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(players)}"
            )

    def wolf_for(self, hole_number: int) -> int:
        return wolf_for_hole(hole_number, self.player_count, self.config.wolf_position)

    def _sides(self, hole: WolfHoleInput, wolf: int) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        if hole.wolf_choice is None:
            raise IncompleteHoleInput(hole.hole_number, (), detail="the wolf has not chosen")
        if hole.wolf_choice == "lone":
            if hole.partner is not None:
                raise InvalidHoleInput(f"Hole {hole.hole_number}: a lone wolf has no partner")
            wolf_side = (wolf,)
        else:
            if hole.partner is None:
                raise IncompleteHoleInput(hole.hole_number, (), detail="no partner chosen")
            if hole.partner == wolf or hole.partner >= self.player_count:
                raise InvalidHoleInput(f"Hole {hole.hole_number}: invalid partner {hole.partner}")
            wolf_side = (wolf, hole.partner)
        others = tuple(p for p in range(self.player_count) if p not in wolf_side)
        return wolf_side, others

    def _multiplier(self, hole: WolfHoleInput) -> int:
        if hole.doubled_back and not hole.doubled:
            raise InvalidHoleInput(f"Hole {hole.hole_number}: double back without a double")
        if hole.doubled and not self.config.double_enabled:
            raise InvalidHoleInput(f"Hole {hole.hole_number}: doubles are not enabled for this game")
        return multiplier_for(hole.doubled, hole.doubled_back)

    def _score(self, hole: WolfHoleInput, context: HoleContext, prior: ScoringState, net) -> ScoredHole:
        wolf = self.wolf_for(hole.hole_number)
        wolf_side, others = self._sides(hole, wolf)
        multiplier = self._multiplier(hole)
        side = winning_side(_side_best(net, wolf_side), _side_best(net, others))

        config = self.config
        points = [0] * self.player_count
        if side == "wolf":
            award = config.lone_wolf_win_points if hole.wolf_choice == "lone" else config.team_win_points
            for p in wolf_side:
                points[p] = award * multiplier
        elif side == "opponents":
            award = config.lone_wolf_loss_points if hole.wolf_choice == "lone" else config.team_win_points
            for p in others:
                points[p] = award * multiplier

        totals = self.add_points(prior.totals, points)
        record = WolfHoleRecord(
            **self.base_record_fields(hole, context, net, points, totals),
            wolf=wolf,
            wolf_choice=hole.wolf_choice,
            partner=hole.partner,
            multiplier=multiplier,
            winning_side=side,
        )
        return ScoredHole(record, self.advance(prior, totals))
