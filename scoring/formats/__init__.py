from typing import Dict, Type

from models import Game, GameFormat

from .base import FormatScorer, ScoredHole
from .best_ball import BestBallScorer
from .copenhagen import CopenhagenScorer, copenhagen_points
from .match_play import MatchPlayScorer, hole_result
from .scramble import ScrambleScorer, StrokePlayScorer, validate_min_drives
from .skins import SkinsScorer
from .umbriago import UmbriagoScorer
from .wolf import WolfScorer, wolf_for_hole

SCORERS: Dict[GameFormat, Type[FormatScorer]] = {
    GameFormat.STROKE_PLAY: StrokePlayScorer,
    GameFormat.MATCH_PLAY: MatchPlayScorer,
    GameFormat.BEST_BALL: BestBallScorer,
    GameFormat.COPENHAGEN: CopenhagenScorer,
    GameFormat.WOLF: WolfScorer,
    GameFormat.UMBRIAGO: UmbriagoScorer,
    GameFormat.SKINS: SkinsScorer,
    GameFormat.SCRAMBLE: ScrambleScorer,
}


def scorer_for(game: Game) -> FormatScorer:
    """Pick the scorer for a game's format once; shared code never branches on format again."""
    scorer_cls = SCORERS[game.config.format]
    if scorer_cls.team_format:
        return scorer_cls(game.config, team_sizes=[len(t.players) for t in game.teams])
    return scorer_cls(game.config, player_count=len(game.players))


__all__ = [
    "SCORERS",
    "FormatScorer",
    "ScoredHole",
    "scorer_for",
    "BestBallScorer",
    "CopenhagenScorer",
    "MatchPlayScorer",
    "ScrambleScorer",
    "SkinsScorer",
    "StrokePlayScorer",
    "UmbriagoScorer",
    "WolfScorer",
    "copenhagen_points",
    "hole_result",
    "validate_min_drives",
    "wolf_for_hole",
]
