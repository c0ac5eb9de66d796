from __future__ import annotations

from typing import Any, Dict, List, Optional

from models import FinalResult, Game, SkinsHoleRecord
from scoring import finalizer
from scoring.formats import MatchPlayScorer, scorer_for


def standings(game: Game) -> List[Dict[str, Any]]:
    """
    Current totals per side, best first.

    Output rows:
    - position: side index in the game
    - name: player or team name
    - total: running total (points, skins or strokes depending on format)
    - holes_conceded: holes the side conceded
    """
    if game.state is None:
        return []
    scorer = scorer_for(game)
    rows = [
        {
            "position": index,
            "name": name,
            "total": game.state.totals[index],
            "holes_conceded": game.state.conceded_holes[index] if game.state.conceded_holes else 0,
        }
        for index, name in enumerate(game.side_names)
    ]
    # Stroke formats rank ascending, point formats descending.
    descending = scorer.accumulates_points
    return sorted(rows, key=lambda row: row["total"], reverse=descending)


def skins_leaderboard(game: Game) -> List[Dict[str, Any]]:
    """Skins won, their value and the holes won per player, most skins first."""
    skin_value = game.config.skin_value
    board: Dict[int, Dict[str, Any]] = {
        index: {"player_name": player.name, "skins_won": 0, "holes_won": []}
        for index, player in enumerate(game.players)
    }
    for record in game.holes:
        if not isinstance(record, SkinsHoleRecord) or record.winner is None:
            continue
        entry = board[record.winner]
        entry["skins_won"] += record.skins_won
        entry["holes_won"].append(record.hole_number)

    results = []
    for entry in board.values():
        entry["total_value"] = entry["skins_won"] * skin_value
        results.append(entry)
    return sorted(results, key=lambda row: row["skins_won"], reverse=True)


def match_status_text(game: Game) -> Optional[str]:
    """e.g. "Team A 2 Up, 5 to play" for match formats, None otherwise."""
    scorer = scorer_for(game)
    if game.state is None or not isinstance(scorer, MatchPlayScorer) or scorer.stroke_mode:
        return None
    if game.is_finished and game.final_result:
        return game.final_result
    return finalizer.format_match_status_with_holes(
        game.state.match_status, game.state.holes_remaining, game.side_names
    )


def stroke_play_standings(game: Game) -> Optional[FinalResult]:
    """Stroke-play reading of a match, when the game has it enabled."""
    scorer = scorer_for(game)
    if game.state is None or not isinstance(scorer, MatchPlayScorer):
        return None
    return scorer.stroke_play_result(game.state, game.side_names)


def hole_history(game: Game) -> List[Dict[str, Any]]:
    """Hole-by-hole points and running totals for reporting."""
    return [
        {
            "hole_number": record.hole_number,
            "par": record.par,
            "points": record.points,
            "running_totals": record.running_totals,
        }
        for record in game.holes
    ]
