"""Game state machine: SETUP -> IN_PROGRESS -> FINISHED.

Every function takes a Game and returns a new one; the input is never
mutated. A game's state is always the fold of its hole inputs through the
format scorer, so an edit simply re-folds from the first hole.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import uuid4

from models import (
    Course,
    FinalResult,
    Game,
    GameConfig,
    GameStatus,
    HoleContext,
    HoleInput,
    HoleRecord,
    Player,
    Team,
)
from scoring.exceptions import EditTruncatesGame, GameStateError, InvalidConfiguration, InvalidHoleInput
from scoring.formats import FormatScorer, scorer_for
from scoring.handicap import allocate_group, zero_table

logger = logging.getLogger(__name__)


# ================================================================
# Setup
# ================================================================

def create_game(
    course: Course,
    config: GameConfig,
    players: Optional[Sequence[Player]] = None,
    teams: Optional[Sequence[Team]] = None,
    game_id: Optional[str] = None,
    name: Optional[str] = None,
) -> Game:
    """New game in SETUP. Nothing is validated against the format until start_game."""
    return Game(
        id=game_id or str(uuid4()),
        name=name,
        course=course,
        config=config,
        players=list(players or []),
        teams=list(teams or []),
        created_at=datetime.now(),
    )


def _validate_course(game: Game) -> None:
    holes = game.course.holes
    if not holes:
        raise InvalidConfiguration("Course has no holes")
    if game.config.planned_holes > len(holes):
        raise InvalidConfiguration(
            f"Cannot plan {game.config.planned_holes} holes on a {len(holes)}-hole course"
        )


def build_stroke_table(game: Game, scorer: FormatScorer) -> Dict[int, Tuple[int, ...]]:
    """Strokes received per hole for every score position, derived once per game."""
    holes = game.course.holes
    if not game.config.net_scoring:
        return zero_table(scorer.score_positions, holes)
    if scorer.scores_per_team:
        handicaps = [team.handicap for team in game.teams]
    else:
        handicaps = [player.handicap for player in game.roster]
    return allocate_group(handicaps, holes)


def start_game(game: Game) -> Game:
    """Validate the roster and course for the format, then open the game for scoring."""
    if game.status != GameStatus.SETUP:
        raise GameStateError(f"Game {game.id} already started ({game.status.value})")

    scorer = scorer_for(game)
    scorer.validate_roster(game.players, game.teams)
    _validate_course(game)

    planned = game.config.planned_holes
    started = game.model_copy(update={
        "status": GameStatus.IN_PROGRESS,
        "planned_holes": planned,
        "stroke_table": build_stroke_table(game, scorer),
        "state": scorer.initial_state(planned),
        "holes": [],
    })
    logger.info("Started %s game %s over %d holes", game.config.format.value, game.id, planned)
    return started


# ================================================================
# Scoring
# ================================================================

def hole_context(game: Game, hole_number: int) -> HoleContext:
    course_hole = game.course.get_hole(hole_number)
    if course_hole is None:
        raise InvalidHoleInput(f"Hole {hole_number} is not on the course")
    return HoleContext(
        number=hole_number,
        par=course_hole.par,
        stroke_index=course_hole.stroke_index,
        strokes_received=game.stroke_table.get(course_hole.number, ()),
    )


def _require_in_progress(game: Game) -> None:
    if game.status == GameStatus.SETUP:
        raise GameStateError(f"Game {game.id} has not started")
    if game.status == GameStatus.FINISHED:
        raise GameStateError(f"Game {game.id} is finished; continue playing to add holes")


def submit_hole(game: Game, hole: HoleInput) -> Game:
    """Score the next hole. Raises without changing anything if the input is incomplete or invalid."""
    _require_in_progress(game)
    if hole.hole_number != game.next_hole_number:
        raise InvalidHoleInput(
            f"Expected hole {game.next_hole_number}, got {hole.hole_number}; use edit_hole for scored holes"
        )

    scorer = scorer_for(game)
    scored = scorer.score_hole(hole, hole_context(game, hole.hole_number), game.state)
    updated = game.model_copy(update={
        "holes": [*game.holes, scored.record],
        "state": scored.state,
    })
    if scorer.is_finished(scored.state):
        updated = _finish(updated, scorer)
    return updated


def edit_hole(game: Game, hole: HoleInput, truncate: bool = False) -> Game:
    """Replace a scored hole and re-derive every later running total.

    Raises EditTruncatesGame if the edit would decide the game before its
    last scored hole, unless ``truncate`` is set.
    """
    if game.status == GameStatus.SETUP:
        raise GameStateError(f"Game {game.id} has not started")
    if not 1 <= hole.hole_number <= len(game.holes):
        raise InvalidHoleInput(f"Hole {hole.hole_number} has not been scored")

    inputs = [record.input for record in game.holes]
    inputs[hole.hole_number - 1] = hole
    return replay(game, inputs, truncate=truncate)


def replay(game: Game, inputs: Optional[List[HoleInput]] = None, truncate: bool = False) -> Game:
    """Fold hole inputs from the initial state.

    A finished game cannot carry holes beyond its result. If the game is
    decided before the last input, the later inputs are dropped when
    ``truncate`` is set and EditTruncatesGame is raised otherwise.
    """
    if inputs is None:
        inputs = [record.input for record in game.holes]
    scorer = scorer_for(game)
    state = scorer.initial_state(game.planned_holes or game.config.planned_holes)
    records: List[HoleRecord] = []
    finished = False

    for hole in inputs:
        if finished:
            dropped = inputs[len(records):]
            if not truncate:
                raise EditTruncatesGame(game.id, len(records), dropped)
            logger.warning(
                "Game %s decided after hole %d; dropping holes %d-%d",
                game.id, len(records), hole.hole_number, inputs[-1].hole_number,
            )
            break
        scored = scorer.score_hole(hole, hole_context(game, hole.hole_number), state)
        records.append(scored.record)
        state = scored.state
        finished = scorer.is_finished(state)

    updated = _clear_result(game).model_copy(update={
        "holes": records,
        "state": state,
        "status": GameStatus.IN_PROGRESS,
    })
    if finished:
        updated = _finish(updated, scorer)
    return updated


def continue_playing(game: Game, extra_holes: int = 1) -> Game:
    """Reopen a finished game for extra holes. Existing hole records are untouched."""
    if game.status != GameStatus.FINISHED:
        raise GameStateError(f"Game {game.id} is not finished")
    if extra_holes < 1:
        raise InvalidHoleInput("extra_holes must be at least 1")

    scorer = scorer_for(game)
    reopened = _clear_result(game).model_copy(update={
        "status": GameStatus.IN_PROGRESS,
        "planned_holes": (game.planned_holes or game.config.planned_holes) + extra_holes,
        "state": scorer.extend(game.state, extra_holes),
    })
    logger.info("Reopened game %s for %d extra hole(s)", game.id, extra_holes)
    return reopened


# ================================================================
# Outcome
# ================================================================

def current_result(game: Game) -> FinalResult:
    """Final result of a finished game, otherwise the standing with no winner."""
    if game.state is None:
        raise GameStateError(f"Game {game.id} has not started")
    scorer = scorer_for(game)
    if game.is_finished:
        return scorer.finalize(game.state, game.side_names)
    return scorer.standing(game.state, game.side_names)


def _finish(game: Game, scorer: FormatScorer) -> Game:
    result = scorer.finalize(game.state, game.side_names)
    logger.info("Game %s finished after %d holes: %s", game.id, len(game.holes), result.final_result)
    return game.model_copy(update={
        "status": GameStatus.FINISHED,
        "winner": result.winner,
        "winner_position": result.winner_position,
        "final_result": result.final_result,
        "final_payout": result.final_payout,
    })


def _clear_result(game: Game) -> Game:
    return game.model_copy(update={
        "winner": None,
        "winner_position": None,
        "final_result": None,
        "final_payout": None,
    })
