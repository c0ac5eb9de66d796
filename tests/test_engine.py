import logging

import pytest

from models import (
    Course,
    CourseHole,
    GameConfig,
    GameFormat,
    GameStatus,
    HoleInput,
    Player,
)
from scoring import engine, leaderboard
from scoring.exceptions import (
    EditTruncatesGame,
    GameStateError,
    IncompleteHoleInput,
    InvalidConfiguration,
    InvalidHandicap,
    InvalidHoleInput,
)


def _build_course(n=18):
    return Course(
        name="Test Course",
        holes=[CourseHole(number=i, par=4, stroke_index=i) for i in range(1, n + 1)],
    )


def _build_game(fmt=GameFormat.MATCH_PLAY, names=("Alice", "Bob"), course=None, handicaps=None, **config):
    handicaps = handicaps or [None] * len(names)
    players = [Player(name=n, handicap=h) for n, h in zip(names, handicaps)]
    return engine.create_game(course or _build_course(), GameConfig(format=fmt, **config), players, game_id="g1")


def _hole(number, *scores, **extras):
    return HoleInput(hole_number=number, scores=list(scores), **extras)


# ================================================================
# Lifecycle
# ================================================================

def test_create_and_start():
    game = _build_game()
    assert game.status == GameStatus.SETUP
    assert game.state is None

    started = engine.start_game(game)
    assert started.status == GameStatus.IN_PROGRESS
    assert started.planned_holes == 18
    assert started.state.holes_remaining == 18
    assert started.state.totals == (0.0, 0.0)
    assert len(started.stroke_table) == 18
    # input is never mutated
    assert game.status == GameStatus.SETUP


def test_start_twice_fails():
    started = engine.start_game(_build_game())
    with pytest.raises(GameStateError):
        engine.start_game(started)


def test_submit_before_start_fails():
    with pytest.raises(GameStateError):
        engine.submit_hole(_build_game(), _hole(1, 4, 4))


def test_planned_holes_longer_than_course():
    with pytest.raises(InvalidConfiguration):
        engine.start_game(_build_game(course=_build_course(9), planned_holes=18))

    with pytest.raises(InvalidConfiguration):
        engine.start_game(_build_game(course=Course(name="Empty")))


def test_invalid_handicap_warns_and_plays_gross():
    game = _build_game(handicaps=["abc", 4], handicap_enabled=True)
    with pytest.warns(InvalidHandicap):
        started = engine.start_game(game)
    assert all(counts == (0, 0) for counts in started.stroke_table.values())


def test_gross_mode_ignores_handicaps():
    started = engine.start_game(_build_game(handicaps=[18, 0], handicap_enabled=False))
    assert all(counts == (0, 0) for counts in started.stroke_table.values())


# ================================================================
# Submitting holes
# ================================================================

def test_holes_must_be_submitted_in_order():
    game = engine.start_game(_build_game())
    with pytest.raises(InvalidHoleInput):
        engine.submit_hole(game, _hole(2, 4, 4))


def test_incomplete_hole_leaves_game_unchanged():
    game = engine.start_game(_build_game())
    game = engine.submit_hole(game, _hole(1, 4, 5))

    with pytest.raises(IncompleteHoleInput) as exc_info:
        engine.submit_hole(game, _hole(2, 4, None))
    assert exc_info.value.missing == (1,)
    assert len(game.holes) == 1
    assert game.state.holes_played == 1


def test_mulligan_allowance():
    game = engine.start_game(_build_game(mulligans_per_player=1))
    game = engine.submit_hole(game, _hole(1, 4, 4, mulligans=[True, False]))
    assert game.state.mulligans_used == (1, 0)

    with pytest.raises(InvalidHoleInput):
        engine.submit_hole(game, _hole(2, 4, 4, mulligans=[True, False]))

    game = engine.submit_hole(game, _hole(2, 4, 4, mulligans=[False, True]))
    assert game.state.mulligans_used == (1, 1)


def test_finished_game_rejects_holes():
    game = engine.start_game(_build_game(planned_holes=1))
    game = engine.submit_hole(game, _hole(1, 3, 4))
    assert game.status == GameStatus.FINISHED
    assert game.final_result == "1 Up"

    with pytest.raises(GameStateError):
        engine.submit_hole(game, _hole(2, 4, 4))


def test_target_score_ends_point_games():
    game = engine.start_game(
        _build_game(GameFormat.SKINS, names=("Alice", "Bob"), target_score=2)
    )
    game = engine.submit_hole(game, _hole(1, 4, 4))
    game = engine.submit_hole(game, _hole(2, 3, 4))
    assert game.status == GameStatus.FINISHED
    assert game.winner == "Alice"


# ================================================================
# Editing
# ================================================================

def test_edit_hole_refolds_later_holes():
    game = engine.start_game(_build_game(GameFormat.SKINS, names=("Alice", "Bob")))
    game = engine.submit_hole(game, _hole(1, 4, 4))
    game = engine.submit_hole(game, _hole(2, 3, 4))
    assert game.state.totals == (2.0, 0.0)

    edited = engine.edit_hole(game, _hole(1, 5, 4))
    assert edited.holes[0].winner == 1
    assert edited.holes[1].skins_available == 1
    assert edited.state.totals == (1.0, 1.0)
    assert edited.holes[1].running_totals == (1.0, 1.0)
    # original untouched
    assert game.state.totals == (2.0, 0.0)


def test_edit_that_decides_match_early_needs_truncate(caplog):
    game = engine.start_game(_build_game(planned_holes=3))
    game = engine.submit_hole(game, _hole(1, 3, 4))
    game = engine.submit_hole(game, _hole(2, 4, 4))
    game = engine.submit_hole(game, _hole(3, 3, 4))
    assert game.final_result == "2 Up"

    with pytest.raises(EditTruncatesGame) as exc_info:
        engine.edit_hole(game, _hole(2, 3, 4))
    assert exc_info.value.decided_after == 2
    assert [h.hole_number for h in exc_info.value.dropped] == [3]
    assert exc_info.value.dropped[0].scores == (3, 4)

    with caplog.at_level(logging.WARNING, logger="scoring.engine"):
        edited = engine.edit_hole(game, _hole(2, 3, 4), truncate=True)

    assert len(edited.holes) == 2
    assert edited.status == GameStatus.FINISHED
    assert edited.final_result == "2 & 1"
    assert "dropping holes" in caplog.text


def test_edit_can_reopen_finished_game():
    game = engine.start_game(_build_game(planned_holes=3))
    game = engine.submit_hole(game, _hole(1, 3, 4))
    game = engine.submit_hole(game, _hole(2, 3, 4))
    assert game.status == GameStatus.FINISHED

    edited = engine.edit_hole(game, _hole(2, 5, 4))
    assert edited.status == GameStatus.IN_PROGRESS
    assert edited.winner is None
    assert edited.final_result is None
    assert edited.state.match_status == 0


def test_edit_unscored_hole_fails():
    game = engine.start_game(_build_game())
    with pytest.raises(InvalidHoleInput):
        engine.edit_hole(game, _hole(1, 4, 4))


# ================================================================
# Continue playing
# ================================================================

def test_continue_playing_after_tie():
    game = engine.start_game(_build_game(planned_holes=2))
    game = engine.submit_hole(game, _hole(1, 3, 4))
    game = engine.submit_hole(game, _hole(2, 5, 4))
    assert game.status == GameStatus.FINISHED
    assert game.winner is None

    extra = engine.continue_playing(game, 1)
    assert extra.status == GameStatus.IN_PROGRESS
    assert extra.planned_holes == 3
    assert extra.state.holes_remaining == 1
    assert extra.final_result is None

    extra = engine.submit_hole(extra, _hole(3, 4, 5))
    assert extra.status == GameStatus.FINISHED
    assert extra.winner == "Alice"
    assert extra.final_result == "1 Up"


def test_extra_holes_wrap_around_course():
    game = engine.start_game(_build_game(course=_build_course(2), planned_holes=2))
    game = engine.submit_hole(game, _hole(1, 4, 4))
    game = engine.submit_hole(game, _hole(2, 4, 4))
    game = engine.continue_playing(game)
    game = engine.submit_hole(game, _hole(3, 3, 4))

    assert game.holes[2].stroke_index == 1
    assert game.winner == "Alice"


def test_continue_requires_finished_game():
    game = engine.start_game(_build_game())
    with pytest.raises(GameStateError):
        engine.continue_playing(game)


# ================================================================
# Results and leaderboard
# ================================================================

def test_current_result_mid_round():
    game = engine.start_game(_build_game())
    game = engine.submit_hole(game, _hole(1, 3, 4))
    assert not game.is_finished

    result = engine.current_result(game)
    assert result.winner is None
    assert result.winner_position is None
    assert not result.is_tie
    assert result.final_result == "Alice 1 Up, 17 to play"

    with pytest.raises(GameStateError):
        engine.current_result(_build_game())


def test_current_result_point_game_has_no_payout_until_finished():
    game = engine.start_game(_build_game(GameFormat.SKINS, names=("Alice", "Bob"), planned_holes=2, skin_value=5.0))
    game = engine.submit_hole(game, _hole(1, 3, 4))

    standing = engine.current_result(game)
    assert standing.winner is None
    assert standing.final_payout is None
    assert standing.final_result == "Alice 1, Bob 0 skins"

    game = engine.submit_hole(game, _hole(2, 3, 4))
    final = engine.current_result(game)
    assert final.winner == "Alice"
    assert final.final_payout == 10.0


def test_leaderboard_views():
    game = engine.start_game(_build_game())
    game = engine.submit_hole(game, _hole(1, 5, 4))

    assert leaderboard.match_status_text(game) == "Bob 1 Up, 17 to play"
    rows = leaderboard.standings(game)
    assert [r["name"] for r in rows] == ["Bob", "Alice"]
    assert leaderboard.stroke_play_standings(game).winner == "Bob"
    assert leaderboard.hole_history(game)[0]["running_totals"] == (5.0, 4.0)


def test_skins_leaderboard():
    game = engine.start_game(_build_game(GameFormat.SKINS, names=("Alice", "Bob"), skin_value=2.0))
    game = engine.submit_hole(game, _hole(1, 4, 4))
    game = engine.submit_hole(game, _hole(2, 4, 3))

    board = leaderboard.skins_leaderboard(game)
    assert board[0]["player_name"] == "Bob"
    assert board[0]["skins_won"] == 2
    assert board[0]["total_value"] == 4.0
    assert board[0]["holes_won"] == [2]


def test_nine_hole_splits_and_running_totals():
    game = engine.start_game(_build_game(GameFormat.SKINS, names=("Alice", "Bob")))
    for number in range(1, 11):
        game = engine.submit_hole(game, _hole(number, 3, 4))

    assert game.calculate_front_nine() == (9.0, 0.0)
    assert game.calculate_back_nine() == (1.0, 0.0)
    assert game.running_totals_after(10) == (10.0, 0.0)
    assert game.running_totals_after(11) is None
