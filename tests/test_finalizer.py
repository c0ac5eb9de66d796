from scoring.finalizer import (
    ALL_SQUARE,
    calculate_payout,
    format_match_status,
    format_match_status_with_holes,
    highest_total,
    is_match_decided,
    lowest_total,
    match_result,
    normalize_points,
    point_differentials,
    standings_text,
)

NAMES = ["Alice", "Bob", "Carol"]


# ================================================================
# Match play
# ================================================================

def test_format_match_status():
    assert format_match_status(0, NAMES) == ALL_SQUARE
    assert format_match_status(2, NAMES) == "Alice 2 Up"
    assert format_match_status(-1, NAMES) == "Bob 1 Up"
    assert format_match_status_with_holes(2, 5, NAMES) == "Alice 2 Up, 5 to play"
    assert format_match_status_with_holes(1, 0, NAMES) == "Alice 1 Up"


def test_dormie_is_not_decided():
    assert not is_match_decided(3, 3)
    assert is_match_decided(4, 3)
    assert is_match_decided(-1, 0)


def test_match_result_early_and_final():
    early = match_result(3, 2, NAMES)
    assert early.winner == "Alice"
    assert early.final_result == "3 & 2"

    final = match_result(-1, 0, NAMES)
    assert final.winner == "Bob"
    assert final.winner_position == 1
    assert final.final_result == "1 Up"

    halved = match_result(0, 0, NAMES)
    assert halved.winner is None
    assert halved.is_tie
    assert halved.final_result == ALL_SQUARE


# ================================================================
# Totals
# ================================================================

def test_highest_total():
    result = highest_total([10, 4, 4], NAMES)
    assert result.winner == "Alice"
    assert result.final_result == "Alice wins with 10 pts"


def test_highest_total_tie_has_no_winner():
    result = highest_total([8, 8, 2], NAMES)
    assert result.winner is None
    assert result.is_tie
    assert "Alice, Bob" in result.final_result


def test_standings_text():
    assert standings_text([7, 4, 1], NAMES) == "Alice 7, Bob 4, Carol 1 pts"
    assert standings_text([2.5, 0], NAMES[:2], unit="skins") == "Alice 2.5, Bob 0 skins"


def test_lowest_total_skips_incomplete_cards():
    result = lowest_total([70, 75, 80], NAMES, eligible=[False, True, True])
    assert result.winner == "Bob"
    assert result.final_result == "Bob wins with 75 strokes"

    nobody = lowest_total([70, 75], NAMES[:2], eligible=[False, False])
    assert nobody.winner is None
    assert nobody.final_result == "No complete cards"


# ================================================================
# Payouts
# ================================================================

def test_calculate_payout_modes():
    assert calculate_payout(12, 5, 2.0, "difference") == (0, 14.0)
    assert calculate_payout(5, 12, 2.0, "total") == (1, 24.0)
    assert calculate_payout(6, 6, 2.0, "difference") == (None, 0.0)


def test_normalize_points():
    assert normalize_points([10, 5, 5]) == (5, 0, 0)
    assert normalize_points([]) == ()


def test_point_differentials():
    assert point_differentials([9, 6, 3]) == (3.0, 0.0, -3.0)
