"""Turn terminal state into a human-readable outcome.

Ties are never broken: equal leading totals give no winner.
"""

from __future__ import annotations

from typing import Literal, Optional, Sequence, Tuple

from models import FinalResult

ALL_SQUARE = "All Square"
TIE = "Tie"


def _fmt(value: float) -> str:
    return f"{value:g}"


# ================================================================
# Match play
# ================================================================

def format_match_status(match_status: int, side_names: Sequence[str]) -> str:
    """e.g. "Alice 2 Up" or "All Square"."""
    if match_status == 0:
        return ALL_SQUARE
    leader = side_names[0] if match_status > 0 else side_names[1]
    return f"{leader} {abs(match_status)} Up"


def format_match_status_with_holes(match_status: int, holes_remaining: int, side_names: Sequence[str]) -> str:
    """e.g. "Alice 2 Up, 5 to play"."""
    status = format_match_status(match_status, side_names)
    if holes_remaining > 0:
        return f"{status}, {holes_remaining} to play"
    return status


def is_match_decided(match_status: int, holes_remaining: int) -> bool:
    """Decided once the lead exceeds the holes left. Dormie (lead == remaining) is not decided."""
    return abs(match_status) > holes_remaining


def match_result(match_status: int, holes_remaining: int, side_names: Sequence[str]) -> FinalResult:
    """"3 & 2" when decided early, "1 Up" on the last hole, "All Square" when level."""
    if match_status == 0:
        return FinalResult(final_result=ALL_SQUARE, is_tie=True)
    position = 0 if match_status > 0 else 1
    lead = abs(match_status)
    if holes_remaining <= 0:
        result = f"{lead} Up"
    else:
        result = f"{lead} & {holes_remaining}"
    return FinalResult(winner=side_names[position], winner_position=position, final_result=result)


# ================================================================
# Totals
# ================================================================

def standings_text(totals: Sequence[float], side_names: Sequence[str], unit: str = "pts") -> str:
    """Running totals in side order, e.g. "Alice 7, Bob 4, Carol 1 pts"."""
    listed = ", ".join(f"{name} {_fmt(total)}" for name, total in zip(side_names, totals))
    return f"{listed} {unit}"


def _leaders(totals: Sequence[float], best) -> Tuple[Optional[float], Tuple[int, ...]]:
    if not totals:
        return None, ()
    value = best(totals)
    return value, tuple(i for i, t in enumerate(totals) if t == value)


def highest_total(totals: Sequence[float], side_names: Sequence[str], unit: str = "pts") -> FinalResult:
    """Point-pool formats: the highest cumulative total wins."""
    value, leaders = _leaders(totals, max)
    return _ranked_result(value, leaders, totals, side_names, unit)


def lowest_total(
    totals: Sequence[float],
    side_names: Sequence[str],
    eligible: Optional[Sequence[bool]] = None,
) -> FinalResult:
    """Stroke formats: the lowest total among sides with a complete card wins."""
    if eligible is None:
        eligible = [True] * len(totals)
    positions = [i for i, ok in enumerate(eligible) if ok]
    if not positions:
        return FinalResult(final_result="No complete cards")
    value = min(totals[i] for i in positions)
    leaders = tuple(i for i in positions if totals[i] == value)
    return _ranked_result(value, leaders, totals, side_names, "strokes")


def _ranked_result(
    value: Optional[float],
    leaders: Tuple[int, ...],
    totals: Sequence[float],
    side_names: Sequence[str],
    unit: str,
) -> FinalResult:
    if value is None:
        return FinalResult(final_result=TIE, is_tie=True)
    if len(leaders) > 1:
        names = ", ".join(side_names[i] for i in leaders)
        return FinalResult(final_result=f"{TIE} ({names}) at {_fmt(value)} {unit}", is_tie=True)
    position = leaders[0]
    return FinalResult(
        winner=side_names[position],
        winner_position=position,
        final_result=f"{side_names[position]} wins with {_fmt(value)} {unit}",
    )


# ================================================================
# Payouts
# ================================================================

def calculate_payout(
    points_a: float,
    points_b: float,
    stake_per_point: float,
    payout_mode: Literal["difference", "total"],
) -> Tuple[Optional[int], float]:
    """Two-side payout: (winning position or None on a tie, amount)."""
    if points_a == points_b:
        return None, 0.0
    winner = 0 if points_a > points_b else 1
    if payout_mode == "difference":
        payout = abs(points_a - points_b) * stake_per_point
    else:
        payout = max(points_a, points_b) * stake_per_point
    return winner, float(payout)


def normalize_points(totals: Sequence[float]) -> Tuple[float, ...]:
    """Subtract the lowest total from every side (10-5-5 becomes 5-0-0)."""
    if not totals:
        return ()
    floor = min(totals)
    return tuple(t - floor for t in totals)


def point_differentials(totals: Sequence[float]) -> Tuple[float, ...]:
    """Each side's total relative to the group average."""
    if not totals:
        return ()
    average = sum(totals) / len(totals)
    return tuple(t - average for t in totals)
