"""Handicap stroke allocation.

Strokes go to the higher handicap, one per hole in stroke-index order
(hardest first), wrapping to further passes when the difference exceeds the
number of holes. Groups are allocated relative to their lowest handicap.
"""

from __future__ import annotations

import logging
import math
import warnings
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from models import CourseHole, StrokeAllocation
from scoring.exceptions import InvalidHandicap

logger = logging.getLogger(__name__)

MIN_HANDICAP = -10.0
MAX_HANDICAP = 54.0


def _reject(value: Any, reason: str) -> None:
    message = f"Handicap {value!r} {reason}; allocating zero strokes"
    logger.warning(message)
    warnings.warn(InvalidHandicap(message), stacklevel=3)


def normalize_handicap(value: Any) -> Optional[float]:
    """Return the handicap as a float, or None when absent or unusable.

    Unusable values emit an InvalidHandicap warning instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        _reject(value, "is not numeric")
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        _reject(value, "is not numeric")
        return None
    if not math.isfinite(number) or not MIN_HANDICAP <= number <= MAX_HANDICAP:
        _reject(value, f"is outside {MIN_HANDICAP:g}..{MAX_HANDICAP:g}")
        return None
    return number


def round_half_up(value: float) -> int:
    """Round a non-negative difference the way a scorecard does (6.5 -> 7)."""
    return int(math.floor(value + 0.5))


def distribute_strokes(total: int, holes: Iterable[CourseHole]) -> Dict[int, int]:
    """Spread ``total`` strokes over holes, hardest first, one pass at a time."""
    ordered = sorted(holes, key=lambda h: h.stroke_index)
    if not ordered:
        return {}
    full_passes, extra = divmod(max(total, 0), len(ordered))
    return {
        hole.number: full_passes + (1 if rank < extra else 0)
        for rank, hole in enumerate(ordered)
    }


def allocate(
    handicap_a: Any,
    handicap_b: Any,
    holes: Sequence[CourseHole],
) -> Dict[int, StrokeAllocation]:
    """Per-hole strokes received by each side of a two-way pairing."""
    a = normalize_handicap(handicap_a)
    b = normalize_handicap(handicap_b)
    if a is None or b is None or a == b:
        return {hole.number: StrokeAllocation() for hole in holes}

    strokes = distribute_strokes(round_half_up(abs(a - b)), holes)
    if a > b:
        return {number: StrokeAllocation(strokes_a=count) for number, count in strokes.items()}
    return {number: StrokeAllocation(strokes_b=count) for number, count in strokes.items()}


def allocate_group(
    handicaps: Sequence[Any],
    holes: Sequence[CourseHole],
) -> Dict[int, Tuple[int, ...]]:
    """Per-hole strokes for any number of sides, relative to the lowest handicap.

    Sides without a usable handicap receive nothing.
    """
    normalized = [normalize_handicap(h) for h in handicaps]
    table: Dict[int, List[int]] = {hole.number: [0] * len(normalized) for hole in holes}

    known = [h for h in normalized if h is not None]
    if known:
        reference = min(known)
        for position, handicap in enumerate(normalized):
            if handicap is None or handicap == reference:
                continue
            strokes = distribute_strokes(round_half_up(handicap - reference), holes)
            for number, count in strokes.items():
                table[number][position] = count

    return {number: tuple(counts) for number, counts in table.items()}


def zero_table(sides: int, holes: Sequence[CourseHole]) -> Dict[int, Tuple[int, ...]]:
    """Allocation table for games played without handicaps."""
    return {hole.number: (0,) * sides for hole in holes}


def total_strokes(table: Dict[int, Tuple[int, ...]], position: int) -> int:
    """Strokes received by one side across the whole table."""
    return sum(counts[position] for counts in table.values())


def strokes_on_hole(table: Dict[int, Tuple[int, ...]], hole_number: int, position: int) -> int:
    counts = table.get(hole_number)
    if not counts or position >= len(counts):
        return 0
    return counts[position]
