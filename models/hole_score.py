from typing import Any, Literal, Optional, Union

CONCEDED = "conceded"

# A scored entry is a stroke count or the conceded sentinel; None means not entered yet.
Score = Union[int, Literal["conceded"]]

SCORE_NAMES = {
    -3: "albatross",
    -2: "eagle",
    -1: "birdie",
    0: "par",
    1: "bogey",
    2: "double bogey",
    3: "triple bogey",
    4: "quadruple bogey",
}


def normalize_score(value: Any) -> Optional[Score]:
    """Normalize a raw entry: None stays None, zero or negative means conceded."""
    if value is None:
        return None
    if value == CONCEDED:
        return CONCEDED
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Score must be an int, None or '{CONCEDED}', got {value!r}")
    if value <= 0:
        return CONCEDED
    return value


def is_conceded(score: Optional[Score]) -> bool:
    return score == CONCEDED


def is_numeric(score: Optional[Score]) -> bool:
    """True for a real stroke count (not missing, not conceded)."""
    return score is not None and score != CONCEDED


def apply_strokes(gross: Optional[Score], strokes: int) -> Optional[Score]:
    """Net score: gross strokes minus handicap strokes received on the hole."""
    if not is_numeric(gross):
        return gross
    return gross - strokes


def score_type(strokes: Optional[Score], par: int) -> Optional[str]:
    """Get the name for a score relative to par (eagle, birdie, par, bogey, etc.)."""
    if not is_numeric(strokes):
        return None
    relative = strokes - par
    if relative <= -3:
        return "albatross"
    if relative >= 5:
        return "quintuple+"
    return SCORE_NAMES.get(relative)
