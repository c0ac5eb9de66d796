from pydantic import Field

from .base import BaseGolfModel


class CourseHole(BaseGolfModel):
    """A single hole on a golf course: its par and stroke index."""

    number: int = Field(..., ge=1)
    par: int = Field(..., ge=3, le=6)
    stroke_index: int = Field(..., ge=1, le=18)  # 1 = hardest
