from pydantic import Field, field_validator
from typing import List, Optional

from .base import BaseGolfModel
from .hole import CourseHole


class Course(BaseGolfModel):
    """Golf course with the holes a game is played over."""

    id: Optional[str] = None
    name: Optional[str] = None
    holes: List[CourseHole] = Field(default_factory=list)

    @field_validator('holes')
    @classmethod
    def validate_holes(cls, v):
        numbers = [h.number for h in v]
        if len(set(numbers)) != len(numbers):
            raise ValueError("Hole numbers must be unique")
        indices = [h.stroke_index for h in v]
        if len(set(indices)) != len(indices):
            raise ValueError("Stroke indices must be unique")
        return sorted(v, key=lambda h: h.number)

    def get_hole(self, number: int) -> Optional[CourseHole]:
        """Get a hole by number. Extra holes wrap around (hole 19 plays as hole 1)."""
        if not self.holes or number < 1:
            return None
        index = (number - 1) % len(self.holes)
        return self.holes[index]

    @property
    def par(self) -> Optional[int]:
        if not self.holes:
            return None
        return sum(h.par for h in self.holes)

    @property
    def front_nine_par(self) -> Optional[int]:
        """Calculate par for holes 1-9."""
        front = [h for h in self.holes if 1 <= h.number <= 9]
        if not front:
            return None
        return sum(h.par for h in front)

    @property
    def back_nine_par(self) -> Optional[int]:
        """Calculate par for holes 10-18."""
        back = [h for h in self.holes if 10 <= h.number <= 18]
        if not back:
            return None
        return sum(h.par for h in back)
