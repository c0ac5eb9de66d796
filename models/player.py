from pydantic import Field
from typing import List, Optional, Union

from .base import BaseGolfModel


class Player(BaseGolfModel):
    """A golfer taking part in a game.

    ``handicap`` is stored as entered. Negative values are plus handicaps.
    Values that are not numeric or fall outside the accepted range are
    rejected later by the stroke allocator, which falls back to zero strokes.
    """

    id: Optional[str] = None
    name: str
    handicap: Optional[Union[float, str]] = None
    tee: Optional[str] = None


class Team(BaseGolfModel):
    """An ordered group of players scored as one side."""

    id: Optional[str] = None
    name: str
    players: List[Player] = Field(default_factory=list)
    handicap: Optional[Union[float, str]] = None  # team handicap (scramble)

    @property
    def player_names(self) -> List[str]:
        return [p.name for p in self.players]
