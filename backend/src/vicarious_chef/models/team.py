"""Team models."""

from dataclasses import dataclass, field
from typing import Literal

from vicarious_chef.models.participant import Participant

TeamId = Literal["A", "B"]
TEAM_IDS: tuple[TeamId, TeamId] = ("A", "B")


@dataclass
class Team:
    """One of the two fixed sides in a session."""

    id: TeamId
    name: str
    chefs: list[Participant] = field(default_factory=list)
    contestants: list[Participant] = field(default_factory=list)
    score: int = 0  # Cumulative across finalized challenges

    @property
    def members(self) -> list[Participant]:
        """Chefs followed by contestants, each in join order."""
        return self.chefs + self.contestants

    @property
    def size(self) -> int:
        return len(self.chefs) + len(self.contestants)
