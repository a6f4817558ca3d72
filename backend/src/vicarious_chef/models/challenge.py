"""Challenge models."""

from dataclasses import dataclass
from enum import Enum


class ChallengeCategory(str, Enum):
    """Format of a cooking challenge."""

    DISH = "dish"
    BUFFET = "buffet"
    BANQUET = "banquet"
    HOSPITALITY = "hospitality"


class SkillTag(str, Enum):
    """Kitchen skill a challenge exercises."""

    PREP = "prep"
    COOK = "cook"
    PLATING = "plating"
    SERVICE = "service"
    MANAGEMENT = "management"


@dataclass(frozen=True)
class Challenge:
    """A single timed cooking task from the catalog."""

    id: str
    title: str
    category: ChallengeCategory
    skill: SkillTag
    minutes: int
    points: int  # Base point value shown to players
    description: str = ""

    @property
    def duration_seconds(self) -> int:
        return self.minutes * 60
