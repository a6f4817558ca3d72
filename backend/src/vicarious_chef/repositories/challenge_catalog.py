"""Static challenge catalog."""

import json
import logging
from pathlib import Path
from typing import Optional

from vicarious_chef.exceptions import ChallengeNotFound
from vicarious_chef.models.challenge import Challenge, ChallengeCategory, SkillTag

logger = logging.getLogger(__name__)

DEFAULT_CHALLENGES: tuple[Challenge, ...] = (
    Challenge(
        id="c1",
        title="Two-Pan Omelet Showdown",
        category=ChallengeCategory.DISH,
        skill=SkillTag.COOK,
        minutes=8,
        points=100,
        description="Chef guides steps; contestant executes fluffy omelet with 2 fillings.",
    ),
    Challenge(
        id="c2",
        title="Kid-Friendly Fruit Platter Art",
        category=ChallengeCategory.BUFFET,
        skill=SkillTag.PLATING,
        minutes=10,
        points=120,
        description="Compose a rainbow platter. Family Mode preset.",
    ),
    Challenge(
        id="c3",
        title="Express Sandwich Bar for 12",
        category=ChallengeCategory.HOSPITALITY,
        skill=SkillTag.SERVICE,
        minutes=12,
        points=160,
        description="Set up a mini station with allergen tags and one hot item.",
    ),
    Challenge(
        id="c4",
        title="Banquet Timing Orchestrator",
        category=ChallengeCategory.BANQUET,
        skill=SkillTag.MANAGEMENT,
        minutes=18,
        points=220,
        description="Apps, mains, dessert; hit the cadence.",
    ),
)


class ChallengeCatalog:
    """Read-only list of challenges, queried by id."""

    def __init__(self, challenges: Optional[list[Challenge]] = None):
        self._challenges: dict[str, Challenge] = {}
        for challenge in challenges if challenges is not None else DEFAULT_CHALLENGES:
            self._challenges[challenge.id] = challenge

    @classmethod
    def from_file(cls, path: Path) -> "ChallengeCatalog":
        """Load a catalog from a JSON file, falling back to the built-in list.

        Expected format::

            {"challenges": [{"id": "c1", "title": "...", "category": "dish",
                             "skill": "cook", "minutes": 8, "points": 100,
                             "description": "..."}]}
        """
        if not path.exists():
            logger.warning(f"Challenge catalog not found at {path}, using built-in catalog")
            return cls()

        try:
            with open(path) as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise TypeError("catalog root must be an object")
            challenges = [_parse_challenge(entry) for entry in data.get("challenges", [])]
        except (json.JSONDecodeError, OSError, KeyError, ValueError, TypeError) as e:
            logger.warning(f"Failed to load challenge catalog {path}: {e}")
            return cls()

        logger.info(f"Loaded {len(challenges)} challenges from {path}")
        return cls(challenges)

    def get(self, challenge_id: str) -> Challenge:
        """Look up a challenge.

        Raises:
            ChallengeNotFound: If the id is not in the catalog
        """
        challenge = self._challenges.get(challenge_id)
        if challenge is None:
            raise ChallengeNotFound(challenge_id)
        return challenge

    def list_challenges(self) -> list[Challenge]:
        """All challenges in catalog order."""
        return list(self._challenges.values())

    def __contains__(self, challenge_id: str) -> bool:
        return challenge_id in self._challenges

    def __len__(self) -> int:
        return len(self._challenges)


def _parse_challenge(entry: dict) -> Challenge:
    if not isinstance(entry, dict):
        raise TypeError(f"Challenge entry must be an object, got {entry!r}")
    minutes = int(entry["minutes"])
    if minutes <= 0:
        raise ValueError(f"Challenge {entry['id']} must last at least one minute")
    return Challenge(
        id=str(entry["id"]),
        title=entry.get("title", entry["id"]),
        category=ChallengeCategory(entry["category"]),
        skill=SkillTag(entry["skill"]),
        minutes=minutes,
        points=int(entry.get("points", 0)),
        description=entry.get("description", ""),
    )
