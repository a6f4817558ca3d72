"""Judge vote and tally models."""

from dataclasses import dataclass

VOTE_CATEGORIES = ("taste", "technique", "timing", "presentation")

# Per-submission delta bounds
MIN_VOTE_DELTA = 0
MAX_VOTE_DELTA = 5

# Ceiling for an accumulated category
CATEGORY_CEILING = 50


@dataclass(frozen=True)
class Vote:
    """One judge submission: a delta for each category."""

    taste: int = 0
    technique: int = 0
    timing: int = 0
    presentation: int = 0


@dataclass
class VoteTally:
    """Accumulated category totals for one team in the active challenge."""

    taste: int = 0
    technique: int = 0
    timing: int = 0
    presentation: int = 0

    @property
    def total(self) -> int:
        return self.taste + self.technique + self.timing + self.presentation

    def as_dict(self) -> dict[str, int]:
        return {category: getattr(self, category) for category in VOTE_CATEGORIES}
