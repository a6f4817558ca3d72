"""Judge vote aggregation into bounded category tallies."""

from vicarious_chef.models.team import TeamId
from vicarious_chef.models.vote import (
    CATEGORY_CEILING,
    MAX_VOTE_DELTA,
    MIN_VOTE_DELTA,
    VOTE_CATEGORIES,
    Vote,
    VoteTally,
)


def clamp_delta(value: int) -> int:
    """Clamp a single category delta into the allowed submission range."""
    return max(MIN_VOTE_DELTA, min(MAX_VOTE_DELTA, int(value)))


class VoteAggregator:
    """Folds judge submissions into per-team tallies.

    Votes are strictly additive within a challenge. Each category is capped at
    ``CATEGORY_CEILING``; anything past the cap is dropped silently.
    """

    def __init__(self, tallies: dict[str, VoteTally]):
        """Initialize the aggregator.

        Args:
            tallies: Team id -> tally mapping owned by the session. Updated in place.
        """
        self.tallies = tallies

    def submit(self, team: TeamId, vote: Vote) -> VoteTally:
        """Fold one judge vote into a team's tally.

        Args:
            team: "A" or "B"
            vote: Category deltas; each is clamped into [0, 5] first

        Returns:
            The updated tally
        """
        tally = self._tally(team)
        for category in VOTE_CATEGORIES:
            delta = clamp_delta(getattr(vote, category))
            current = getattr(tally, category)
            setattr(tally, category, min(CATEGORY_CEILING, current + delta))
        return tally

    def reset(self, team: TeamId) -> None:
        """Zero all four categories for a team."""
        self.tallies[team] = VoteTally()

    def sum(self, team: TeamId) -> int:
        """Scalar total of all categories for a team."""
        return self._tally(team).total

    def _tally(self, team: TeamId) -> VoteTally:
        if team not in self.tallies:
            raise ValueError(f"Unknown team: {team}")
        return self.tallies[team]
