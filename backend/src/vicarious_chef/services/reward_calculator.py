"""Reward derivation from finalized challenge scores."""

from dataclasses import dataclass
from typing import Optional

from vicarious_chef.models.team import TeamId

COINS_PER_POINT_DIVISOR = 10


@dataclass(frozen=True)
class Rewards:
    """Currency and gift increments for one finalized challenge."""

    coins_delta: int
    gifts_delta: int


def compute_rewards(score_a: int, score_b: int) -> Rewards:
    """Derive session rewards from both teams' challenge scores.

    Coins are a tenth of the combined score, halves rounded up. A gift is
    awarded only when team A strictly beats team B; a tie or a team B win
    awards none.

    Args:
        score_a: Team A vote sum (non-negative)
        score_b: Team B vote sum (non-negative)

    Returns:
        Rewards with non-negative deltas
    """
    combined = max(0, score_a) + max(0, score_b)
    half = COINS_PER_POINT_DIVISOR // 2
    coins_delta = (combined + half) // COINS_PER_POINT_DIVISOR
    gifts_delta = 1 if score_a > score_b else 0
    return Rewards(coins_delta=coins_delta, gifts_delta=gifts_delta)


def winner(score_a: int, score_b: int) -> Optional[TeamId]:
    """Which team scored higher, or None on a tie. Display only."""
    if score_a > score_b:
        return "A"
    if score_b > score_a:
        return "B"
    return None
