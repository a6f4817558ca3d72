"""Match session state models."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional

from vicarious_chef.models.challenge import Challenge
from vicarious_chef.models.participant import Participant
from vicarious_chef.models.team import Team, TeamId
from vicarious_chef.models.vote import VoteTally


class SessionState(str, Enum):
    """Lifecycle of a session's current challenge."""

    IDLE = "idle"  # No active challenge
    ACTIVE = "active"  # Timer counting down, votes accumulating
    FINALIZING = "finalizing"  # Committing scores and rewards


FinalizeReason = Literal["expired", "forced"]


@dataclass(frozen=True)
class ChallengeResult:
    """Outcome of one finalized challenge."""

    challenge_id: str
    score_a: int
    score_b: int
    coins_awarded: int
    gifts_awarded: int
    winner: Optional[TeamId]  # None on a tie
    reason: FinalizeReason
    finished_at: float = field(default_factory=time.time)


@dataclass
class MatchSession:
    """Complete live match state for one room."""

    room_id: str
    team_a: Team
    team_b: Team
    shamony: bool = False  # Cosmetic multi-team flag
    state: SessionState = SessionState.IDLE
    active_challenge: Optional[Challenge] = None
    coins: int = 0
    gifts: int = 0
    tallies: dict[str, VoteTally] = field(
        default_factory=lambda: {"A": VoteTally(), "B": VoteTally()}
    )
    # Spectator cheers for the active challenge; display only
    cheers: dict[str, int] = field(default_factory=lambda: {"A": 0, "B": 0})
    participants: dict[str, Participant] = field(default_factory=dict)
    history: list[ChallengeResult] = field(default_factory=list)
    created_at: float = field(default_factory=time.time)

    def team(self, team_id: TeamId) -> Team:
        if team_id == "A":
            return self.team_a
        if team_id == "B":
            return self.team_b
        raise ValueError(f"Unknown team: {team_id}")

    @property
    def total_score(self) -> int:
        """Combined cumulative score of both teams."""
        return self.team_a.score + self.team_b.score


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session at a point in time."""

    room_id: str
    shamony: bool
    state: SessionState
    team_a: Team
    team_b: Team
    active_challenge: Optional[Challenge]
    remaining_seconds: int
    total_seconds: int
    progress_percent: float
    total_score: int
    coins: int
    gifts: int
    tallies: dict[str, VoteTally]
    cheers: dict[str, int]
    history: tuple[ChallengeResult, ...]
