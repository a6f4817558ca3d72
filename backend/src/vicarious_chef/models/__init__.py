"""Data models for the Vicarious Chef match engine."""

from vicarious_chef.models.challenge import Challenge, ChallengeCategory, SkillTag
from vicarious_chef.models.participant import Participant, Role
from vicarious_chef.models.session import (
    ChallengeResult,
    MatchSession,
    SessionSnapshot,
    SessionState,
)
from vicarious_chef.models.team import TEAM_IDS, Team, TeamId
from vicarious_chef.models.vote import Vote, VoteTally

__all__ = [
    "Challenge",
    "ChallengeCategory",
    "SkillTag",
    "Participant",
    "Role",
    "ChallengeResult",
    "MatchSession",
    "SessionSnapshot",
    "SessionState",
    "TEAM_IDS",
    "Team",
    "TeamId",
    "Vote",
    "VoteTally",
]
