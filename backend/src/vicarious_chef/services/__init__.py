"""Match engine services."""

from vicarious_chef.services.countdown_timer import CountdownTimer
from vicarious_chef.services.match_engine import (
    MatchEngine,
    adjust_timer,
    create_session,
    force_finalize,
    join_participant,
    start_challenge,
    submit_vote,
    tick,
)
from vicarious_chef.services.participant_registry import ParticipantRegistry
from vicarious_chef.services.reward_calculator import Rewards, compute_rewards
from vicarious_chef.services.roster_manager import RosterManager
from vicarious_chef.services.session_manager import ManagedSession, SessionManager
from vicarious_chef.services.vote_aggregator import VoteAggregator

__all__ = [
    "CountdownTimer",
    "MatchEngine",
    "adjust_timer",
    "create_session",
    "force_finalize",
    "join_participant",
    "start_challenge",
    "submit_vote",
    "tick",
    "ParticipantRegistry",
    "Rewards",
    "compute_rewards",
    "RosterManager",
    "ManagedSession",
    "SessionManager",
    "VoteAggregator",
]
