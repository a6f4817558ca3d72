"""Match session state machine.

Owns the challenge lifecycle for one room and ties together the countdown
timer, vote aggregation, roster assignment and reward computation. Every
mutation of a session goes through ``MatchEngine``; the engine holds no
rendering state and never schedules its own ticks.

Lifecycle::

    IDLE --start_challenge--> ACTIVE --tick (expired) / force_finalize--> FINALIZING --> IDLE
"""

import copy
import dataclasses
import logging
from typing import Optional, Union

from vicarious_chef.exceptions import InvalidTransition, ParticipantNotFound
from vicarious_chef.models.challenge import Challenge
from vicarious_chef.models.participant import Participant, Role
from vicarious_chef.models.session import (
    ChallengeResult,
    FinalizeReason,
    MatchSession,
    SessionSnapshot,
    SessionState,
)
from vicarious_chef.models.team import Team, TeamId
from vicarious_chef.models.vote import Vote, VoteTally
from vicarious_chef.repositories.challenge_catalog import ChallengeCatalog
from vicarious_chef.services.countdown_timer import CountdownTimer
from vicarious_chef.services.reward_calculator import compute_rewards, winner
from vicarious_chef.services.roster_manager import RosterManager
from vicarious_chef.services.vote_aggregator import VoteAggregator
from vicarious_chef.utils.role_normalizer import JOINABLE_ROLES, normalize_role_strict

logger = logging.getLogger(__name__)

DEFAULT_TEAM_A_NAME = "Team Basil"
DEFAULT_TEAM_B_NAME = "Team Thyme"


class MatchEngine:
    """State machine for one room's match session."""

    def __init__(
        self,
        room_id: str,
        shamony: bool = False,
        catalog: Optional[ChallengeCatalog] = None,
        team_a_name: str = DEFAULT_TEAM_A_NAME,
        team_b_name: str = DEFAULT_TEAM_B_NAME,
        max_team_size: Optional[int] = None,
    ):
        """Create a session in the IDLE state.

        Args:
            room_id: Room code the session belongs to
            shamony: Cosmetic multi-team flag; no effect on scoring
            catalog: Challenge source; defaults to the built-in catalog
            team_a_name: Display name for team A (chefs)
            team_b_name: Display name for team B (contestants)
            max_team_size: Optional roster limit per team
        """
        self.catalog = catalog or ChallengeCatalog()
        self.session = MatchSession(
            room_id=room_id,
            shamony=shamony,
            team_a=Team(id="A", name=team_a_name),
            team_b=Team(id="B", name=team_b_name),
        )
        self.timer = CountdownTimer()
        self.aggregator = VoteAggregator(self.session.tallies)
        self.roster = RosterManager(
            self.session.team_a,
            self.session.team_b,
            max_team_size=max_team_size,
        )

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def room_id(self) -> str:
        return self.session.room_id

    @property
    def shamony(self) -> bool:
        return self.session.shamony

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def is_active(self) -> bool:
        return self.session.state == SessionState.ACTIVE

    @property
    def teams(self) -> tuple[Team, Team]:
        return self.session.team_a, self.session.team_b

    def team(self, team_id: TeamId) -> Team:
        return self.session.team(team_id)

    def tally(self, team_id: TeamId) -> VoteTally:
        return self.session.tallies[team_id]

    @property
    def active_challenge(self) -> Optional[Challenge]:
        return self.session.active_challenge

    @property
    def remaining_seconds(self) -> int:
        return self.timer.remaining

    @property
    def total_seconds(self) -> int:
        return self.timer.total

    @property
    def coins(self) -> int:
        return self.session.coins

    @property
    def gifts(self) -> int:
        return self.session.gifts

    @property
    def history(self) -> list[ChallengeResult]:
        return list(self.session.history)

    def snapshot(self) -> SessionSnapshot:
        """Copy of the current state, safe to hand to a renderer."""
        session = self.session
        return SessionSnapshot(
            room_id=session.room_id,
            shamony=session.shamony,
            state=session.state,
            team_a=copy.deepcopy(session.team_a),
            team_b=copy.deepcopy(session.team_b),
            active_challenge=session.active_challenge,
            remaining_seconds=self.timer.remaining,
            total_seconds=self.timer.total,
            progress_percent=self.timer.progress_percent(),
            total_score=session.total_score,
            coins=session.coins,
            gifts=session.gifts,
            tallies=copy.deepcopy(session.tallies),
            cheers=dict(session.cheers),
            history=tuple(session.history),
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def join_participant(self, participant: Participant, role: Union[Role, str]) -> Optional[Team]:
        """Record a participant's lobby join and roster them by role.

        The session keeps its own copy of the participant carrying the joined
        role, so joining another room never changes this one. A participant
        who already joined this session is left where they are.

        Returns:
            The team the participant is rostered on, or None for judges
            and spectators

        Raises:
            ValueError: If the role is not recognized or not offered in the lobby
            RosterFull: If a team size limit is configured and reached
        """
        role = normalize_role_strict(role) if isinstance(role, str) else role
        if role not in JOINABLE_ROLES:
            raise ValueError(f"Cannot join a room as {role.value}")

        if participant.id in self.session.participants:
            logger.warning(
                f"Participant {participant.id} already joined room {self.room_id}, ignoring"
            )
            return self.roster.find_team(participant.id)

        member = dataclasses.replace(participant, role=role)
        team = self.roster.assign(member, role)
        self.session.participants[member.id] = member
        logger.info(
            f"Room {self.room_id}: {member.name} joined as {role.value}"
            + (f" on {team.name}" if team else "")
        )
        return team

    def member(self, participant_id: str) -> Participant:
        """The session's record of a joined participant.

        Raises:
            ParticipantNotFound: If the participant has not joined this session
        """
        member = self.session.participants.get(participant_id)
        if member is None:
            raise ParticipantNotFound(participant_id)
        return member

    def start_challenge(self, challenge_id: str) -> Challenge:
        """Begin a challenge from the catalog.

        Only valid while IDLE. A running challenge is never overwritten.

        Raises:
            InvalidTransition: If a challenge is already running
            ChallengeNotFound: If the id is not in the catalog
        """
        self._require(SessionState.IDLE, "start a challenge")
        challenge = self.catalog.get(challenge_id)

        self.session.active_challenge = challenge
        self.timer.start(challenge.duration_seconds)
        for team_id in ("A", "B"):
            self.aggregator.reset(team_id)
            self.session.cheers[team_id] = 0
        self.session.state = SessionState.ACTIVE

        logger.info(
            f"Room {self.room_id}: started {challenge.id} ({challenge.title}) "
            f"for {challenge.duration_seconds}s"
        )
        return challenge

    def submit_vote(self, team: TeamId, vote: Vote) -> VoteTally:
        """Fold a judge vote into a team's tally.

        Raises:
            InvalidTransition: If no challenge is running
        """
        self._require(SessionState.ACTIVE, "submit a vote")
        return self.aggregator.submit(team, vote)

    def cheer(self, team: TeamId) -> int:
        """Count a spectator cheer for a team. Display only.

        Raises:
            InvalidTransition: If no challenge is running
        """
        self._require(SessionState.ACTIVE, "cheer")
        if team not in self.session.cheers:
            raise ValueError(f"Unknown team: {team}")
        self.session.cheers[team] += 1
        return self.session.cheers[team]

    def adjust_timer(self, delta_seconds: int) -> int:
        """Add or remove time from the running challenge.

        Driving the clock to zero does not finalize; the next tick does.

        Returns:
            Remaining seconds after the adjustment

        Raises:
            InvalidTransition: If no challenge is running
        """
        self._require(SessionState.ACTIVE, "adjust the timer")
        self.timer.adjust(delta_seconds)
        logger.debug(
            f"Room {self.room_id}: timer adjusted by {delta_seconds}s, "
            f"{self.timer.remaining}s remaining"
        )
        return self.timer.remaining

    def tick(self) -> Optional[ChallengeResult]:
        """Advance the clock one second; finalize on expiry.

        Ignored unless a challenge is running.

        Returns:
            The result if this tick finalized the challenge, else None
        """
        if self.session.state != SessionState.ACTIVE:
            logger.debug(f"Room {self.room_id}: tick ignored while {self.state.value}")
            return None

        self.timer.tick()
        if self.timer.is_expired():
            return self._finalize("expired")
        return None

    def force_finalize(self) -> Optional[ChallengeResult]:
        """End the running challenge now, regardless of remaining time.

        Ignored unless a challenge is running.
        """
        return self._finalize("forced")

    def _finalize(self, reason: FinalizeReason) -> Optional[ChallengeResult]:
        session = self.session
        if session.state != SessionState.ACTIVE or session.active_challenge is None:
            logger.debug(f"Room {self.room_id}: finalize ignored while {self.state.value}")
            return None

        session.state = SessionState.FINALIZING
        challenge = session.active_challenge

        score_a = self.aggregator.sum("A")
        score_b = self.aggregator.sum("B")
        session.team_a.score += score_a
        session.team_b.score += score_b

        rewards = compute_rewards(score_a, score_b)
        session.coins += rewards.coins_delta
        session.gifts += rewards.gifts_delta

        result = ChallengeResult(
            challenge_id=challenge.id,
            score_a=score_a,
            score_b=score_b,
            coins_awarded=rewards.coins_delta,
            gifts_awarded=rewards.gifts_delta,
            winner=winner(score_a, score_b),
            reason=reason,
        )
        session.history.append(result)

        session.active_challenge = None
        self.timer.reset()
        session.state = SessionState.IDLE

        logger.info(
            f"Room {self.room_id}: finalized {challenge.id} ({reason}) "
            f"A={score_a} B={score_b} +{rewards.coins_delta} coins +{rewards.gifts_delta} gifts"
        )
        return result

    def _require(self, expected: SessionState, operation: str) -> None:
        if self.session.state != expected:
            logger.debug(
                f"Room {self.room_id}: cannot {operation} while {self.session.state.value}"
            )
            raise InvalidTransition(operation, self.session.state.value)


# ----------------------------------------------------------------------
# Operation surface for the presentation layer
# ----------------------------------------------------------------------

def create_session(
    room_id: str,
    shamony: bool = False,
    catalog: Optional[ChallengeCatalog] = None,
    **kwargs,
) -> MatchEngine:
    """Create a new IDLE session for a room."""
    return MatchEngine(room_id, shamony=shamony, catalog=catalog, **kwargs)


def join_participant(session: MatchEngine, participant: Participant, role: Union[Role, str]) -> None:
    session.join_participant(participant, role)


def start_challenge(session: MatchEngine, challenge_id: str) -> None:
    session.start_challenge(challenge_id)


def submit_vote(session: MatchEngine, team: TeamId, vote: Vote) -> None:
    session.submit_vote(team, vote)


def adjust_timer(session: MatchEngine, delta_seconds: int) -> None:
    session.adjust_timer(delta_seconds)


def force_finalize(session: MatchEngine) -> None:
    session.force_finalize()


def tick(session: MatchEngine) -> None:
    session.tick()
