"""REST endpoints for match sessions."""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel, Field

from vicarious_chef.exceptions import (
    ChallengeNotFound,
    InvalidTransition,
    ParticipantNotFound,
    RosterFull,
    SessionNotFound,
)
from vicarious_chef.models.challenge import Challenge
from vicarious_chef.models.session import ChallengeResult, SessionSnapshot
from vicarious_chef.models.team import Team
from vicarious_chef.models.vote import Vote
from vicarious_chef.services.participant_registry import ParticipantRegistry
from vicarious_chef.services.session_manager import ManagedSession, SessionManager
from vicarious_chef.utils.time_format import format_time

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["sessions"])


class SignInRequest(BaseModel):
    name: str
    family_mode: bool = True


class CreateSessionRequest(BaseModel):
    room_id: Optional[str] = None  # Defaults to the configured lobby room
    shamony: bool = False


class JoinRequest(BaseModel):
    participant_id: str
    role: str


class StartChallengeRequest(BaseModel):
    challenge_id: str


class VoteRequest(BaseModel):
    team: Literal["A", "B"]
    # Unbounded here; the engine clamps each delta into [0, 5]
    taste: int = 0
    technique: int = 0
    timing: int = 0
    presentation: int = 0


class CheerRequest(BaseModel):
    team: Literal["A", "B"]


class AdjustTimerRequest(BaseModel):
    delta_seconds: int = Field(..., description="Seconds to add (negative removes)")


def _manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def _registry(request: Request) -> ParticipantRegistry:
    return request.app.state.registry


def _get_session(request: Request, room_id: str) -> ManagedSession:
    try:
        return _manager(request).get_session(room_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")


def _rejected(managed: ManagedSession, e: Exception, status_code: int = 409) -> HTTPException:
    managed.match_logger.log_error(f"{type(e).__name__}: {e}")
    return HTTPException(status_code=status_code, detail=str(e))


@router.post("/participants", status_code=201)
async def sign_in(request: Request, body: SignInRequest):
    """Register a participant from the sign-in form."""
    try:
        participant = _registry(request).register(body.name, family_mode=body.family_mode)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "id": participant.id,
        "name": participant.name,
        "avatar": participant.avatar,
        "family_mode": participant.family_mode,
        "role": participant.role.value,
    }


@router.get("/challenges")
async def list_challenges(request: Request):
    """List the challenge catalog."""
    catalog = _manager(request).catalog
    return {"challenges": [_serialize_challenge(c) for c in catalog.list_challenges()]}


@router.post("/sessions", status_code=201)
async def create_session(request: Request, response: Response, body: CreateSessionRequest):
    """Create (or re-enter) a room session.

    Re-entering a live room returns it unchanged with status 200; the
    ``shamony`` flag only applies when the room is created.
    """
    room_id = (body.room_id or "").strip() or request.app.state.settings.default_room_id
    manager = _manager(request)
    if room_id in manager.sessions:
        response.status_code = 200
    managed = manager.create_session(room_id, shamony=body.shamony)
    return _serialize_snapshot(managed.engine.snapshot())


@router.get("/sessions")
async def list_sessions(request: Request):
    """List live rooms (for debugging)."""
    return {"sessions": _manager(request).list_sessions()}


@router.get("/sessions/{room_id}")
async def get_session(request: Request, room_id: str):
    """Current state of a room."""
    managed = _get_session(request, room_id)
    return _serialize_snapshot(managed.engine.snapshot())


@router.delete("/sessions/{room_id}", status_code=204)
async def leave_session(request: Request, room_id: str):
    """Leave a room. The session is discarded without finalizing."""
    _get_session(request, room_id)
    _manager(request).remove_session(room_id)


@router.post("/sessions/{room_id}/participants")
async def join_session(request: Request, room_id: str, body: JoinRequest):
    """Join a room with a role."""
    managed = _get_session(request, room_id)
    try:
        participant = _registry(request).get(body.participant_id)
    except ParticipantNotFound:
        raise HTTPException(status_code=404, detail="Participant not found")

    try:
        team = managed.engine.join_participant(participant, body.role)
    except ValueError as e:
        raise _rejected(managed, e, status_code=400)
    except RosterFull as e:
        raise _rejected(managed, e)

    member = managed.engine.member(participant.id)
    managed.match_logger.log_participant_joined(
        member.id, member.name, member.role.value, team.id if team else None
    )
    return {
        "participant_id": member.id,
        "role": member.role.value,
        "team": team.id if team else None,
        "session": _serialize_snapshot(managed.engine.snapshot()),
    }


@router.post("/sessions/{room_id}/challenge")
async def start_challenge(request: Request, room_id: str, body: StartChallengeRequest):
    """Start a challenge from the catalog."""
    managed = _get_session(request, room_id)
    try:
        challenge = managed.engine.start_challenge(body.challenge_id)
    except ChallengeNotFound:
        raise HTTPException(status_code=404, detail="Challenge not found")
    except InvalidTransition as e:
        raise _rejected(managed, e)

    managed.match_logger.log_challenge_started(
        challenge.id, challenge.title, challenge.duration_seconds
    )
    _manager(request).start_countdown(room_id)
    return _serialize_snapshot(managed.engine.snapshot())


@router.post("/sessions/{room_id}/votes")
async def submit_vote(request: Request, room_id: str, body: VoteRequest):
    """Submit a judge vote for a team."""
    managed = _get_session(request, room_id)
    vote = Vote(
        taste=body.taste,
        technique=body.technique,
        timing=body.timing,
        presentation=body.presentation,
    )
    try:
        tally = managed.engine.submit_vote(body.team, vote)
    except InvalidTransition as e:
        raise _rejected(managed, e)

    managed.match_logger.log_vote(
        body.team,
        body.model_dump(exclude={"team"}),
        tally.as_dict(),
    )
    return {"team": body.team, "tally": tally.as_dict(), "total": tally.total}


@router.post("/sessions/{room_id}/cheers")
async def cheer(request: Request, room_id: str, body: CheerRequest):
    """Spectator cheer for a team."""
    managed = _get_session(request, room_id)
    try:
        count = managed.engine.cheer(body.team)
    except InvalidTransition as e:
        raise _rejected(managed, e)
    return {"team": body.team, "cheers": count}


@router.post("/sessions/{room_id}/timer")
async def adjust_timer(request: Request, room_id: str, body: AdjustTimerRequest):
    """Add or remove time from the running challenge."""
    managed = _get_session(request, room_id)
    try:
        remaining = managed.engine.adjust_timer(body.delta_seconds)
    except InvalidTransition as e:
        raise _rejected(managed, e)

    managed.match_logger.log_timer_adjusted(body.delta_seconds, remaining)
    return {
        "remaining_seconds": remaining,
        "remaining_display": format_time(remaining),
        "total_seconds": managed.engine.total_seconds,
    }


@router.post("/sessions/{room_id}/tick")
async def tick(request: Request, room_id: str):
    """Advance the clock one second (for hosts without a background countdown)."""
    managed = _get_session(request, room_id)
    result = managed.engine.tick()
    if result is not None:
        managed.match_logger.log_result(result, managed.engine.coins, managed.engine.gifts)
    return {
        "result": _serialize_result(result) if result else None,
        "session": _serialize_snapshot(managed.engine.snapshot()),
    }


@router.post("/sessions/{room_id}/finalize")
async def force_finalize(request: Request, room_id: str):
    """End the running challenge and score it now."""
    managed = _get_session(request, room_id)
    result = managed.engine.force_finalize()
    if result is not None:
        managed.match_logger.log_result(result, managed.engine.coins, managed.engine.gifts)
    return {
        "result": _serialize_result(result) if result else None,
        "session": _serialize_snapshot(managed.engine.snapshot()),
    }


def _serialize_team(team: Team) -> dict:
    """Serialize Team to JSON-compatible dict."""
    return {
        "id": team.id,
        "name": team.name,
        "score": team.score,
        "chefs": [{"id": p.id, "name": p.name, "avatar": p.avatar} for p in team.chefs],
        "contestants": [{"id": p.id, "name": p.name, "avatar": p.avatar} for p in team.contestants],
    }


def _serialize_challenge(challenge: Challenge) -> dict:
    return {
        "id": challenge.id,
        "title": challenge.title,
        "category": challenge.category.value,
        "skill": challenge.skill.value,
        "minutes": challenge.minutes,
        "points": challenge.points,
        "description": challenge.description,
    }


def _serialize_result(result: ChallengeResult) -> dict:
    return {
        "challenge_id": result.challenge_id,
        "score_a": result.score_a,
        "score_b": result.score_b,
        "coins_awarded": result.coins_awarded,
        "gifts_awarded": result.gifts_awarded,
        "winner": result.winner,
        "reason": result.reason,
    }


def _serialize_snapshot(snapshot: SessionSnapshot) -> dict:
    """Serialize SessionSnapshot to JSON-compatible dict."""
    return {
        "room_id": snapshot.room_id,
        "shamony": snapshot.shamony,
        "state": snapshot.state.value,
        "team_a": _serialize_team(snapshot.team_a),
        "team_b": _serialize_team(snapshot.team_b),
        "total_score": snapshot.total_score,
        "challenge": _serialize_challenge(snapshot.active_challenge) if snapshot.active_challenge else None,
        "timer": {
            "remaining_seconds": snapshot.remaining_seconds,
            "total_seconds": snapshot.total_seconds,
            "remaining_display": format_time(snapshot.remaining_seconds),
            "progress_percent": round(snapshot.progress_percent, 1),
        },
        "coins": snapshot.coins,
        "gifts": snapshot.gifts,
        "tallies": {team_id: tally.as_dict() for team_id, tally in snapshot.tallies.items()},
        "cheers": snapshot.cheers,
        "history": [_serialize_result(r) for r in snapshot.history],
    }
