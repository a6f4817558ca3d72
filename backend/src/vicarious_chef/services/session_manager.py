"""Room session management."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from vicarious_chef.exceptions import SessionNotFound
from vicarious_chef.models.session import ChallengeResult
from vicarious_chef.repositories.challenge_catalog import ChallengeCatalog
from vicarious_chef.services.countdown_runner import run_countdown
from vicarious_chef.services.match_engine import (
    DEFAULT_TEAM_A_NAME,
    DEFAULT_TEAM_B_NAME,
    MatchEngine,
)
from vicarious_chef.services.match_logger import MatchLogger

logger = logging.getLogger(__name__)


@dataclass
class ManagedSession:
    """A live room: its engine plus host-side resources."""

    room_id: str
    engine: MatchEngine
    match_logger: MatchLogger
    created_at: datetime = field(default_factory=datetime.now)
    timer_task: asyncio.Task | None = None  # Background countdown


class SessionManager:
    """In-memory manager for live room sessions.

    All access happens on one event loop, so no locking is needed: every
    engine operation runs to completion before the next one starts.
    """

    def __init__(
        self,
        catalog: Optional[ChallengeCatalog] = None,
        tick_interval_seconds: float = 1.0,
        auto_countdown: bool = True,
        team_a_name: str = DEFAULT_TEAM_A_NAME,
        team_b_name: str = DEFAULT_TEAM_B_NAME,
        max_team_size: Optional[int] = None,
        diagnostics_enabled: bool = False,
        diagnostics_dir: Optional[str] = None,
    ):
        self.catalog = catalog or ChallengeCatalog()
        self.tick_interval_seconds = tick_interval_seconds
        self.auto_countdown = auto_countdown
        self.team_a_name = team_a_name
        self.team_b_name = team_b_name
        self.max_team_size = max_team_size
        self.diagnostics_enabled = diagnostics_enabled
        self.diagnostics_dir = diagnostics_dir
        self.sessions: dict[str, ManagedSession] = {}

    def create_session(self, room_id: str, shamony: bool = False) -> ManagedSession:
        """Create a session for a room, or return the room's existing one."""
        existing = self.sessions.get(room_id)
        if existing is not None:
            logger.info(f"Room {room_id} already has a session, reusing it")
            return existing

        engine = MatchEngine(
            room_id,
            shamony=shamony,
            catalog=self.catalog,
            team_a_name=self.team_a_name,
            team_b_name=self.team_b_name,
            max_team_size=self.max_team_size,
        )
        match_logger = MatchLogger(
            output_dir=Path(self.diagnostics_dir) if self.diagnostics_dir else None,
            enabled=self.diagnostics_enabled,
        )
        match_logger.start_session(
            room_id=room_id,
            shamony=shamony,
            team_a=self.team_a_name,
            team_b=self.team_b_name,
        )
        managed = ManagedSession(room_id=room_id, engine=engine, match_logger=match_logger)
        self.sessions[room_id] = managed
        logger.info(f"Created session for room {room_id} (shamony={shamony})")
        return managed

    def get_session(self, room_id: str) -> ManagedSession:
        """Get a room's session.

        Raises:
            SessionNotFound: If the room has no session
        """
        managed = self.sessions.get(room_id)
        if managed is None:
            raise SessionNotFound(room_id)
        return managed

    def remove_session(self, room_id: str) -> None:
        """Leave a room: discard its session without finalizing.

        Any running challenge, partial votes and timer are dropped.
        """
        managed = self.sessions.pop(room_id, None)
        if managed is None:
            return
        self._cancel_countdown(managed)
        managed.match_logger.save(suffix="_left")
        logger.info(f"Discarded session for room {room_id}")

    def start_countdown(self, room_id: str) -> Optional[asyncio.Task]:
        """Schedule the background tick loop for the room's active challenge.

        Must be called from a running event loop. Returns None when auto
        countdown is disabled or no challenge is running.
        """
        managed = self.get_session(room_id)
        if not self.auto_countdown or not managed.engine.is_active:
            return None

        self._cancel_countdown(managed)

        async def record_result(result: ChallengeResult) -> None:
            engine = managed.engine
            managed.match_logger.log_result(result, engine.coins, engine.gifts)

        managed.timer_task = asyncio.create_task(
            run_countdown(
                managed.engine,
                interval_seconds=self.tick_interval_seconds,
                on_result=record_result,
            )
        )
        return managed.timer_task

    def list_sessions(self) -> list[dict]:
        """List all live rooms (for debugging)."""
        return [
            {
                "room_id": m.room_id,
                "state": m.engine.state.value,
                "shamony": m.engine.shamony,
                "remaining_seconds": m.engine.remaining_seconds,
                "participants": len(m.engine.session.participants),
            }
            for m in self.sessions.values()
        ]

    @staticmethod
    def _cancel_countdown(managed: ManagedSession) -> None:
        if managed.timer_task and not managed.timer_task.done():
            managed.timer_task.cancel()
        managed.timer_task = None
