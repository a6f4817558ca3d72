"""Diagnostic logging for match sessions.

Captures a room's lifecycle (challenges, votes, timer adjustments, results)
as JSON for debugging and replay analysis.

Usage:
    from vicarious_chef.services.match_logger import MatchLogger

    match_logger = MatchLogger()
    match_logger.start_session("KITCHEN-101", shamony=False, team_a="Team Basil", team_b="Team Thyme")
    match_logger.log_vote("A", {"taste": 5, ...}, {"taste": 10, ...})
    match_logger.save()
"""
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from vicarious_chef.models.session import ChallengeResult

# Configure module logger
module_logger = logging.getLogger("vicarious_chef.match_diagnostics")


class MatchLogger:
    """Captures match diagnostics for one room."""

    def __init__(self, output_dir: Optional[Path] = None, enabled: bool = False):
        """Initialize match logger.

        Args:
            output_dir: Directory to save diagnostic files. Defaults to logs/matches/
            enabled: Whether logging is active. Can be overridden via MATCH_DIAGNOSTICS env var.
        """
        env_enabled = os.environ.get("MATCH_DIAGNOSTICS", "").lower()
        if env_enabled == "true":
            enabled = True
        elif env_enabled == "false":
            enabled = False

        self.enabled = enabled
        self.output_dir = output_dir or Path("logs") / "matches"
        self.entries: list[dict] = []
        self.room_id: str = ""
        self._metadata: dict = {}

        if self.enabled:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            module_logger.info(f"Match diagnostics enabled, output dir: {self.output_dir}")

    def start_session(
        self,
        room_id: str,
        shamony: bool,
        team_a: str,
        team_b: str,
        extra_metadata: Optional[dict] = None,
    ):
        """Begin capturing a room."""
        if not self.enabled:
            return

        self.room_id = room_id
        self.entries = []
        self._metadata = {
            "room_id": room_id,
            "shamony": shamony,
            "team_a": team_a,
            "team_b": team_b,
            "started_at": datetime.now().isoformat(),
            **(extra_metadata or {})
        }

        self.entries.append({
            "event": "session_start",
            "timestamp": datetime.now().isoformat(),
            **self._metadata
        })

    def log_participant_joined(self, participant_id: str, name: str, role: str, team: Optional[str]):
        if not self.enabled:
            return

        self.entries.append({
            "event": "participant_joined",
            "timestamp": datetime.now().isoformat(),
            "participant_id": participant_id,
            "name": name,
            "role": role,
            "team": team,
        })

    def log_challenge_started(self, challenge_id: str, title: str, duration_seconds: int):
        if not self.enabled:
            return

        self.entries.append({
            "event": "challenge_started",
            "timestamp": datetime.now().isoformat(),
            "challenge_id": challenge_id,
            "title": title,
            "duration_seconds": duration_seconds,
        })

    def log_vote(self, team: str, vote: dict, tally: dict):
        """Log a judge vote and the tally it produced.

        Args:
            team: "A" or "B"
            vote: Submitted category deltas (before clamping)
            tally: Team tally after folding the vote
        """
        if not self.enabled:
            return

        self.entries.append({
            "event": "vote",
            "timestamp": datetime.now().isoformat(),
            "team": team,
            "vote": vote,
            "tally": tally,
        })

    def log_timer_adjusted(self, delta_seconds: int, remaining_seconds: int):
        if not self.enabled:
            return

        self.entries.append({
            "event": "timer_adjusted",
            "timestamp": datetime.now().isoformat(),
            "delta_seconds": delta_seconds,
            "remaining_seconds": remaining_seconds,
        })

    def log_result(self, result: ChallengeResult, coins_total: int, gifts_total: int):
        """Log a finalized challenge with the running reward totals."""
        if not self.enabled:
            return

        self.entries.append({
            "event": "challenge_finalized",
            "timestamp": datetime.now().isoformat(),
            "challenge_id": result.challenge_id,
            "reason": result.reason,
            "score_a": result.score_a,
            "score_b": result.score_b,
            "winner": result.winner,
            "coins_awarded": result.coins_awarded,
            "gifts_awarded": result.gifts_awarded,
            "coins_total": coins_total,
            "gifts_total": gifts_total,
        })

    def log_error(self, error_message: str):
        """Log an error that occurred while driving the session."""
        if not self.enabled:
            return

        self.entries.append({
            "event": "error",
            "timestamp": datetime.now().isoformat(),
            "error": error_message,
        })
        module_logger.error(f"Match error logged: {error_message[:200]}...")

    def save(self, suffix: str = "") -> Optional[Path]:
        """Save diagnostics to JSON file.

        Returns:
            Path to saved file, or None if disabled/empty
        """
        if not self.enabled or not self.entries:
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        room_slug = self.room_id.replace("/", "_") or "unknown"
        output_path = self.output_dir / f"match_{room_slug}_{timestamp}{suffix}.json"

        with open(output_path, "w") as f:
            json.dump({
                "metadata": self._metadata,
                "summary": self._compute_summary(),
                "entries": self.entries,
            }, f, indent=2)

        module_logger.info(f"Match diagnostics saved: {output_path}")
        return output_path

    def _compute_summary(self) -> dict:
        results = [e for e in self.entries if e["event"] == "challenge_finalized"]
        return {
            "challenges_finalized": len(results),
            "votes": sum(1 for e in self.entries if e["event"] == "vote"),
            "errors": sum(1 for e in self.entries if e["event"] == "error"),
            "coins_total": results[-1]["coins_total"] if results else 0,
            "gifts_total": results[-1]["gifts_total"] if results else 0,
        }
