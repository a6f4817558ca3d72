"""Tests for MatchLogger diagnostics."""

import json

import pytest

from vicarious_chef.models.session import ChallengeResult
from vicarious_chef.services.match_logger import MatchLogger


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    monkeypatch.delenv("MATCH_DIAGNOSTICS", raising=False)


def _result() -> ChallengeResult:
    return ChallengeResult(
        challenge_id="c1",
        score_a=200,
        score_b=0,
        coins_awarded=20,
        gifts_awarded=1,
        winner="A",
        reason="forced",
    )


class TestMatchLogger:
    def test_disabled_logger_records_nothing(self, tmp_path):
        match_logger = MatchLogger(output_dir=tmp_path)
        match_logger.start_session("KITCHEN-101", False, "Team Basil", "Team Thyme")
        match_logger.log_vote("A", {"taste": 5}, {"taste": 5})

        assert match_logger.entries == []
        assert match_logger.save() is None

    def test_env_var_enables(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MATCH_DIAGNOSTICS", "true")
        assert MatchLogger(output_dir=tmp_path).enabled is True

    def test_env_var_disables(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MATCH_DIAGNOSTICS", "false")
        assert MatchLogger(output_dir=tmp_path, enabled=True).enabled is False

    def test_save_writes_summary(self, tmp_path):
        match_logger = MatchLogger(output_dir=tmp_path, enabled=True)
        match_logger.start_session("KITCHEN-101", True, "Team Basil", "Team Thyme")
        match_logger.log_participant_joined("p1", "Luna", "chef", "A")
        match_logger.log_challenge_started("c1", "Two-Pan Omelet Showdown", 480)
        match_logger.log_vote("A", {"taste": 5}, {"taste": 5})
        match_logger.log_timer_adjusted(-10, 470)
        match_logger.log_result(_result(), coins_total=20, gifts_total=1)

        path = match_logger.save(suffix="_test")

        assert path is not None
        assert path.name.startswith("match_KITCHEN-101_")
        assert path.name.endswith("_test.json")
        data = json.loads(path.read_text())
        assert data["metadata"]["shamony"] is True
        assert data["summary"] == {
            "challenges_finalized": 1,
            "votes": 1,
            "errors": 0,
            "coins_total": 20,
            "gifts_total": 1,
        }
        assert [e["event"] for e in data["entries"]] == [
            "session_start",
            "participant_joined",
            "challenge_started",
            "vote",
            "timer_adjusted",
            "challenge_finalized",
        ]

    def test_log_error(self, tmp_path):
        match_logger = MatchLogger(output_dir=tmp_path, enabled=True)
        match_logger.start_session("R", False, "A", "B")
        match_logger.log_error("boom")
        assert match_logger.entries[-1]["error"] == "boom"
