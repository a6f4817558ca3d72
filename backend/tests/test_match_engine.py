"""Tests for the match session state machine."""

import pytest

from vicarious_chef.exceptions import (
    ChallengeNotFound,
    InvalidTransition,
    ParticipantNotFound,
    RosterFull,
)
from vicarious_chef.models.challenge import Challenge, ChallengeCategory, SkillTag
from vicarious_chef.models.participant import Participant, Role
from vicarious_chef.models.session import SessionState
from vicarious_chef.models.vote import Vote
from vicarious_chef.repositories.challenge_catalog import ChallengeCatalog
from vicarious_chef.services import match_engine
from vicarious_chef.services.match_engine import MatchEngine, create_session

MAX_VOTE = Vote(taste=5, technique=5, timing=5, presentation=5)


@pytest.fixture
def engine():
    return create_session("KITCHEN-101", shamony=False)


def _scores(engine: MatchEngine) -> tuple[int, int, int, int]:
    return engine.team("A").score, engine.team("B").score, engine.coins, engine.gifts


class TestCreateSession:
    def test_initial_state(self, engine):
        assert engine.state == SessionState.IDLE
        assert engine.active_challenge is None
        assert engine.remaining_seconds == 0
        assert engine.coins == 0
        assert engine.gifts == 0

        team_a, team_b = engine.teams
        assert (team_a.id, team_a.name) == ("A", "Team Basil")
        assert (team_b.id, team_b.name) == ("B", "Team Thyme")
        assert engine.tally("A").total == 0
        assert engine.tally("B").total == 0

    def test_shamony_flag_is_recorded(self):
        engine = create_session("ROOM-2", shamony=True)
        assert engine.shamony is True
        assert engine.room_id == "ROOM-2"


class TestStartChallenge:
    def test_start_sets_timer_and_state(self, engine):
        challenge = engine.start_challenge("c1")
        assert challenge.minutes == 8
        assert engine.state == SessionState.ACTIVE
        assert engine.active_challenge == challenge
        assert engine.remaining_seconds == 480
        assert engine.total_seconds == 480

    def test_start_while_active_is_rejected_without_overwrite(self, engine):
        engine.start_challenge("c1")
        engine.submit_vote("A", MAX_VOTE)
        engine.tick()

        with pytest.raises(InvalidTransition):
            engine.start_challenge("c2")

        assert engine.active_challenge.id == "c1"
        assert engine.tally("A").total == 20
        assert engine.remaining_seconds == 479

    def test_start_resets_tallies(self, engine):
        engine.start_challenge("c1")
        engine.submit_vote("A", MAX_VOTE)
        engine.force_finalize()

        engine.start_challenge("c2")
        assert engine.tally("A").total == 0
        assert engine.tally("B").total == 0
        assert engine.remaining_seconds == 600

    def test_unknown_challenge(self, engine):
        with pytest.raises(ChallengeNotFound):
            engine.start_challenge("nope")
        assert engine.state == SessionState.IDLE

    def test_custom_catalog(self):
        catalog = ChallengeCatalog([
            Challenge(
                id="quick",
                title="Quick Toast",
                category=ChallengeCategory.DISH,
                skill=SkillTag.PREP,
                minutes=1,
                points=10,
            )
        ])
        engine = MatchEngine("R", catalog=catalog)
        engine.start_challenge("quick")
        assert engine.remaining_seconds == 60


class TestSubmitVote:
    def test_vote_while_idle_raises(self, engine):
        """Scenario D: voting with no challenge leaves tallies untouched."""
        with pytest.raises(InvalidTransition):
            engine.submit_vote("A", MAX_VOTE)
        assert engine.tally("A").total == 0
        assert engine.tally("B").total == 0

    def test_eleven_max_votes_clamp_at_fifty(self, engine):
        """Scenario B."""
        engine.start_challenge("c1")
        for _ in range(11):
            engine.submit_vote("A", MAX_VOTE)

        tally = engine.tally("A")
        assert tally.as_dict() == {"taste": 50, "technique": 50, "timing": 50, "presentation": 50}
        assert engine.aggregator.sum("A") == 200
        assert engine.state == SessionState.ACTIVE


class TestAdjustTimer:
    def test_adjust_while_idle_raises(self, engine):
        with pytest.raises(InvalidTransition):
            engine.adjust_timer(10)

    def test_adjust_to_zero_does_not_finalize(self, engine):
        engine.start_challenge("c1")
        remaining = engine.adjust_timer(-1000)

        assert remaining == 0
        assert engine.state == SessionState.ACTIVE
        assert engine.active_challenge is not None

        # The next tick observes expiry
        result = engine.tick()
        assert result is not None
        assert result.reason == "expired"
        assert engine.state == SessionState.IDLE

    def test_adjust_can_exceed_total(self, engine):
        engine.start_challenge("c1")
        assert engine.adjust_timer(10) == 490
        assert engine.total_seconds == 480


class TestTick:
    def test_tick_while_idle_is_ignored(self, engine):
        assert engine.tick() is None
        assert engine.state == SessionState.IDLE
        assert engine.remaining_seconds == 0

    def test_auto_finalize_on_final_tick(self, engine):
        """Scenario A: 480 ticks on an 8-minute challenge with no votes."""
        engine.start_challenge("c1")

        for i in range(479):
            assert engine.tick() is None, f"finalized early on tick {i + 1}"
        assert engine.remaining_seconds == 1
        assert engine.state == SessionState.ACTIVE

        result = engine.tick()
        assert result is not None
        assert result.reason == "expired"
        assert (result.score_a, result.score_b) == (0, 0)
        assert result.winner is None
        assert _scores(engine) == (0, 0, 0, 0)
        assert engine.state == SessionState.IDLE
        assert engine.active_challenge is None
        assert (engine.remaining_seconds, engine.total_seconds) == (0, 0)


class TestFinalize:
    def test_force_finalize_commits_scores_and_rewards(self, engine):
        """Scenario C."""
        engine.start_challenge("c1")
        for _ in range(11):
            engine.submit_vote("A", MAX_VOTE)

        result = engine.force_finalize()

        assert result.reason == "forced"
        assert result.winner == "A"
        assert engine.team("A").score == 200
        assert engine.team("B").score == 0
        assert engine.coins == 20
        assert engine.gifts == 1
        assert engine.state == SessionState.IDLE
        assert engine.history == [result]

    def test_finalize_twice_is_idempotent(self, engine):
        engine.start_challenge("c1")
        engine.submit_vote("A", MAX_VOTE)
        engine.submit_vote("B", Vote(taste=2))
        engine.force_finalize()
        after_first = _scores(engine)

        assert engine.force_finalize() is None
        assert engine.tick() is None
        assert _scores(engine) == after_first
        assert len(engine.history) == 1

    def test_force_finalize_while_idle_is_noop(self, engine):
        assert engine.force_finalize() is None
        assert _scores(engine) == (0, 0, 0, 0)

    def test_team_b_win_awards_no_gift(self, engine):
        engine.start_challenge("c2")
        engine.submit_vote("B", MAX_VOTE)
        result = engine.force_finalize()

        assert result.winner == "B"
        assert engine.team("B").score == 20
        assert engine.coins == 2
        assert engine.gifts == 0

    def test_scores_never_decrease_across_challenges(self, engine):
        votes = [
            (Vote(taste=5), Vote()),
            (Vote(), Vote()),
            (Vote(taste=-3, timing=9), Vote(technique=4)),
            (MAX_VOTE, MAX_VOTE),
        ]
        previous = (0, 0)
        for vote_a, vote_b in votes:
            engine.start_challenge("c3")
            engine.submit_vote("A", vote_a)
            engine.submit_vote("B", vote_b)
            engine.force_finalize()
            current = (engine.team("A").score, engine.team("B").score)
            assert current[0] >= previous[0]
            assert current[1] >= previous[1]
            previous = current

        assert len(engine.history) == 4


class TestJoinParticipant:
    def test_two_chefs_and_a_contestant(self, engine):
        """Scenario E."""
        luna = Participant(id="p1", name="Luna")
        remy = Participant(id="p2", name="Remy")
        alex = Participant(id="p3", name="Alex")

        engine.join_participant(luna, Role.CHEF)
        engine.join_participant(remy, "chef")
        engine.join_participant(alex, Role.CONTESTANT)

        team_a, team_b = engine.teams
        assert [p.id for p in team_a.chefs] == ["p1", "p2"]
        assert [p.id for p in team_b.contestants] == ["p3"]
        assert team_a.contestants == []
        assert team_b.chefs == []
        assert engine.member("p1").role == Role.CHEF
        assert engine.member("p3").role == Role.CONTESTANT

    def test_judge_and_spectator_not_rostered(self, engine):
        judge = Participant(id="j1", name="Judy")
        fan = Participant(id="s1", name="Fan")

        assert engine.join_participant(judge, Role.JUDGE) is None
        assert engine.join_participant(fan, "audience") is None
        assert all(team.size == 0 for team in engine.teams)
        assert set(engine.session.participants) == {"j1", "s1"}
        assert engine.member("s1").role == Role.SPECTATOR

    def test_duplicate_join_is_ignored(self, engine):
        luna = Participant(id="p1", name="Luna")
        engine.join_participant(luna, Role.CHEF)
        team = engine.join_participant(luna, Role.CONTESTANT)

        assert team is engine.team("A")
        assert len(engine.team("A").chefs) == 1
        assert engine.team("B").contestants == []
        assert engine.member("p1").role == Role.CHEF

    def test_unknown_role(self, engine):
        with pytest.raises(ValueError):
            engine.join_participant(Participant(id="p1", name="Luna"), "sous-vide")

    @pytest.mark.parametrize("role", ["", "none", "unassigned", Role.UNASSIGNED])
    def test_unassigned_role_rejected(self, engine, role):
        """Joining without picking a role does not block a later real join."""
        luna = Participant(id="p1", name="Luna")
        with pytest.raises(ValueError):
            engine.join_participant(luna, role)
        assert "p1" not in engine.session.participants

        team = engine.join_participant(luna, "chef")
        assert team is engine.team("A")
        assert [p.id for p in team.chefs] == ["p1"]
        assert engine.member("p1").role == Role.CHEF

    def test_joining_another_room_keeps_role(self):
        luna = Participant(id="p1", name="Luna")
        kitchen = MatchEngine("X")
        pantry = MatchEngine("Y")

        kitchen.join_participant(luna, Role.CHEF)
        pantry.join_participant(luna, Role.JUDGE)

        assert kitchen.team("A").chefs[0].role == Role.CHEF
        assert kitchen.member("p1").role == Role.CHEF
        assert pantry.member("p1").role == Role.JUDGE
        assert luna.role == Role.UNASSIGNED

    def test_member_not_joined(self, engine):
        with pytest.raises(ParticipantNotFound):
            engine.member("ghost")

    def test_roster_limit(self):
        engine = MatchEngine("R", max_team_size=1)
        engine.join_participant(Participant(id="p1", name="Luna"), Role.CHEF)
        with pytest.raises(RosterFull):
            engine.join_participant(Participant(id="p2", name="Remy"), Role.CHEF)
        assert "p2" not in engine.session.participants

    def test_join_during_active_challenge(self, engine):
        engine.start_challenge("c1")
        engine.join_participant(Participant(id="p1", name="Luna"), Role.CHEF)
        assert engine.state == SessionState.ACTIVE
        assert len(engine.team("A").chefs) == 1


class TestCheer:
    def test_cheers_counted_and_reset(self, engine):
        engine.start_challenge("c1")
        engine.cheer("A")
        assert engine.cheer("A") == 2
        assert engine.cheer("B") == 1
        engine.force_finalize()

        engine.start_challenge("c2")
        assert engine.session.cheers == {"A": 0, "B": 0}

    def test_cheers_do_not_affect_rewards(self, engine):
        engine.start_challenge("c1")
        for _ in range(10):
            engine.cheer("A")
        result = engine.force_finalize()
        assert result.score_a == 0
        assert engine.gifts == 0

    def test_cheer_while_idle_raises(self, engine):
        with pytest.raises(InvalidTransition):
            engine.cheer("A")

    def test_cheer_unknown_team(self, engine):
        engine.start_challenge("c1")
        with pytest.raises(ValueError):
            engine.cheer("C")
        assert engine.session.cheers == {"A": 0, "B": 0}


class TestSnapshot:
    def test_snapshot_is_a_copy(self, engine):
        engine.join_participant(Participant(id="p1", name="Luna"), Role.CHEF)
        engine.start_challenge("c1")
        engine.submit_vote("A", Vote(taste=4))
        snapshot = engine.snapshot()

        engine.submit_vote("A", Vote(taste=4))
        engine.tick()

        assert snapshot.state == SessionState.ACTIVE
        assert snapshot.tallies["A"].taste == 4
        assert snapshot.remaining_seconds == 480
        assert snapshot.progress_percent == 100.0
        assert snapshot.total_score == 0
        assert [p.name for p in snapshot.team_a.chefs] == ["Luna"]
        assert engine.tally("A").taste == 8


class TestOperationSurface:
    def test_module_functions_drive_the_engine(self):
        session = match_engine.create_session("KITCHEN-101", False)
        match_engine.join_participant(session, Participant(id="p1", name="Luna"), "chef")
        match_engine.start_challenge(session, "c1")
        match_engine.submit_vote(session, "A", MAX_VOTE)
        match_engine.adjust_timer(session, -470)
        for _ in range(10):
            match_engine.tick(session)

        assert session.state == SessionState.IDLE
        assert session.team("A").score == 20
        assert session.coins == 2
        assert session.gifts == 1

        match_engine.force_finalize(session)
        assert session.coins == 2
