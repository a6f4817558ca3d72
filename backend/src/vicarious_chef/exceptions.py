"""Engine exceptions.

All errors are local and recoverable: callers re-check state and retry or
ignore. Out-of-range numeric input is clamped, never raised.
"""


class VicariousChefError(Exception):
    """Base class for all match engine errors."""


class InvalidTransition(VicariousChefError):
    """Operation is not permitted in the session's current state."""

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while session is {state}")


class ChallengeNotFound(VicariousChefError):
    """Challenge id is not in the catalog."""

    def __init__(self, challenge_id: str):
        self.challenge_id = challenge_id
        super().__init__(f"Challenge {challenge_id} not found")


class SessionNotFound(VicariousChefError):
    """No session exists for the room."""

    def __init__(self, room_id: str):
        self.room_id = room_id
        super().__init__(f"Session for room {room_id} not found")


class ParticipantNotFound(VicariousChefError):
    """Participant id was never registered."""

    def __init__(self, participant_id: str):
        self.participant_id = participant_id
        super().__init__(f"Participant {participant_id} not found")


class RosterFull(VicariousChefError):
    """Team has reached the configured maximum size."""

    def __init__(self, team_id: str, limit: int):
        self.team_id = team_id
        self.limit = limit
        super().__init__(f"Team {team_id} is full ({limit} members)")
