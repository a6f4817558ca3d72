"""Registry of signed-in participants."""

import logging
import uuid

from vicarious_chef.exceptions import ParticipantNotFound
from vicarious_chef.models.participant import Participant

logger = logging.getLogger(__name__)


class ParticipantRegistry:
    """In-memory participants created at sign-in.

    Owned by the hosting application (one per app), never a module global.
    """

    def __init__(self):
        self.participants: dict[str, Participant] = {}

    def register(self, name: str, family_mode: bool = True) -> Participant:
        """Create a participant from the sign-in form.

        Args:
            name: Display name; surrounding whitespace is stripped
            family_mode: Family Mode preference

        Returns:
            The new, unassigned participant

        Raises:
            ValueError: If the name is blank
        """
        display_name = name.strip()
        if not display_name:
            raise ValueError("Display name is required")

        participant = Participant(
            id=uuid.uuid4().hex[:12],
            name=display_name,
            family_mode=family_mode,
        )
        self.participants[participant.id] = participant
        logger.info(f"Registered participant {participant.id} ({display_name})")
        return participant

    def get(self, participant_id: str) -> Participant:
        """Look up a participant.

        Raises:
            ParticipantNotFound: If the id was never registered
        """
        participant = self.participants.get(participant_id)
        if participant is None:
            raise ParticipantNotFound(participant_id)
        return participant

    def remove(self, participant_id: str) -> None:
        """Forget a participant (sign-out)."""
        self.participants.pop(participant_id, None)
