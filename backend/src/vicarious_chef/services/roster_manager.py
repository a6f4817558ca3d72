"""Team roster assignment by role."""

import logging
from typing import Optional

from vicarious_chef.exceptions import RosterFull
from vicarious_chef.models.participant import Participant, Role
from vicarious_chef.models.team import Team

logger = logging.getLogger(__name__)


class RosterManager:
    """Places joining participants onto the two fixed teams.

    Chefs always go to team A and contestants to team B. Judges, spectators
    and unassigned participants act on the whole session and are not rostered.
    """

    def __init__(self, team_a: Team, team_b: Team, max_team_size: Optional[int] = None):
        self.team_a = team_a
        self.team_b = team_b
        self.max_team_size = max_team_size

    def assign(self, participant: Participant, role: Role) -> Optional[Team]:
        """Roster a participant according to role.

        Args:
            participant: The joining participant
            role: Role chosen in the lobby

        Returns:
            The team the participant joined, or None for unrostered roles

        Raises:
            RosterFull: If a team size limit is configured and reached
        """
        if role == Role.CHEF:
            team, members = self.team_a, self.team_a.chefs
        elif role == Role.CONTESTANT:
            team, members = self.team_b, self.team_b.contestants
        else:
            return None

        if self.max_team_size is not None and team.size >= self.max_team_size:
            raise RosterFull(team.id, self.max_team_size)

        members.append(participant)
        logger.debug(f"Rostered {participant.name} as {role.value} on team {team.id}")
        return team

    def find_team(self, participant_id: str) -> Optional[Team]:
        """Team a participant is rostered on, if any."""
        for team in (self.team_a, self.team_b):
            if any(p.id == participant_id for p in team.members):
                return team
        return None
