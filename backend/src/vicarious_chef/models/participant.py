"""Participant and role models."""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Roles a participant can take in a room."""

    CHEF = "chef"  # Guides the contestant
    CONTESTANT = "contestant"  # Cooks under chef guidance
    JUDGE = "judge"  # Scores both teams
    SPECTATOR = "spectator"  # Watches and cheers
    UNASSIGNED = "unassigned"  # Signed in, not yet in a room


def make_avatar(name: str) -> str:
    """Two-letter avatar initials for a display name."""
    return name.strip()[:2].upper()


@dataclass
class Participant:
    """A signed-in participant.

    Identity is fixed at sign-in. Role starts unassigned and is set once
    when the participant joins a room.
    """

    id: str
    name: str
    role: Role = Role.UNASSIGNED
    family_mode: bool = True
    avatar: str = ""

    def __post_init__(self):
        if not self.avatar:
            self.avatar = make_avatar(self.name)
