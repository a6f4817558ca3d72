"""Participant role normalization.

Lobby input may arrive in any casing or as a loose synonym. The canonical
form is the lowercase ``Role`` value: chef, contestant, judge, spectator,
unassigned.
"""

from typing import Optional

from vicarious_chef.models.participant import Role

# Roles offered when joining a room
JOINABLE_ROLES = frozenset({Role.CHEF, Role.CONTESTANT, Role.JUDGE, Role.SPECTATOR})

ROLE_ALIASES: dict[str, str] = {
    # Chef variations
    "chef": "chef",
    "chefs": "chef",
    "head chef": "chef",
    "guide": "chef",

    # Contestant variations
    "contestant": "contestant",
    "contestants": "contestant",
    "cook": "contestant",
    "player": "contestant",

    # Judge variations
    "judge": "judge",
    "judges": "judge",
    "juror": "judge",

    # Spectator variations
    "spectator": "spectator",
    "spectators": "spectator",
    "viewer": "spectator",
    "audience": "spectator",

    # Not yet chosen
    "unassigned": "unassigned",
    "none": "unassigned",
    "": "unassigned",
}


def normalize_role(role: Optional[str]) -> Optional[Role]:
    """Normalize a role string to a ``Role``.

    Args:
        role: Role string in any known format (e.g., "Chef", "JUDGES", "viewer")

    Returns:
        The matching Role, or None if the input is None or unknown

    Examples:
        >>> normalize_role("Chef")
        <Role.CHEF: 'chef'>
        >>> normalize_role("audience")
        <Role.SPECTATOR: 'spectator'>
    """
    if role is None:
        return None
    if isinstance(role, Role):
        return role

    canonical = ROLE_ALIASES.get(role.strip().lower())
    if canonical is None:
        return None
    return Role(canonical)


def normalize_role_strict(role: str) -> Role:
    """Normalize a role string, raising ValueError if unknown."""
    normalized = normalize_role(role)
    if normalized is None:
        raise ValueError(f"Unknown role: {role}")
    return normalized


def is_valid_role(role: Optional[str]) -> bool:
    return normalize_role(role) is not None
