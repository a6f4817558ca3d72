"""Utility modules for vicarious_chef."""

from vicarious_chef.utils.role_normalizer import (
    JOINABLE_ROLES,
    ROLE_ALIASES,
    normalize_role,
    normalize_role_strict,
    is_valid_role,
)
from vicarious_chef.utils.time_format import format_time

__all__ = [
    "JOINABLE_ROLES",
    "ROLE_ALIASES",
    "normalize_role",
    "normalize_role_strict",
    "is_valid_role",
    "format_time",
]
