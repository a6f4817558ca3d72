"""Read-only data sources."""

from vicarious_chef.repositories.challenge_catalog import DEFAULT_CHALLENGES, ChallengeCatalog

__all__ = ["DEFAULT_CHALLENGES", "ChallengeCatalog"]
