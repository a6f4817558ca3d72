"""Vicarious Chef: live cooking game show match engine."""

__version__ = "0.1.0"
