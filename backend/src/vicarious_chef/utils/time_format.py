"""Countdown display helpers."""


def format_time(total_seconds: int) -> str:
    """Format seconds as ``m:ss`` (e.g. 480 -> "8:00", 65 -> "1:05")."""
    total_seconds = max(0, int(total_seconds))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"
