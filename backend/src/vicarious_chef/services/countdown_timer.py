"""Countdown clock for the active challenge."""


class CountdownTimer:
    """Remaining/total seconds for one challenge.

    The timer does not schedule itself. The host calls ``tick()`` once per
    second while a challenge is running, and the session observes
    ``is_expired()`` right after each tick.
    """

    def __init__(self):
        self.remaining = 0
        self.total = 0
        self.running = False

    def start(self, duration_seconds: int) -> None:
        """Begin a countdown of ``duration_seconds``."""
        duration = max(0, int(duration_seconds))
        self.remaining = duration
        self.total = duration
        self.running = True

    def tick(self) -> None:
        """Advance one second, floored at 0."""
        if not self.running:
            return
        self.remaining = max(0, self.remaining - 1)

    def adjust(self, delta_seconds: int) -> None:
        """Add or remove time. Floored at 0; no upper bound."""
        if not self.running:
            return
        self.remaining = max(0, self.remaining + int(delta_seconds))

    def is_expired(self) -> bool:
        return self.running and self.remaining == 0

    def reset(self) -> None:
        """Stop and zero the clock."""
        self.remaining = 0
        self.total = 0
        self.running = False

    def progress_percent(self) -> float:
        """Remaining time as a percentage of the original duration.

        Exceeds 100 after time has been added past the original duration.
        """
        if self.total <= 0:
            return 0.0
        return self.remaining / self.total * 100
