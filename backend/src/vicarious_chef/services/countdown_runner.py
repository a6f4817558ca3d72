"""Host-owned 1 Hz tick source for an active challenge."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from vicarious_chef.models.session import ChallengeResult
from vicarious_chef.services.match_engine import MatchEngine

logger = logging.getLogger(__name__)

ResultCallback = Callable[[ChallengeResult], Awaitable[None] | None]


async def run_countdown(
    engine: MatchEngine,
    interval_seconds: float = 1.0,
    on_result: Optional[ResultCallback] = None,
) -> Optional[ChallengeResult]:
    """Tick the engine once per interval until the challenge finalizes.

    The loop exits as soon as the session is no longer ACTIVE, whether the
    timer expired on one of our ticks or the challenge was force-finalized
    in between.

    Args:
        engine: Session to drive
        interval_seconds: Delay between ticks
        on_result: Optional callback (sync or async) for the expiry result

    Returns:
        The result if a tick from this loop finalized the challenge, else None
    """
    while engine.is_active:
        await asyncio.sleep(interval_seconds)
        # The challenge may have been finalized while we slept
        if not engine.is_active:
            break

        result = engine.tick()
        if result is not None:
            logger.info(f"Room {engine.room_id}: countdown expired for {result.challenge_id}")
            if on_result is not None:
                maybe_awaitable = on_result(result)
                if asyncio.iscoroutine(maybe_awaitable):
                    await maybe_awaitable
            return result

    return None
