"""Retry helpers for transient CMS failures."""
from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional, TypeVar

from hotel_content.services.transport import TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_JITTER_SECONDS = 0.1


def backoff_delay(attempt: int, base_delay: float, *, rng: Optional[random.Random] = None) -> float:
    """Delay before retry ``attempt`` (0-based): doubling base plus up to 100ms jitter."""
    jitter = (rng or random).uniform(0, MAX_JITTER_SECONDS)
    return base_delay * (2**attempt) + jitter


async def with_retries(
    operation: Callable[[], Awaitable[T]],
    *,
    retries: int = 2,
    base_delay: float = 0.3,
    label: str = "CMS request",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run ``operation``, retrying only ``TransportError``s marked retryable."""
    attempt = 0
    while True:
        try:
            return await operation()
        except TransportError as exc:
            if not exc.retryable or attempt >= retries:
                raise
            delay = backoff_delay(attempt, base_delay)
            attempt += 1
            logger.warning(
                "%s failed (%s); retrying in %.2fs (attempt %s of %s)",
                label,
                exc,
                delay,
                attempt,
                retries,
            )
            await sleep(delay)
