"""
Retry helper for fallible async operations.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    retries: int = 2,
    delay: float = 1.0,
    backoff: float = 1.5,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    name: str = "operation",
) -> T:
    """
    Run ``operation`` until it succeeds or the retry budget is spent.

    After each failure the wrapper waits ``delay`` seconds, multiplies the
    delay by ``backoff`` and tries again. Once no retries remain the last
    failure is raised unchanged.

    Args:
        operation: Zero-argument coroutine factory to invoke
        retries: Number of retries after the first attempt
        delay: Seconds to wait before the first retry
        backoff: Growth factor applied to the delay after each wait
        sleep: Awaitable sleep function
        name: Label used in log messages

    Returns:
        The value returned by the first successful attempt
    """
    if retries < 0:
        raise ValueError("retries must be >= 0")
    if backoff < 1:
        raise ValueError("backoff must be >= 1")

    attempt = 1
    while True:
        try:
            return await operation()
        except Exception as e:
            if retries <= 0:
                logger.error(f"{name} failed after {attempt} attempt(s): {e}")
                raise

            logger.warning(
                f"{name} failed (attempt {attempt}): {e} - retrying in {delay:.2f}s"
            )
            await sleep(delay)
            delay *= backoff
            retries -= 1
            attempt += 1
