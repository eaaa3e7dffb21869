"""
Bounded retry helper.

Used by the admin connect path (per request) and by background tasks such
as metrics registration that must keep trying until the cluster is up.
"""

import logging
import time
from typing import Callable, Tuple, Type, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


def retry(
    attempts: int,
    delay_seconds: float,
    work: Callable[[], T],
    description: str,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
) -> T:
    """
    Run work until it succeeds or the attempt budget is spent.

    Args:
        attempts: Maximum number of calls to work (at least one call is made)
        delay_seconds: Constant pause between failed attempts
        work: Zero-argument callable; returning means success
        description: Used in log messages
        retry_on: Exception types that count as a failed attempt

    Returns:
        Whatever the first successful call returned

    Raises:
        The exception from the last attempt once the budget is exhausted
    """
    attempts = max(1, int(attempts))

    for attempt in range(1, attempts + 1):
        try:
            result = work()
        except retry_on as e:
            logger.warning(f"{description} failed (attempt {attempt}/{attempts}): {e}")
            if attempt == attempts:
                logger.error(f"{description} giving up after {attempts} attempts")
                raise
            if delay_seconds > 0:
                time.sleep(delay_seconds)
            continue

        if attempt > 1:
            logger.info(f"{description} succeeded on attempt {attempt}/{attempts}")
        return result
