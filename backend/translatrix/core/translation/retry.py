"""Exponential backoff around a single provider call.

Built on tenacity. A falsy result counts as a failed attempt just like a
raised exception; the difference only shows once attempts run out, where an
exception is re-raised and an empty result becomes None.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_empty(result: Any) -> bool:
    return not result


def _give_up(retry_state: RetryCallState) -> Any:
    """Re-raise the final exception, or return None after an empty final result."""
    outcome = retry_state.outcome
    if outcome is not None and outcome.failed:
        return outcome.result()
    return None


async def retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 2.0,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> Optional[T]:
    """Run ``operation`` until it returns something truthy.

    Delays between attempts are ``base_delay * 2 ** (attempt - 1)`` seconds.

    Args:
        operation: Zero-argument factory returning a fresh awaitable per attempt
        max_attempts: Total attempts, including the first
        base_delay: Delay in seconds before the first retry
        sleep: Awaitable sleep function

    Returns:
        The first truthy result, or None if every attempt produced a falsy one

    Raises:
        Exception: Whatever the last attempt raised, if it raised
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=base_delay, exp_base=2),
        retry=retry_if_exception_type(Exception) | retry_if_result(_is_empty),
        sleep=sleep,
        before_sleep=before_sleep_log(logger, logging.WARNING),
        retry_error_callback=_give_up,
    )

    async def attempt():
        return await operation()

    return await retrying(attempt)
