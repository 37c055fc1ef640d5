"""Retry-until-result utilities."""

import logging
from typing import Callable, TypeVar

from web_processor.core.clock import Clock
from web_processor.core.config import DEFAULT_POLL_INTERVAL
from web_processor.core.exceptions import RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def retry_until_not_none(
    action: Callable[[], T | None],
    timeout: float,
    clock: Clock | None = None,
    interval: float = DEFAULT_POLL_INTERVAL,
    retryable_exceptions: tuple[type[Exception], ...] = (Exception,),
    on_retry: Callable[[int, Exception | None], None] | None = None,
) -> T:
    """Call an action until it returns something other than None.

    The action is always called at least once. When it raises or returns
    None, one poll interval is waited unless the deadline has already
    passed. Once the deadline has passed, the raw exception from the last
    attempt is re-raised rather than wrapped, so the root cause stays
    visible to the caller.

    Args:
        action: Function to execute
        timeout: Total budget in seconds, measured from the first call
        clock: Time source (a real clock if not provided)
        interval: Delay between attempts
        retryable_exceptions: Exception types that trigger another attempt
        on_retry: Optional callback called before each retry with (attempt, exception)

    Returns:
        First non-None result from the action

    Raises:
        RetryExhaustedError: If the action only ever returned None
        Exception: The last exception raised by the action once the deadline passed
    """
    clock = clock or Clock()
    deadline = clock.deadline(timeout)
    attempt = 0

    while True:
        attempt += 1
        try:
            result = action()
        except retryable_exceptions as e:
            if not deadline.expired():
                clock.sleep(interval)
            if deadline.expired():
                logger.warning(f"Giving up after {attempt} attempts: {e}")
                raise
            logger.debug(f"Attempt {attempt} failed: {e}. Retrying...")
            if on_retry:
                on_retry(attempt, e)
            continue

        if result is not None:
            return result

        if not deadline.expired():
            clock.sleep(interval)
        if deadline.expired():
            logger.warning(f"No result after {attempt} attempts")
            raise RetryExhaustedError(attempts=attempt)
        if on_retry:
            on_retry(attempt, None)
