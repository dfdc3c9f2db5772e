"""Retry logic wrapper with exponential backoff."""

import time
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from newspulse.core.errors import UpstreamError
from newspulse.core.logger import logger

F = TypeVar('F', bound=Callable[..., Any])

def with_retries(max_retries: int = 3, initial_delay: int = 2) -> Callable[[F], F]:
    """
    A decorator that retries a provider call on retryable upstream failures.

    Only :class:`UpstreamError` subclasses flagged ``retryable`` are retried;
    anything else (bad credentials, programming errors) propagates at once.
    A ``RateLimited`` error carrying ``retry_after_seconds`` waits at least
    that long before the next attempt.

    Args:
        max_retries (int): Maximum number of retry attempts.
        initial_delay (int): Initial delay in seconds before the first retry.
                             Subsequent delays double with each attempt.

    Returns:
        Callable: The decorated function.
    """
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except UpstreamError as e:
                    if not e.retryable:
                        raise
                    if attempt == max_retries:
                        logger.error(f"'{func.__name__}' failed after {max_retries} retries: {e}")
                        raise

                    wait = max(delay, getattr(e, "retry_after_seconds", None) or 0)
                    logger.warning(
                        f"'{func.__name__}' failed (attempt {attempt + 1}/{max_retries}): {e}. "
                        f"Retrying in {wait} seconds..."
                    )
                    time.sleep(wait)
                    delay *= 2  # Exponential backoff

            return None  # Should not be reached due to raise
        return cast(F, wrapper)
    return decorator
