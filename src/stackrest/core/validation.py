r"""Parameter validation utilities for the request pipeline.

This module provides validation functions for the timeout and retry
parameters, so that invalid values fail when the client is configured
rather than in the middle of a request.
"""

from __future__ import annotations

__all__ = ["validate_retry_params", "validate_throttle_status_codes", "validate_timeout"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from stackrest.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_params(
    max_retries: int,
    jitter_factor: float = 0.0,
    max_wait_time: float | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Maximum number of retries after the first attempt.
            Must be >= 0. A value of 0 disables retries.
        jitter_factor: Factor for adding random jitter to retry delays.
            Must be >= 0.
        max_wait_time: Maximum delay between two attempts, in seconds.
            Must be > 0 if provided.

    Raises:
        ValueError: If one of the parameters is out of range.

    Example:
        ```pycon
        >>> from stackrest.core.validation import validate_retry_params
        >>> validate_retry_params(max_retries=2)
        >>> validate_retry_params(max_retries=2, jitter_factor=0.1, max_wait_time=5.0)
        >>> validate_retry_params(max_retries=-1)
        Traceback (most recent call last):
        ...
        ValueError: max_retries must be >= 0, got -1

        ```
    """
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if jitter_factor < 0:
        msg = f"jitter_factor must be >= 0, got {jitter_factor}"
        raise ValueError(msg)
    if max_wait_time is not None and max_wait_time <= 0:
        msg = f"max_wait_time must be > 0, got {max_wait_time}"
        raise ValueError(msg)


def validate_throttle_status_codes(status_codes: tuple[int, ...]) -> None:
    """Validate the status codes treated as throttling signals.

    Args:
        status_codes: The status codes to validate. Only 4xx and 5xx
            codes can signal throttling.

    Raises:
        ValueError: If a status code is not an error status.

    Example:
        ```pycon
        >>> from stackrest.core.validation import validate_throttle_status_codes
        >>> validate_throttle_status_codes((429, 503))
        >>> validate_throttle_status_codes((200,))
        Traceback (most recent call last):
        ...
        ValueError: throttle status codes must be in [400, 600), got 200

        ```
    """
    for status_code in status_codes:
        if not 400 <= status_code < 600:
            msg = f"throttle status codes must be in [400, 600), got {status_code}"
            raise ValueError(msg)
