r"""Retry strategy for calculating the delay before a retry.

This module provides the RetryStrategy class. The delay comes from the
server's ``Retry-After`` hint when one is present, and from a backoff
strategy otherwise.
"""

from __future__ import annotations

__all__ = ["RetryStrategy"]

import logging
import random
from typing import TYPE_CHECKING

from stackrest.backoff import ExponentialBackoff
from stackrest.core.config import DEFAULT_BACKOFF_FACTOR, DEFAULT_JITTER_FACTOR
from stackrest.utils.retry_after import parse_retry_after

if TYPE_CHECKING:
    import httpx

    from stackrest.backoff import BaseBackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)


class RetryStrategy:
    """Strategy for calculating retry delays with backoff and jitter.

    The delay is calculated as follows:

    1. Use the ``Retry-After`` header of the response if it can be parsed,
       otherwise ``backoff_strategy.calculate(retry)``.
    2. Cap the delay at ``max_wait_time`` if set.
    3. Add a random jitter of up to ``jitter_factor * delay``.

    Args:
        jitter_factor: Factor for adding random jitter to delays.
        backoff_strategy: Backoff strategy used without a server hint.
            Defaults to ``ExponentialBackoff(base_delay=DEFAULT_BACKOFF_FACTOR)``.
        max_wait_time: Optional maximum delay in seconds.

    Example:
        ```pycon
        >>> import httpx
        >>> from stackrest.retry import RetryStrategy
        >>> strategy = RetryStrategy(jitter_factor=0.0)
        >>> strategy.calculate_delay(0), strategy.calculate_delay(1)
        (0.5, 1.0)
        >>> strategy.calculate_delay(0, httpx.Response(429, headers={"Retry-After": "3"}))
        3.0

        ```
    """

    def __init__(
        self,
        jitter_factor: float = DEFAULT_JITTER_FACTOR,
        backoff_strategy: BaseBackoffStrategy | None = None,
        max_wait_time: float | None = None,
    ) -> None:
        self.jitter_factor = jitter_factor
        self.backoff_strategy: BaseBackoffStrategy = (
            backoff_strategy
            if backoff_strategy is not None
            else ExponentialBackoff(base_delay=DEFAULT_BACKOFF_FACTOR)
        )
        self.max_wait_time = max_wait_time

    def calculate_delay(self, retry: int, response: httpx.Response | None = None) -> float:
        """Calculate the delay before the next attempt.

        Args:
            retry: The retry number (0-indexed).
            response: The throttled response, if available.

        Returns:
            The delay in seconds.
        """
        delay: float | None = None
        if response is not None:
            delay = parse_retry_after(response.headers.get("Retry-After"))
        if delay is not None:
            logger.debug(f"Using Retry-After header value: {delay:.2f}s")
        else:
            delay = self.backoff_strategy.calculate(retry)

        if self.max_wait_time is not None and delay > self.max_wait_time:
            logger.debug(f"Capping delay from {delay:.2f}s to {self.max_wait_time:.2f}s")
            delay = self.max_wait_time

        if self.jitter_factor > 0:
            delay += random.uniform(0, self.jitter_factor) * delay  # noqa: S311
        return delay
