r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

import math

from stackrest.backoff.base import BaseBackoffStrategy


class ConstantBackoff(BaseBackoffStrategy):
    """Pace the retries of a throttled request evenly.

    Services whose rate limit refills at a fixed rate gain nothing from a
    growing delay: one refill period before every retry is enough.

    Args:
        delay: The wait before every retry, in seconds. Must be finite
            and non-negative.

    Example:
        ```pycon
        >>> from stackrest.backoff import ConstantBackoff
        >>> from stackrest.core.config import ClientConfig
        >>> config = ClientConfig(backoff_strategy=ConstantBackoff(delay=2.5))
        >>> [config.backoff_strategy.calculate(retry) for retry in range(3)]
        [2.5, 2.5, 2.5]

        ```
    """

    def __init__(self, delay: float = 1.0) -> None:
        if not math.isfinite(delay) or delay < 0:
            msg = f"delay must be a finite non-negative number, got {delay}"
            raise ValueError(msg)
        self.delay = float(delay)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, retry: int) -> float:  # noqa: ARG002
        return self.delay
