r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from stackrest.backoff.base import BaseBackoffStrategy


class ExponentialBackoff(BaseBackoffStrategy):
    """Double the delay before every retry.

    The delay is ``base_delay * (2 ** retry)``, capped at ``max_delay``
    when one is given. This is the strategy used by default.

    Args:
        base_delay: The delay before the first retry, in seconds.
        max_delay: Optional upper bound of the delay, in seconds.

    Example:
        ```pycon
        >>> from stackrest.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=0.5)
        >>> [backoff.calculate(retry) for retry in range(4)]
        [0.5, 1.0, 2.0, 4.0]
        >>> ExponentialBackoff(base_delay=1.0, max_delay=5.0).calculate(10)
        5.0

        ```
    """

    def __init__(self, base_delay: float = 0.5, max_delay: float | None = None) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    def calculate(self, retry: int) -> float:
        delay = self.base_delay * (2**retry)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
