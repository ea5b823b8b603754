r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod
from typing import Any


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy returns the delay to wait before the next attempt
    when the server did not suggest one. Two strategies of the same type
    and parameters compare equal, so two ``ClientConfig`` holding them do
    too.
    """

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(vars(self).items()))))

    @abstractmethod
    def calculate(self, retry: int) -> float:
        """Calculate the delay before a retry.

        Args:
            retry: The retry number (0-indexed). ``retry=0`` is the delay
                between the first and the second attempt.

        Returns:
            The delay in seconds.
        """
