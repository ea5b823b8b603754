r"""Backoff strategies used when a throttled response carries no
``Retry-After`` hint.

``ExponentialBackoff`` is the default of ``ClientConfig``.
``ConstantBackoff`` waits the same delay before every retry, and is set
through ``ClientConfig(backoff_strategy=...)``.
"""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "ConstantBackoff", "ExponentialBackoff"]

from stackrest.backoff.base import BaseBackoffStrategy
from stackrest.backoff.constant import ConstantBackoff
from stackrest.backoff.exponential import ExponentialBackoff
