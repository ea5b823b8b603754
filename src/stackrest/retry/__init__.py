r"""Retry package: the controller re-issuing throttled requests and the
strategy computing the delay between attempts."""

from __future__ import annotations

__all__ = ["RetryController", "RetryState", "RetryStrategy"]

from stackrest.retry.controller import RetryController, RetryState
from stackrest.retry.strategy import RetryStrategy
