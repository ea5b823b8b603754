r"""Callback types for observing the request lifecycle.

Two hooks are available through ``ClientConfig``:

- ``on_request``: called before each attempt, including retries
- ``on_retry``: called when a throttled response is about to be retried,
  before the wait

Example:
    ```pycon
    >>> from stackrest import StackClient
    >>> from stackrest.callbacks import RetryInfo
    >>> from stackrest.core.config import ClientConfig
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"retry {info.attempt}/{info.max_retries + 1} in {info.wait_time:.1f}s")
    ...
    >>> client = StackClient(config=ClientConfig(on_retry=log_retry))  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = ["RequestInfo", "RetryInfo", "invoke_on_request", "invoke_on_retry"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class RequestInfo:
    """Information passed to the ``on_request`` callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method (e.g., "GET", "PUT").
        attempt: The attempt number (1-indexed). The first attempt is 1.
        max_retries: Maximum number of retries configured.
    """

    url: str
    method: str
    attempt: int
    max_retries: int


@dataclass
class RetryInfo:
    """Information passed to the ``on_retry`` callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method (e.g., "GET", "PUT").
        attempt: The number of the attempt about to be made (1-indexed).
            The first retry is attempt 2.
        max_retries: Maximum number of retries configured.
        wait_time: The delay in seconds before the attempt.
        status_code: The status code of the throttled response.
    """

    url: str
    method: str
    attempt: int
    max_retries: int
    wait_time: float
    status_code: int


def invoke_on_request(
    on_request: Callable[[RequestInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    max_retries: int,
) -> None:
    """Invoke the ``on_request`` callback if provided.

    Args:
        on_request: Optional callback.
        url: The URL being requested.
        method: The HTTP method.
        attempt: The attempt number (1-indexed).
        max_retries: Maximum number of retries.
    """
    if on_request is not None:
        on_request(RequestInfo(url=url, method=method, attempt=attempt, max_retries=max_retries))


def invoke_on_retry(
    on_retry: Callable[[RetryInfo], None] | None,
    *,
    url: str,
    method: str,
    attempt: int,
    max_retries: int,
    wait_time: float,
    status_code: int,
) -> None:
    """Invoke the ``on_retry`` callback if provided.

    Args:
        on_retry: Optional callback.
        url: The URL being requested.
        method: The HTTP method.
        attempt: The number of the upcoming attempt (1-indexed).
        max_retries: Maximum number of retries.
        wait_time: The delay in seconds before the upcoming attempt.
        status_code: The status code of the throttled response.
    """
    if on_retry is not None:
        on_retry(
            RetryInfo(
                url=url,
                method=method,
                attempt=attempt,
                max_retries=max_retries,
                wait_time=wait_time,
                status_code=status_code,
            )
        )
