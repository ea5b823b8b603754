r"""Retry controller re-issuing throttled requests.

The controller runs a sequential retry loop with three states:

- ATTEMPTING: the request is sent
- WAITING: the response was a throttling signal and attempts remain; the
  controller sleeps for the server-suggested or computed delay
- RESOLVED: the response is not a throttling signal, or the attempt
  ceiling is reached; the response is handed back to the caller

A throttled response returned at the ceiling is not an error for the
controller: the caller classifies it like any other response.
"""

from __future__ import annotations

__all__ = ["RetryController", "RetryState"]

import logging
import time
from enum import Enum
from typing import TYPE_CHECKING

from stackrest.callbacks import invoke_on_request, invoke_on_retry
from stackrest.core.config import DEFAULT_MAX_RETRIES, THROTTLE_STATUS_CODES
from stackrest.core.status import is_throttled
from stackrest.core.validation import validate_retry_params, validate_throttle_status_codes
from stackrest.retry.strategy import RetryStrategy

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from stackrest.callbacks import RequestInfo, RetryInfo
    from stackrest.core.config import ClientConfig


class RetryState(Enum):
    """States of one retry loop.

    Attributes:
        ATTEMPTING: The request is being sent.
        WAITING: Waiting before re-sending a throttled request.
        RESOLVED: The loop is over and a response is returned.
    """

    ATTEMPTING = "attempting"
    WAITING = "waiting"
    RESOLVED = "resolved"


class RetryController:
    r"""Send a request and transparently retry it while it is
    throttled.

    The controller holds no per-call state, so one instance can be shared
    by concurrent callers.

    Args:
        max_retries: Maximum number of retries. The request is sent at most
            ``max_retries + 1`` times.
        strategy: The strategy computing the delay before each retry.
        throttle_status_codes: The statuses that always signal throttling.
        logger: The logger receiving the retry diagnostics. Defaults to
            this module's logger.
        on_request: Optional callback called before each attempt.
        on_retry: Optional callback called before each wait.

    Example:
        ```pycon
        >>> import httpx
        >>> from stackrest.retry import RetryController
        >>> controller = RetryController(max_retries=2)
        >>> response = controller.execute(
        ...     lambda: httpx.Response(200), url="https://example.com", method="GET"
        ... )
        >>> response.status_code
        200

        ```
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        strategy: RetryStrategy | None = None,
        throttle_status_codes: tuple[int, ...] = THROTTLE_STATUS_CODES,
        logger: logging.Logger | None = None,
        on_request: Callable[[RequestInfo], None] | None = None,
        on_retry: Callable[[RetryInfo], None] | None = None,
    ) -> None:
        validate_retry_params(max_retries=max_retries)
        validate_throttle_status_codes(throttle_status_codes)
        self.max_retries = max_retries
        self.strategy = strategy if strategy is not None else RetryStrategy()
        self.throttle_status_codes = throttle_status_codes
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.on_request = on_request
        self.on_retry = on_retry

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(max_retries={self.max_retries}, "
            f"throttle_status_codes={self.throttle_status_codes})"
        )

    @classmethod
    def from_config(
        cls, config: ClientConfig, logger: logging.Logger | None = None
    ) -> RetryController:
        """Create a controller from a client configuration.

        Args:
            config: The client configuration.
            logger: Optional logger receiving the retry diagnostics.

        Returns:
            The retry controller.
        """
        return cls(
            max_retries=config.max_retries,
            strategy=RetryStrategy(
                jitter_factor=config.jitter_factor,
                backoff_strategy=config.backoff_strategy,
                max_wait_time=config.max_wait_time,
            ),
            throttle_status_codes=config.throttle_status_codes,
            logger=logger,
            on_request=config.on_request,
            on_retry=config.on_retry,
        )

    def execute(
        self, send: Callable[[], httpx.Response], *, url: str, method: str
    ) -> httpx.Response:
        """Send a request until it is not throttled or the ceiling is
        reached.

        Args:
            send: A function sending the request once and returning the
                response. Exceptions raised by ``send`` are propagated
                without retry.
            url: The requested URL, for diagnostics.
            method: The HTTP method, for diagnostics.

        Returns:
            The last response received.
        """
        max_attempts = self.max_retries + 1
        attempt = 1
        while True:
            self._log_state(RetryState.ATTEMPTING, url, method, attempt, max_attempts)
            invoke_on_request(
                self.on_request,
                url=url,
                method=method,
                attempt=attempt,
                max_retries=self.max_retries,
            )
            response = send()
            if attempt >= max_attempts or not is_throttled(response, self.throttle_status_codes):
                self._log_state(RetryState.RESOLVED, url, method, attempt, max_attempts)
                return response

            self._log_state(RetryState.WAITING, url, method, attempt, max_attempts)
            delay = self.strategy.calculate_delay(attempt - 1, response)
            self.logger.warning(f"Too many requests, retrying in {int(delay * 1000)}ms.")
            invoke_on_retry(
                self.on_retry,
                url=url,
                method=method,
                attempt=attempt + 1,
                max_retries=self.max_retries,
                wait_time=delay,
                status_code=response.status_code,
            )
            response.close()
            time.sleep(delay)
            attempt += 1

    def _log_state(
        self, state: RetryState, url: str, method: str, attempt: int, max_attempts: int
    ) -> None:
        self.logger.debug(
            f"{method} request to {url}: {state.value} (attempt {attempt}/{max_attempts})"
        )
