r"""Configuration dataclass and defaults for ``StackClient``.

This module provides the constants shared by the request pipeline and a
dataclass-based configuration object for the retry behavior of a
``StackClient``.
"""

from __future__ import annotations

__all__ = [
    "ACCEPTED_STATUS_CODES",
    "AUTH_TOKEN_HEADER",
    "BINARY_CONTENT_TYPE",
    "ClientConfig",
    "DEFAULT_BACKOFF_FACTOR",
    "DEFAULT_JITTER_FACTOR",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "JSON_CONTENT_TYPE",
    "OVER_LIMIT_STATUS",
    "THROTTLE_STATUS_CODES",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from stackrest.core.validation import validate_retry_params, validate_throttle_status_codes

if TYPE_CHECKING:
    from collections.abc import Callable

    from stackrest.backoff import BaseBackoffStrategy
    from stackrest.callbacks import RequestInfo, RetryInfo


# Default timeout in seconds used when StackClient builds its own httpx.Client
DEFAULT_TIMEOUT = 10.0

# Default number of retries of a throttled request
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 2

# Default delay before the first retry when the server gives no Retry-After
# Wait time = backoff_factor * (2 ** retry)
DEFAULT_BACKOFF_FACTOR = 0.5

# Default jitter: up to 10% is added to each computed delay
DEFAULT_JITTER_FACTOR = 0.1

# Status codes accepted when a request does not list any
ACCEPTED_STATUS_CODES = (200,)

# HTTP status codes that always signal throttling
# 429: Too Many Requests
THROTTLE_STATUS_CODES = (429,)

# 413 Over Limit is the compute API's rate-limit answer when it comes with a
# Retry-After header, and a plain "request too large" error without one
OVER_LIMIT_STATUS = 413

AUTH_TOKEN_HEADER = "X-Auth-Token"
JSON_CONTENT_TYPE = "application/json"
BINARY_CONTENT_TYPE = "application/octet-stream"


@dataclass
class ClientConfig:
    """Configuration for the retry behavior of a ``StackClient``.

    Note:
        The timeout is not part of this config: it belongs to the
        ``httpx.Client`` used as transport.

    Args:
        max_retries: Maximum number of retries of a throttled request.
            Must be >= 0.
        backoff_strategy: Strategy computing the delay when the server does
            not send a ``Retry-After`` header. Defaults to
            ``ExponentialBackoff(base_delay=DEFAULT_BACKOFF_FACTOR)``. Use
            ``ConstantBackoff`` to pace the retries evenly, for example
            against a service whose rate limit refills at a fixed rate.
        jitter_factor: Factor for adding random jitter to delays. Must be >= 0.
        max_wait_time: Optional cap of a single delay in seconds. Must be > 0
            if provided.
        throttle_status_codes: Status codes that always signal throttling.
        on_request: Optional callback called before each attempt.
        on_retry: Optional callback called before waiting for a retry.

    Example:
        ```pycon
        >>> from stackrest.core.config import ClientConfig
        >>> config = ClientConfig()
        >>> config.max_retries
        2
        >>> config.merge(max_retries=5).max_retries
        5
        >>> config.max_retries
        2
        >>> from stackrest.backoff import ConstantBackoff
        >>> ClientConfig(backoff_strategy=ConstantBackoff(delay=1.0)).backoff_strategy
        ConstantBackoff(delay=1.0)

        ```
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_strategy: BaseBackoffStrategy | None = None
    jitter_factor: float = DEFAULT_JITTER_FACTOR
    max_wait_time: float | None = None
    throttle_status_codes: tuple[int, ...] = field(default_factory=lambda: THROTTLE_STATUS_CODES)
    on_request: Callable[[RequestInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_retry_params(
            max_retries=self.max_retries,
            jitter_factor=self.jitter_factor,
            max_wait_time=self.max_wait_time,
        )
        validate_throttle_status_codes(self.throttle_status_codes)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied; the current instance
        is left unchanged.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
