r"""Core logic of the request pipeline: configuration, validation,
status classification, JSON codec and the request dispatcher."""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "THROTTLE_STATUS_CODES",
    "ClientConfig",
    "accepts",
    "is_throttled",
    "validate_retry_params",
    "validate_timeout",
]

from stackrest.core.config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    THROTTLE_STATUS_CODES,
    ClientConfig,
)
from stackrest.core.status import accepts, is_throttled
from stackrest.core.validation import validate_retry_params, validate_timeout
