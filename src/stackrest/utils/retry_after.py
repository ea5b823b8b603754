r"""Retry-After header parsing utilities.

This module provides functions for parsing the Retry-After header value
from HTTP responses according to RFC 7231.
"""

from __future__ import annotations

__all__ = ["parse_retry_after"]

import logging
import math
from contextlib import suppress
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(retry_after_header: str | None) -> float | None:
    """Parse the Retry-After header value from an HTTP response.

    Two formats are accepted:

    1. A number of seconds. Fractional values (e.g. ``"0.5"``) are
       accepted because some services send them.
    2. An HTTP-date in RFC 5322 format (e.g. ``"Wed, 21 Oct 2015 07:28:00 GMT"``).

    Args:
        retry_after_header: The value of the Retry-After header, or None
            if the header is not present.

    Returns:
        The number of seconds to wait, or None if the header is absent or
        cannot be parsed. Negative values and dates in the past are
        clamped to 0.0.

    Example:
        ```pycon
        >>> from stackrest.utils import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after("0.25")
        0.25
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("invalid") is None
        True

        ```
    """
    if retry_after_header is None:
        return None

    with suppress(ValueError):
        seconds = float(retry_after_header)
        if math.isfinite(seconds):
            return max(0.0, seconds)
        logger.debug(f"Ignoring non-finite Retry-After header: {retry_after_header!r}")
        return None

    try:
        retry_date: datetime = parsedate_to_datetime(retry_after_header)
        delta_seconds = (retry_date - datetime.now(timezone.utc)).total_seconds()
        return max(0.0, delta_seconds)
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Failed to parse Retry-After header: {retry_after_header!r}")
        return None
