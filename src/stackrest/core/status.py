r"""Response status classification.

This module decides whether a response status is accepted by the caller,
and whether a response is a throttling signal that should be retried.
"""

from __future__ import annotations

__all__ = ["accepts", "is_throttled"]

from typing import TYPE_CHECKING

from stackrest.core.config import ACCEPTED_STATUS_CODES, OVER_LIMIT_STATUS, THROTTLE_STATUS_CODES

if TYPE_CHECKING:
    from collections.abc import Collection

    import httpx


def accepts(status_code: int, allowed: Collection[int] = ()) -> bool:
    """Indicate if a response status is one of the allowed statuses.

    Matching is exact membership. An empty ``allowed`` collection means
    that only ``200 OK`` is accepted.

    Args:
        status_code: The status code of the response.
        allowed: The status codes the caller accepts.

    Returns:
        ``True`` if the status is accepted, otherwise ``False``.

    Example:
        ```pycon
        >>> from stackrest.core.status import accepts
        >>> accepts(200)
        True
        >>> accepts(201)
        False
        >>> accepts(201, allowed=(201, 202))
        True

        ```
    """
    if not allowed:
        allowed = ACCEPTED_STATUS_CODES
    return status_code in allowed


def is_throttled(
    response: httpx.Response,
    throttle_status_codes: Collection[int] = THROTTLE_STATUS_CODES,
) -> bool:
    """Indicate if a response asks the caller to slow down.

    A response is a throttling signal when its status is one of
    ``throttle_status_codes``, or when it is a ``413 Over Limit``
    response carrying a ``Retry-After`` header.

    Args:
        response: The response to classify.
        throttle_status_codes: The statuses that always signal throttling.

    Returns:
        ``True`` if the request should be retried later.

    Example:
        ```pycon
        >>> import httpx
        >>> from stackrest.core.status import is_throttled
        >>> is_throttled(httpx.Response(429))
        True
        >>> is_throttled(httpx.Response(413))
        False
        >>> is_throttled(httpx.Response(413, headers={"Retry-After": "2"}))
        True

        ```
    """
    if response.status_code in throttle_status_codes:
        return True
    return response.status_code == OVER_LIMIT_STATUS and "Retry-After" in response.headers
