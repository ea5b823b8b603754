r"""Request dispatcher shared by the JSON and binary requests.

``send`` builds the outgoing request, injects the auth token, runs it
through the retry controller and validates the response status. It knows
nothing about the payload kind beyond the content type and the encoded
body it receives.
"""

from __future__ import annotations

__all__ = ["build_headers", "send"]

import logging
import re
from typing import TYPE_CHECKING

import httpx

from stackrest.core.config import AUTH_TOKEN_HEADER
from stackrest.core.status import accepts
from stackrest.exceptions import RequestConstructionError, TransportError, UnexpectedStatusError
from stackrest.utils.error_body import extract_error_detail

if TYPE_CHECKING:
    from collections.abc import Collection

    from stackrest.request import Headers, Params
    from stackrest.retry import RetryController

logger: logging.Logger = logging.getLogger(__name__)

# RFC 7230 token
_METHOD_PATTERN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def build_headers(
    content_type: str, headers: Headers | None = None, auth_token: str = ""
) -> list[tuple[str, str]]:
    r"""Build the header lines of an outgoing request.

    The ``Content-Type`` and ``Accept`` headers come first, then the
    caller's headers, then the auth token. When a token is set, it
    replaces any ``X-Auth-Token`` header given by the caller.

    Args:
        content_type: The media type of the payload kind.
        headers: Extra headers. A sequence value adds one line per item.
        auth_token: The auth token, or an empty string for no token.

    Returns:
        The header lines, in order.

    Example:
        ```pycon
        >>> from stackrest.core.dispatch import build_headers
        >>> build_headers("application/json", {"X-Trace": ["a", "b"]}, auth_token="tok")
        [('Content-Type', 'application/json'), ('Accept', 'application/json'), ('X-Trace', 'a'), ('X-Trace', 'b'), ('X-Auth-Token', 'tok')]

        ```
    """
    lines = [("Content-Type", content_type), ("Accept", content_type)]
    for name, values in (headers or {}).items():
        if auth_token and name.lower() == AUTH_TOKEN_HEADER.lower():
            continue
        if isinstance(values, str):
            lines.append((name, values))
        else:
            lines.extend((name, value) for value in values)
    if auth_token:
        lines.append((AUTH_TOKEN_HEADER, auth_token))
    return lines


def _build_request(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    content: bytes | None,
    headers: list[tuple[str, str]],
    params: Params | None,
) -> httpx.Request:
    if not _METHOD_PATTERN.fullmatch(method):
        raise RequestConstructionError(
            method, url, f"failed creating the request: invalid method {method!r}"
        )
    try:
        request = client.build_request(
            method.upper(), url, content=content, headers=headers, params=params or None
        )
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise RequestConstructionError(
            method, url, f"failed creating the request: {exc}"
        ) from exc
    if request.url.scheme not in ("http", "https") or not request.url.host:
        raise RequestConstructionError(
            method, url, f"failed creating the request: invalid URL {url!r}"
        )
    return request


def send(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    controller: RetryController,
    content_type: str,
    content: bytes | None = None,
    headers: Headers | None = None,
    params: Params | None = None,
    expected_status: Collection[int] = (),
    auth_token: str = "",
) -> httpx.Response:
    r"""Send a request and return the accepted response.

    Args:
        client: The httpx client used as transport.
        method: The HTTP method.
        url: The target URL, without the query parameters.
        controller: The retry controller handling throttled responses.
        content_type: The media type set in ``Content-Type`` and ``Accept``.
        content: The encoded request body, or ``None`` for no body.
        headers: Extra request headers.
        params: Query parameters appended to the URL.
        expected_status: The accepted statuses. Empty means ``200`` only.
        auth_token: The auth token, or an empty string for no token.

    Returns:
        The accepted response. Its body is fully read and the
        underlying stream is closed.

    Raises:
        RequestConstructionError: If the method or URL is invalid.
        TransportError: If the request cannot be executed or the response
            body cannot be read or decoded (e.g. a corrupt
            ``Content-Encoding``).
        UnexpectedStatusError: If the final response status is not accepted.
    """
    request = _build_request(
        client,
        method,
        url,
        content=content,
        headers=build_headers(content_type, headers, auth_token),
        params=params,
    )
    request_url = str(request.url)
    logger.debug(f"Sending {request.method} request to {request_url}")
    try:
        response = controller.execute(
            lambda: client.send(request, stream=True), url=request_url, method=request.method
        )
    except httpx.RequestError as exc:
        raise TransportError(
            request.method, request_url, f"failed executing the request: {exc}"
        ) from exc

    try:
        body = response.read()
    except httpx.RequestError as exc:
        raise TransportError(
            request.method, request_url, f"failed reading the response body: {exc}"
        ) from exc
    finally:
        response.close()

    if not accepts(response.status_code, expected_status):
        detail = extract_error_detail(body, response.headers.get("Content-Type"))
        logger.debug(
            f"{request.method} request to {request_url} failed with status {response.status_code}"
        )
        raise UnexpectedStatusError(
            method=request.method,
            url=request_url,
            status_code=response.status_code,
            status_line=f"{response.status_code} {response.reason_phrase}",
            detail=detail,
            payload=content or b"",
            response=response,
        )
    return response
