r"""Exceptions raised by the request pipeline.

Every failure that crosses the library boundary is a ``StackRestError``.
The error carries the method and the URL of the request that failed, and
the underlying exception (if any) is chained as ``__cause__`` so no
information is discarded.
"""

from __future__ import annotations

__all__ = [
    "DecodingError",
    "EncodingError",
    "ErrorResponse",
    "RequestConstructionError",
    "ServiceNotFoundError",
    "StackRestError",
    "TransportError",
    "UnexpectedStatusError",
]

from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    import httpx


class ErrorResponse(BaseModel):
    r"""Structured error returned by the service in a JSON envelope.

    The wire shape is ``{"error": {"message": ..., "code": ..., "title": ...}}``;
    this model holds the inner object.

    Example:
        ```pycon
        >>> from stackrest.exceptions import ErrorResponse
        >>> err = ErrorResponse(message="quota exceeded", code=413, title="Over Limit")
        >>> str(err)
        'Failed: 413 Over Limit: quota exceeded'

        ```
    """

    message: str
    code: int
    title: str

    def __str__(self) -> str:
        return f"Failed: {self.code} {self.title}: {self.message}"


class StackRestError(RuntimeError):
    r"""Base class of the errors raised by the request pipeline.

    Args:
        method: The HTTP method of the failed request.
        url: The URL of the failed request.
        message: A short description of the failure.

    Example:
        ```pycon
        >>> from stackrest.exceptions import StackRestError
        >>> err = StackRestError("GET", "https://example.com", "failed executing the request")
        >>> err.method, err.url
        ('GET', 'https://example.com')

        ```
    """

    def __init__(self, method: str, url: str, message: str) -> None:
        super().__init__(message)
        self.method = method
        self.url = url


class RequestConstructionError(StackRestError):
    r"""Raised when the outgoing request cannot be built (bad method or
    URL)."""


class EncodingError(StackRestError):
    r"""Raised when the request value cannot be represented as JSON."""


class TransportError(StackRestError):
    r"""Raised when the transport fails to execute the request.

    Connection failures, DNS failures, timeouts and response bodies whose
    content encoding cannot be decoded end up here. A
    throttling response is a valid HTTP response and is never reported
    with this class.
    """


class DecodingError(StackRestError):
    r"""Raised when a successful response body does not match the
    requested destination type.

    Args:
        method: The HTTP method of the request.
        url: The URL of the request.
        message: A short description of the failure.
        body: The raw response body that could not be decoded.
    """

    def __init__(self, method: str, url: str, message: str, body: bytes) -> None:
        super().__init__(method, url, message)
        self.body = body


class UnexpectedStatusError(StackRestError):
    r"""Raised when the response status is not one of the accepted
    statuses.

    Args:
        method: The HTTP method of the request.
        url: The URL of the request.
        status_code: The status code of the response.
        status_line: The status line of the response, for example
            ``"404 Not Found"``.
        detail: The structured error when the body held a JSON error
            envelope, otherwise the raw response body.
        payload: A copy of the outgoing request body.
        response: The response object, if available.

    Example:
        ```pycon
        >>> from stackrest.exceptions import UnexpectedStatusError
        >>> err = UnexpectedStatusError(
        ...     method="GET",
        ...     url="https://example.com/servers",
        ...     status_code=500,
        ...     status_line="500 Internal Server Error",
        ...     detail=b"boom",
        ...     payload=b"",
        ... )
        >>> str(err)
        "request (https://example.com/servers) returned unexpected status: 500 Internal Server Error; error info: b'boom'; request body: "
        >>> err.error_response is None
        True

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        status_code: int,
        status_line: str,
        detail: ErrorResponse | bytes,
        payload: bytes,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(
            method,
            url,
            f"request ({url}) returned unexpected status: {status_line}; "
            f"error info: {detail}; request body: {payload.decode('utf-8', errors='replace')}",
        )
        self.status_code = status_code
        self.status_line = status_line
        self.detail = detail
        self.payload = payload
        self.response = response

    @property
    def error_response(self) -> ErrorResponse | None:
        r"""The structured error, or ``None`` if the body was not a JSON
        error envelope."""
        if isinstance(self.detail, ErrorResponse):
            return self.detail
        return None


class ServiceNotFoundError(LookupError):
    r"""Raised when a service name has no endpoint in the client's
    catalog.

    Args:
        service: The unknown service name.
    """

    def __init__(self, service: str) -> None:
        super().__init__(f"no endpoint registered for service {service!r}")
        self.service = service
