r"""stackrest - HTTP request pipeline for token-authenticated REST
services.

This package provides the shared request machinery of an OpenStack-style
client: requests are authenticated with an ``X-Auth-Token`` header,
transparently retried while the service throttles, checked against the
accepted statuses, and their bodies are decoded into typed destinations.

Key Features:
    - JSON and raw byte requests described by ``JsonRequestData`` and
      ``BinaryRequestData``
    - Bounded retries of throttled requests (429, or 413 with
      ``Retry-After``)
    - ``Retry-After`` header support (both seconds and HTTP-date formats)
    - Structured service errors decoded from ``{"error": {...}}`` bodies
    - Object storage and compute service operations

Example:
    ```pycon
    >>> from stackrest import JsonRequestData, StackClient
    >>> with StackClient(
    ...     auth_token="secret",
    ...     endpoints={"compute": "https://compute.example.com/v2/tenant"},
    ... ) as client:  # doctest: +SKIP
    ...     data = JsonRequestData(response_type=dict)
    ...     client.send_request("GET", "compute", "os-networks", data)
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "BinaryRequestData",
    "ClientConfig",
    "DecodingError",
    "EncodingError",
    "ErrorResponse",
    "JsonRequestData",
    "RequestConstructionError",
    "RequestData",
    "ServiceNotFoundError",
    "StackClient",
    "StackRestError",
    "TransportError",
    "UnexpectedStatusError",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from stackrest.client import StackClient
from stackrest.core.config import ClientConfig
from stackrest.exceptions import (
    DecodingError,
    EncodingError,
    ErrorResponse,
    RequestConstructionError,
    ServiceNotFoundError,
    StackRestError,
    TransportError,
    UnexpectedStatusError,
)
from stackrest.request import BinaryRequestData, JsonRequestData, RequestData

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
