r"""Client sending JSON and binary requests to the services.

``StackClient`` owns the auth token, the transport and the retry
configuration. Its two request methods are the entry points used by the
service operations: ``json_request`` for JSON payloads and
``binary_request`` for raw byte payloads.
"""

from __future__ import annotations

__all__ = ["StackClient"]

import logging
import threading
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from stackrest.core.codec import decode_json, encode_json
from stackrest.core.config import (
    BINARY_CONTENT_TYPE,
    DEFAULT_TIMEOUT,
    JSON_CONTENT_TYPE,
    ClientConfig,
)
from stackrest.core.dispatch import send
from stackrest.core.validation import validate_timeout
from stackrest.exceptions import DecodingError, EncodingError, ServiceNotFoundError
from stackrest.request import BinaryRequestData, JsonRequestData
from stackrest.retry import RetryController

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

    from stackrest.request import RequestData


class StackClient:
    r"""Client for the token-authenticated REST services.

    Every request carries the ``X-Auth-Token`` header when a token is set,
    and is retried transparently while the service answers with a
    throttling response.

    The token is obtained by the caller's authentication flow and can be
    replaced at any time through the ``auth_token`` property. A request
    reads the token once, so all the attempts of one call carry the same
    token.

    Args:
        auth_token: The auth token. An empty string sends no token.
        endpoints: Mapping from a service name (e.g. ``"compute"``,
            ``"object-store"``) to the root URL of that service.
        config: Optional retry configuration. If ``None``, a default
            ClientConfig is used.
        client: Optional httpx.Client used as transport. If ``None``, a new
            client is created with ``timeout`` and closed by ``close()``.
        timeout: Timeout of the client created when ``client`` is ``None``.
        logger: Optional logger receiving the retry diagnostics.

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

    def __init__(
        self,
        *,
        auth_token: str = "",
        endpoints: Mapping[str, str] | None = None,
        config: ClientConfig | None = None,
        client: httpx.Client | None = None,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        logger: logging.Logger | None = None,
    ) -> None:
        validate_timeout(timeout)
        self._config: ClientConfig = config or ClientConfig()
        self._owns_client = client is None
        self._client: httpx.Client = client or httpx.Client(timeout=timeout)
        self._controller = RetryController.from_config(self._config, logger=logger)
        self._token_lock = threading.Lock()
        self._auth_token = auth_token
        self.endpoints: dict[str, str] = dict(endpoints or {})

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(endpoints={self.endpoints}, config={self._config})"

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def auth_token(self) -> str:
        r"""The auth token attached to every request."""
        with self._token_lock:
            return self._auth_token

    @auth_token.setter
    def auth_token(self, token: str) -> None:
        with self._token_lock:
            self._auth_token = token

    @property
    def config(self) -> ClientConfig:
        r"""The retry configuration."""
        return self._config

    def close(self) -> None:
        r"""Close the underlying httpx client if this client created it."""
        if self._owns_client:
            self._client.close()

    def make_service_url(self, service: str, *parts: str) -> str:
        r"""Build the URL of a resource of a service.

        Args:
            service: The service name.
            *parts: The path segments below the service root.

        Returns:
            The resource URL.

        Raises:
            ServiceNotFoundError: If the service has no endpoint.

        Example:
            ```pycon
            >>> from stackrest import StackClient
            >>> client = StackClient(endpoints={"object-store": "https://swift.example.com/v1/"})
            >>> client.make_service_url("object-store", "/photos", "cat.jpg")
            'https://swift.example.com/v1/photos/cat.jpg'
            >>> client.close()

            ```
        """
        try:
            root = self.endpoints[service]
        except KeyError:
            raise ServiceNotFoundError(service) from None
        return "/".join([root.rstrip("/"), *(part.strip("/") for part in parts if part)])

    def send_request(self, method: str, service: str, path: str, data: RequestData) -> Any:
        r"""Send a request to a resource of a service.

        The request is a JSON or a binary request depending on the type of
        ``data``.

        Args:
            method: The HTTP method.
            service: The service name.
            path: The resource path below the service root.
            data: The request descriptor.

        Returns:
            The decoded response (see ``json_request`` and
            ``binary_request``).
        """
        url = self.make_service_url(service, path)
        if isinstance(data, BinaryRequestData):
            return self.binary_request(method, url, data)
        return self.json_request(method, url, data)

    def json_request(self, method: str, url: str, data: JsonRequestData) -> Any:
        r"""Send a request with a JSON payload.

        ``data.value`` is encoded as the request body. When the accepted
        response has a non-empty body and ``data.response_type`` is set,
        the body is decoded into ``data.response_value``.

        Args:
            method: The HTTP method.
            url: The target URL.
            data: The JSON request descriptor, updated in place.

        Returns:
            ``data.response_value``.

        Raises:
            TypeError: If ``data`` is not a ``JsonRequestData``.
            EncodingError: If ``data.value`` cannot be represented as JSON.
            DecodingError: If the response body does not match
                ``data.response_type``.
            StackRestError: For the failures of the dispatcher.
        """
        if not isinstance(data, JsonRequestData):
            msg = f"json_request expects a JsonRequestData, got {type(data).__qualname__}"
            raise TypeError(msg)
        data.response_value = None
        content = None
        if data.value is not None:
            try:
                content = encode_json(data.value)
            except ValueError as exc:
                raise EncodingError(
                    method, url, f"failed marshalling the request body: {exc}"
                ) from exc

        response = self._send(
            method, url, data, content=content, content_type=JSON_CONTENT_TYPE
        )
        data.response_headers = response.headers
        body = response.content
        if body and data.response_type is not None:
            try:
                data.response_value = decode_json(body, data.response_type)
            except ValidationError as exc:
                text = body.decode("utf-8", errors="replace")
                raise DecodingError(
                    method, url, f"failed unmarshaling the response body: {text}", body=body
                ) from exc
        return data.response_value

    def binary_request(self, method: str, url: str, data: BinaryRequestData) -> bytes | None:
        r"""Send a request with a raw byte payload.

        ``data.data`` is sent unchanged. A non-empty body of the accepted
        response is stored verbatim in ``data.response_data``.

        Args:
            method: The HTTP method.
            url: The target URL.
            data: The binary request descriptor, updated in place.

        Returns:
            ``data.response_data``.

        Raises:
            TypeError: If ``data`` is not a ``BinaryRequestData``.
            StackRestError: For the failures of the dispatcher.
        """
        if not isinstance(data, BinaryRequestData):
            msg = f"binary_request expects a BinaryRequestData, got {type(data).__qualname__}"
            raise TypeError(msg)
        data.response_data = None
        response = self._send(
            method, url, data, content=data.data, content_type=BINARY_CONTENT_TYPE
        )
        data.response_headers = response.headers
        if response.content:
            data.response_data = response.content
        return data.response_data

    def _send(
        self,
        method: str,
        url: str,
        data: RequestData,
        *,
        content: bytes | None,
        content_type: str,
    ) -> httpx.Response:
        return send(
            self._client,
            method,
            url,
            controller=self._controller,
            content_type=content_type,
            content=content,
            headers=data.headers,
            params=data.params,
            expected_status=data.expected_status,
            auth_token=self.auth_token,
        )
