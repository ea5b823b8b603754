r"""Request descriptors passed to ``StackClient``.

A descriptor bundles everything about a call except its method and URL:
extra headers, query parameters, accepted statuses, the request body and
the slot receiving the decoded response. There is one descriptor type per
payload kind, so a JSON call cannot carry a binary destination and the
other way round.
"""

from __future__ import annotations

__all__ = ["BinaryRequestData", "Headers", "JsonRequestData", "Params", "RequestData"]

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    import httpx

Headers = Mapping[str, Union[str, Sequence[str]]]
Params = Union[Mapping[str, Union[str, Sequence[str]]], Sequence[tuple[str, str]]]


@dataclass
class JsonRequestData:
    r"""Descriptor of a JSON-bodied request.

    Args:
        headers: Extra request headers. A sequence value adds one header
            line per item.
        params: Query parameters, as a mapping (a sequence value repeats
            the key) or as a sequence of ``(key, value)`` pairs.
        expected_status: The accepted response statuses. Empty means
            ``200`` only.
        value: The value to send as the JSON body, or ``None`` for no body.
        response_type: The type the response body is decoded into, for
            example a pydantic model, a dataclass or ``dict[str, Any]``.
            ``None`` means the response body is not decoded.

    Attributes:
        response_value: The decoded response, set by
            ``StackClient.json_request``. It stays ``None`` when the
            response body is empty or ``response_type`` is ``None``.
        response_headers: The headers of the accepted response.

    Example:
        ```pycon
        >>> from stackrest import JsonRequestData
        >>> data = JsonRequestData(value={"name": "web"}, expected_status=(200, 202))
        >>> data.response_value is None
        True

        ```
    """

    headers: Headers | None = None
    params: Params | None = None
    expected_status: Sequence[int] = ()
    value: Any = None
    response_type: Any = None
    response_value: Any = field(default=None, init=False)
    response_headers: httpx.Headers | None = field(default=None, init=False)


@dataclass
class BinaryRequestData:
    r"""Descriptor of a request with a raw byte body.

    Args:
        headers: Extra request headers. A sequence value adds one header
            line per item.
        params: Query parameters, as a mapping (a sequence value repeats
            the key) or as a sequence of ``(key, value)`` pairs.
        expected_status: The accepted response statuses. Empty means
            ``200`` only.
        data: The bytes to send, or ``None`` for no body.

    Attributes:
        response_data: The raw response body, set by
            ``StackClient.binary_request`` when it is not empty.
        response_headers: The headers of the accepted response.
    """

    headers: Headers | None = None
    params: Params | None = None
    expected_status: Sequence[int] = ()
    data: bytes | None = None
    response_data: bytes | None = field(default=None, init=False)
    response_headers: httpx.Headers | None = field(default=None, init=False)


RequestData = Union[JsonRequestData, BinaryRequestData]
