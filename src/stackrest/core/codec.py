r"""JSON encoding of request values and typed decoding of response
bodies."""

from __future__ import annotations

__all__ = ["decode_json", "encode_json"]

from functools import lru_cache
from typing import Any

import pydantic_core
from pydantic import TypeAdapter


def encode_json(value: Any) -> bytes:
    r"""Encode a value as a JSON document.

    Dicts, lists, scalars, dataclasses and pydantic models are supported.

    Args:
        value: The value to encode.

    Returns:
        The JSON document.

    Raises:
        ValueError: If the value cannot be represented as JSON, for
            example an unsupported object or a non-finite float.

    Example:
        ```pycon
        >>> from stackrest.core.codec import encode_json
        >>> encode_json({"server": {"name": "web", "flavor": 1}})
        b'{"server":{"name":"web","flavor":1}}'

        ```
    """
    document = pydantic_core.to_json(value)
    try:
        pydantic_core.from_json(document, allow_inf_nan=False)
    except ValueError as exc:
        msg = f"value is not representable as JSON (NaN or Infinity are not allowed): {exc}"
        raise ValueError(msg) from exc
    return document


@lru_cache(maxsize=128)
def _cached_type_adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def _type_adapter(response_type: Any) -> TypeAdapter[Any]:
    try:
        return _cached_type_adapter(response_type)
    except TypeError:
        # unhashable type hints cannot be cached
        return TypeAdapter(response_type)


def decode_json(body: bytes, response_type: Any) -> Any:
    r"""Decode a JSON document into a value of the given type.

    Args:
        body: The JSON document.
        response_type: The expected type, for example a pydantic model,
            a dataclass, ``list[str]`` or ``Any``.

    Returns:
        The decoded value.

    Raises:
        pydantic.ValidationError: If the document is not valid JSON or does
            not match ``response_type``.

    Example:
        ```pycon
        >>> from stackrest.core.codec import decode_json
        >>> decode_json(b'{"networks": []}', dict[str, list[str]])
        {'networks': []}

        ```
    """
    return _type_adapter(response_type).validate_json(body)
