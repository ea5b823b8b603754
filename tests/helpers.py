r"""Shared test helpers for the request pipeline tests.

``RecordingHandler`` plays a scripted sequence of responses through an
``httpx.MockTransport`` and records every request it receives.
"""

from __future__ import annotations

__all__ = [
    "COMPUTE_URL",
    "OBJECT_STORE_URL",
    "RecordingHandler",
    "error_envelope",
    "throttled",
]

import json
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Iterable

COMPUTE_URL = "https://compute.example.com/v2/tenant"
OBJECT_STORE_URL = "https://swift.example.com/v1/AUTH_tenant"


class RecordingHandler:
    """Transport handler replaying scripted responses.

    The last response is repeated once the script is exhausted.

    Args:
        responses: The responses returned to the successive requests.
    """

    def __init__(self, responses: Iterable[httpx.Response]) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        scripted = self.responses[min(len(self.requests), len(self.responses)) - 1]
        return httpx.Response(
            scripted.status_code, headers=scripted.headers, content=scripted.content
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)


def throttled(retry_after: str | None = None) -> httpx.Response:
    """Create a ``429 Too Many Requests`` response."""
    headers = {"Retry-After": retry_after} if retry_after is not None else {}
    return httpx.Response(429, headers=headers)


def error_envelope(message: str, code: int, title: str) -> bytes:
    """Encode a service error envelope."""
    return json.dumps({"error": {"message": message, "code": code, "title": title}}).encode()
