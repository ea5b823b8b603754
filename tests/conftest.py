from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import httpx
import pytest

from stackrest import StackClient
from stackrest.core.config import ClientConfig
from tests.helpers import COMPUTE_URL, OBJECT_STORE_URL

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_response() -> httpx.Response:
    """Create a mock httpx.Response for testing."""
    return Mock(spec=httpx.Response, status_code=200, headers=httpx.Headers())


@pytest.fixture
def mock_send(mock_response: httpx.Response) -> Mock:
    """Create a mock function sending a request once."""
    return Mock(return_value=mock_response)


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks."""
    return Mock()


@pytest.fixture
def make_client() -> Generator[Callable[..., StackClient], None, None]:
    """Create ``StackClient`` instances backed by an
    ``httpx.MockTransport``.

    The returned factory takes the transport handler and optional
    ``StackClient`` keyword arguments. Jitter is disabled unless a config
    is given, so the delays are deterministic.
    """
    transports: list[httpx.Client] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> StackClient:
        kwargs.setdefault("endpoints", {"compute": COMPUTE_URL, "object-store": OBJECT_STORE_URL})
        kwargs.setdefault("config", ClientConfig(jitter_factor=0.0))
        transport = httpx.Client(transport=httpx.MockTransport(handler))
        transports.append(transport)
        return StackClient(client=transport, **kwargs)

    yield factory
    for transport in transports:
        transport.close()
