r"""Integration tests of the request pipeline.

The tests drive a real ``httpx.Client`` over an ``httpx.MockTransport``,
so every layer from the descriptor to the wire is exercised without
network access.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from unittest.mock import Mock, call

import httpx
import pytest
from coola.equality import objects_are_equal

from stackrest import (
    BinaryRequestData,
    ClientConfig,
    ErrorResponse,
    JsonRequestData,
    StackClient,
    UnexpectedStatusError,
)
from stackrest.backoff import ConstantBackoff
from tests.helpers import COMPUTE_URL, RecordingHandler, error_envelope, throttled

if TYPE_CHECKING:
    from collections.abc import Callable

SERVERS_URL = f"{COMPUTE_URL}/servers"


def echo(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        headers={"Content-Type": request.headers["Content-Type"]},
        content=request.read(),
    )


###########################################
#     Tests for the accepted statuses     #
###########################################


def test_default_accepts_only_ok(make_client: Callable[..., StackClient]) -> None:
    client = make_client(RecordingHandler([httpx.Response(200, json={})]))
    client.json_request("GET", SERVERS_URL, JsonRequestData())


def test_default_rejects_created(make_client: Callable[..., StackClient]) -> None:
    client = make_client(RecordingHandler([httpx.Response(201, json={})]))
    with pytest.raises(UnexpectedStatusError, match=r"201 Created") as exc_info:
        client.json_request("GET", SERVERS_URL, JsonRequestData())
    assert exc_info.value.status_code == 201


def test_explicit_statuses_replace_default(make_client: Callable[..., StackClient]) -> None:
    client = make_client(RecordingHandler([httpx.Response(200)]))
    with pytest.raises(UnexpectedStatusError):
        client.json_request("GET", SERVERS_URL, JsonRequestData(expected_status=(201, 202)))


###################################
#     Tests for the JSON path     #
###################################


@pytest.mark.parametrize(
    "value",
    [
        {},
        {"server": {"name": "web", "metadata": {"tier": "front"}, "ports": [80, 443]}},
        {"nested": {"list": [{"a": None}, {"b": [1.5, True, "x"]}]}},
    ],
)
def test_json_round_trip(make_client: Callable[..., StackClient], value: dict[str, Any]) -> None:
    client = make_client(echo)
    data = JsonRequestData(value=value, response_type=dict[str, Any])
    client.json_request("PUT", SERVERS_URL, data)
    assert objects_are_equal(data.response_value, value)


#####################################
#     Tests for the binary path     #
#####################################


@pytest.mark.parametrize("payload", [b"\x00", bytes(range(256)), b"\xff" * 4096 + b"\x00\r\n"])
def test_binary_byte_identity(make_client: Callable[..., StackClient], payload: bytes) -> None:
    client = make_client(echo)
    data = BinaryRequestData(data=payload)
    client.binary_request("PUT", f"{COMPUTE_URL}/blob", data)
    assert data.response_data == payload


################################
#     Tests for throttling     #
################################


@pytest.mark.parametrize("k", [1, 2])
def test_throttled_then_success(
    make_client: Callable[..., StackClient],
    mock_sleep: Mock,
    caplog: pytest.LogCaptureFixture,
    k: int,
) -> None:
    handler = RecordingHandler([*[throttled("1")] * k, httpx.Response(200, json={"ok": True})])
    client = make_client(handler)
    data = JsonRequestData(response_type=dict[str, bool])
    with caplog.at_level(logging.WARNING):
        client.json_request("GET", SERVERS_URL, data)

    assert data.response_value == {"ok": True}
    assert handler.call_count == k + 1
    assert mock_sleep.call_args_list == [call(1.0)] * k
    assert [record.getMessage() for record in caplog.records] == [
        "Too many requests, retrying in 1000ms."
    ] * k


def test_throttled_with_default_delay(
    make_client: Callable[..., StackClient], mock_sleep: Mock
) -> None:
    handler = RecordingHandler([throttled(), throttled(), httpx.Response(200)])
    make_client(handler).json_request("GET", SERVERS_URL, JsonRequestData())
    assert mock_sleep.call_args_list == [call(0.5), call(1.0)]


def test_constant_backoff_paces_retries(
    make_client: Callable[..., StackClient], mock_sleep: Mock
) -> None:
    handler = RecordingHandler([throttled(), throttled(), httpx.Response(200)])
    config = ClientConfig(backoff_strategy=ConstantBackoff(delay=2.0), jitter_factor=0.0)
    make_client(handler, config=config).json_request("GET", SERVERS_URL, JsonRequestData())
    assert mock_sleep.call_args_list == [call(2.0), call(2.0)]


def test_over_limit_with_retry_after_is_retried(
    make_client: Callable[..., StackClient], mock_sleep: Mock
) -> None:
    handler = RecordingHandler(
        [httpx.Response(413, headers={"Retry-After": "2"}), httpx.Response(200)]
    )
    make_client(handler).json_request("POST", SERVERS_URL, JsonRequestData())
    assert handler.call_count == 2
    mock_sleep.assert_called_once_with(2.0)


def test_always_throttled_fails_after_ceiling(
    make_client: Callable[..., StackClient], mock_sleep: Mock
) -> None:
    handler = RecordingHandler([throttled("0")])
    client = make_client(handler)
    with pytest.raises(UnexpectedStatusError, match=r"429 Too Many Requests") as exc_info:
        client.json_request("GET", SERVERS_URL, JsonRequestData())
    assert exc_info.value.status_code == 429
    assert handler.call_count == 3
    assert mock_sleep.call_count == 2


def test_custom_ceiling(make_client: Callable[..., StackClient], mock_sleep: Mock) -> None:
    handler = RecordingHandler([throttled("0")])
    client = make_client(handler, config=ClientConfig(max_retries=0, jitter_factor=0.0))
    with pytest.raises(UnexpectedStatusError):
        client.json_request("GET", SERVERS_URL, JsonRequestData())
    assert handler.call_count == 1
    mock_sleep.assert_not_called()


def test_retry_resends_body(make_client: Callable[..., StackClient], mock_sleep: Mock) -> None:
    handler = RecordingHandler([throttled("0"), httpx.Response(202)])
    client = make_client(handler)
    client.json_request(
        "POST", SERVERS_URL, JsonRequestData(value={"name": "web"}, expected_status=(202,))
    )
    assert [request.content for request in handler.requests] == [b'{"name":"web"}'] * 2


######################################
#     Tests for the error detail     #
######################################


def test_structured_error_detail(make_client: Callable[..., StackClient]) -> None:
    handler = RecordingHandler(
        [
            httpx.Response(
                413,
                headers={"Content-Type": "application/json"},
                content=error_envelope("quota exceeded", 413, "Over Limit"),
            )
        ]
    )
    client = make_client(handler)
    with pytest.raises(UnexpectedStatusError) as exc_info:
        client.json_request("POST", SERVERS_URL, JsonRequestData(value={"name": "web"}))
    err = exc_info.value
    assert err.error_response == ErrorResponse(
        message="quota exceeded", code=413, title="Over Limit"
    )
    assert "error info: Failed: 413 Over Limit: quota exceeded" in str(err)
    assert 'request body: {"name":"web"}' in str(err)
    assert handler.call_count == 1


def test_raw_error_detail(make_client: Callable[..., StackClient]) -> None:
    handler = RecordingHandler(
        [httpx.Response(400, headers={"Content-Type": "text/plain"}, content=b"boom")]
    )
    client = make_client(handler)
    with pytest.raises(UnexpectedStatusError) as exc_info:
        client.json_request("GET", SERVERS_URL, JsonRequestData())
    assert exc_info.value.detail == b"boom"
    assert exc_info.value.error_response is None


####################################
#     Tests for the auth token     #
####################################


def test_token_on_every_attempt(make_client: Callable[..., StackClient], mock_sleep: Mock) -> None:
    handler = RecordingHandler([throttled("0"), throttled("0"), httpx.Response(200)])
    client = make_client(handler, auth_token="secret")
    client.json_request("GET", SERVERS_URL, JsonRequestData())
    assert [request.headers.get_list("X-Auth-Token") for request in handler.requests] == [
        ["secret"]
    ] * 3


def test_no_token_when_empty(make_client: Callable[..., StackClient]) -> None:
    handler = RecordingHandler([httpx.Response(200)])
    make_client(handler).json_request("GET", SERVERS_URL, JsonRequestData())
    assert "X-Auth-Token" not in handler.requests[0].headers


def test_token_update_applies_to_next_request(make_client: Callable[..., StackClient]) -> None:
    handler = RecordingHandler([httpx.Response(200)])
    client = make_client(handler, auth_token="first")
    client.json_request("GET", SERVERS_URL, JsonRequestData())
    client.auth_token = "second"
    client.json_request("GET", SERVERS_URL, JsonRequestData())
    assert [request.headers["X-Auth-Token"] for request in handler.requests] == [
        "first",
        "second",
    ]
