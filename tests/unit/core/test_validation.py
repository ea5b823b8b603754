r"""Unit tests for the parameter validation utilities."""

from __future__ import annotations

import httpx
import pytest

from stackrest.core.validation import (
    validate_retry_params,
    validate_throttle_status_codes,
    validate_timeout,
)

######################################
#     Tests for validate_timeout     #
######################################


@pytest.mark.parametrize("timeout", [0.1, 1, 10.0, httpx.Timeout(5.0)])
def test_validate_timeout_valid(timeout: float | httpx.Timeout) -> None:
    validate_timeout(timeout)


@pytest.mark.parametrize("timeout", [0, 0.0, -1, -0.5])
def test_validate_timeout_invalid(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        validate_timeout(timeout)


###########################################
#     Tests for validate_retry_params     #
###########################################


@pytest.mark.parametrize("max_retries", [0, 1, 2, 10])
def test_validate_retry_params_max_retries(max_retries: int) -> None:
    validate_retry_params(max_retries=max_retries)


def test_validate_retry_params_negative_max_retries() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0, got -1"):
        validate_retry_params(max_retries=-1)


def test_validate_retry_params_negative_jitter_factor() -> None:
    with pytest.raises(ValueError, match=r"jitter_factor must be >= 0, got -0.1"):
        validate_retry_params(max_retries=2, jitter_factor=-0.1)


@pytest.mark.parametrize("max_wait_time", [0, -1.0])
def test_validate_retry_params_invalid_max_wait_time(max_wait_time: float) -> None:
    with pytest.raises(ValueError, match=r"max_wait_time must be > 0"):
        validate_retry_params(max_retries=2, max_wait_time=max_wait_time)


def test_validate_retry_params_all_valid() -> None:
    validate_retry_params(max_retries=3, jitter_factor=0.5, max_wait_time=30.0)


####################################################
#     Tests for validate_throttle_status_codes     #
####################################################


@pytest.mark.parametrize("status_codes", [(), (429,), (429, 503), (400, 599)])
def test_validate_throttle_status_codes_valid(status_codes: tuple[int, ...]) -> None:
    validate_throttle_status_codes(status_codes)


@pytest.mark.parametrize("status_code", [200, 204, 302, 399, 600])
def test_validate_throttle_status_codes_invalid(status_code: int) -> None:
    with pytest.raises(ValueError, match=r"throttle status codes must be in \[400, 600\)"):
        validate_throttle_status_codes((429, status_code))
