r"""Utility functions for response handling: Retry-After header parsing
and error detail extraction."""

from __future__ import annotations

__all__ = ["extract_error_detail", "parse_retry_after"]

from stackrest.utils.error_body import extract_error_detail
from stackrest.utils.retry_after import parse_retry_after
