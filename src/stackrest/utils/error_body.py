r"""Extraction of the error detail from a failed response.

Services report failures with a JSON envelope of the shape
``{"error": {"message": ..., "code": ..., "title": ...}}``. Anything else
is reported verbatim.
"""

from __future__ import annotations

__all__ = ["extract_error_detail"]

import logging

from pydantic import BaseModel, ValidationError

from stackrest.core.config import JSON_CONTENT_TYPE
from stackrest.exceptions import ErrorResponse

logger: logging.Logger = logging.getLogger(__name__)


class _ErrorEnvelope(BaseModel):
    error: ErrorResponse


def _media_type(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def extract_error_detail(body: bytes, content_type: str | None) -> ErrorResponse | bytes:
    """Extract the error detail from the body of a failed response.

    This function never raises: when the body is not a JSON error
    envelope, the raw body is returned unchanged.

    Args:
        body: The raw response body.
        content_type: The ``Content-Type`` header of the response, or None.

    Returns:
        The structured error if the response declares JSON content and
        the body matches the error envelope with the exact JSON types
        (``code`` must be a number), otherwise the raw body.

    Example:
        ```pycon
        >>> from stackrest.utils import extract_error_detail
        >>> extract_error_detail(
        ...     b'{"error": {"message": "quota exceeded", "code": 413, "title": "Over Limit"}}',
        ...     "application/json",
        ... )
        ErrorResponse(message='quota exceeded', code=413, title='Over Limit')
        >>> extract_error_detail(b"boom", "text/plain")
        b'boom'

        ```
    """
    if _media_type(content_type) != JSON_CONTENT_TYPE:
        return body
    try:
        return _ErrorEnvelope.model_validate_json(body, strict=True).error
    except ValidationError as exc:
        logger.debug(f"Response body is not a JSON error envelope: {exc.error_count()} error(s)")
        return body
