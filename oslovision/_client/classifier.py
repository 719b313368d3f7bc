"""Map an HTTP status code and body to a decoded value or a typed error."""

from __future__ import annotations

import json
from typing import Any

from loguru import logger

from oslovision.exceptions import (
    ApiError,
    AuthenticationError,
    ClientError,
    NotFoundError,
    ServerError,
)

_HTTP_2XX_MIN = 200
_HTTP_2XX_MAX = 300
_HTTP_UNAUTHORIZED = 401
_HTTP_NOT_FOUND = 404
_HTTP_4XX_MIN = 400
_HTTP_4XX_MAX = 500
_HTTP_5XX_MIN = 500
_HTTP_5XX_MAX = 600


def _decode_json(body: bytes | str) -> Any:  # noqa: ANN401
    """Parse a textual body; an empty body decodes to ``None``."""
    text = body.decode("utf-8") if isinstance(body, bytes) else body
    if not text.strip():
        return None
    return json.loads(text)


def _client_error_message(body: object) -> str:
    """Return the server's ``error`` text when the body carries one."""
    parsed = body
    if isinstance(body, (bytes, str)):
        try:
            parsed = _decode_json(body)
        except ValueError:
            return "Client error"
    if not isinstance(parsed, dict) or parsed.get("error") is None:
        return "Client error"
    error = parsed["error"]
    if isinstance(error, str):
        return error
    return json.dumps(error)


def classify_response(status_code: int, body: object) -> Any:  # noqa: ANN401
    """Return the decoded success value or raise the matching ``ApiError``.

    Rules are checked in order and the first match wins:

    * 2xx: textual bodies are parsed as JSON, parsed bodies pass through;
    * 401: ``AuthenticationError``;
    * 404: ``NotFoundError``;
    * other 4xx: ``ClientError`` with the body's ``error`` field if present;
    * 5xx: ``ServerError``;
    * anything else: ``ApiError``.
    """
    logger.trace(f"Classifying HTTP {status_code}")
    if _HTTP_2XX_MIN <= status_code < _HTTP_2XX_MAX:
        if not isinstance(body, (bytes, str)):
            return body
        try:
            return _decode_json(body)
        except ValueError as e:
            # UnicodeDecodeError and JSONDecodeError are both ValueErrors.
            msg = "Invalid JSON in response"
            raise ApiError(msg, status_code=status_code) from e
    if status_code == _HTTP_UNAUTHORIZED:
        raise AuthenticationError("Invalid API token", status_code=status_code)
    if status_code == _HTTP_NOT_FOUND:
        raise NotFoundError("Resource not found", status_code=status_code)
    if _HTTP_4XX_MIN <= status_code < _HTTP_4XX_MAX:
        message = _client_error_message(body)
        logger.debug(f"HTTP {status_code}: {message}")
        raise ClientError(message, status_code=status_code)
    if _HTTP_5XX_MIN <= status_code < _HTTP_5XX_MAX:
        raise ServerError("Server error occurred", status_code=status_code)
    raise ApiError(f"Unexpected response code: {status_code}", status_code=status_code)
