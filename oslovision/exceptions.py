"""Custom exception hierarchy for oslovision.

All library-specific exceptions inherit from ``OsloVisionError`` so consumers
can catch ``except OsloVisionError`` to handle any oslovision failure.
Errors derived from an HTTP response inherit from ``ApiError``.
"""

from __future__ import annotations

from pathlib import Path


class OsloVisionError(Exception):
    """Base exception for all oslovision errors."""


class ConfigError(OsloVisionError):
    """Raised when the client configuration is incomplete."""


class InteractiveModeRequiredError(OsloVisionError):
    """Raised when interactive input is needed but disabled."""


class InvalidArgumentError(OsloVisionError, ValueError):
    """Raised when a call receives an argument it cannot send."""


class TransportError(OsloVisionError):
    """Raised when the HTTP exchange itself fails (DNS, TLS, timeout)."""


class ApiError(OsloVisionError):
    """Raised when the API answers with a non-success status code."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Store the HTTP status code alongside the message."""
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(ApiError):
    """Raised when the API rejects the token (HTTP 401)."""


class NotFoundError(ApiError):
    """Raised when the requested resource does not exist (HTTP 404)."""


class ClientError(ApiError):
    """Raised for any other 4xx response."""


class ServerError(ApiError):
    """Raised for 5xx responses."""


class ExportError(OsloVisionError):
    """Base for failures while persisting or unpacking an export."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Store the filesystem path involved in the failure."""
        self.path = path
        super().__init__(message)


class ArchiveError(ExportError):
    """Raised when the downloaded export is not a readable ZIP archive."""


class ExportIOError(ExportError):
    """Raised when writing, extracting or deleting export files fails."""
