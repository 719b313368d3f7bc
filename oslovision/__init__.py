"""oslovision -- Python client for the Oslo dataset API."""

from oslovision._client.dtos import FileSource, ImageSource, StreamSource, UrlSource
from oslovision._client.ports import HttpTransportPort
from oslovision._version import __version__
from oslovision.client import OsloClient
from oslovision.config import DEFAULT_BASE_URL, ClientConfig
from oslovision.exceptions import (
    ApiError,
    ArchiveError,
    AuthenticationError,
    ClientError,
    ConfigError,
    ExportError,
    ExportIOError,
    InvalidArgumentError,
    NotFoundError,
    OsloVisionError,
    ServerError,
    TransportError,
)
from oslovision.models import AnnotationRequest, ExportResult

__all__ = [
    "DEFAULT_BASE_URL",
    "AnnotationRequest",
    "ApiError",
    "ArchiveError",
    "AuthenticationError",
    "ClientConfig",
    "ClientError",
    "ConfigError",
    "ExportError",
    "ExportIOError",
    "ExportResult",
    "FileSource",
    "HttpTransportPort",
    "ImageSource",
    "InvalidArgumentError",
    "NotFoundError",
    "OsloClient",
    "OsloVisionError",
    "ServerError",
    "StreamSource",
    "TransportError",
    "UrlSource",
    "__version__",
]
