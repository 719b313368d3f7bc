"""Internal helpers for splitting `oslovision.client` responsibilities."""

from oslovision._client.classifier import classify_response
from oslovision._client.dtos import (
    FileSource,
    ImageSource,
    PreparedRequest,
    RawResponse,
    StreamSource,
    UrlSource,
    resolve_image_source,
)
from oslovision._client.extractor import extract_export
from oslovision._client.http_adapter import RequestsTransportAdapter
from oslovision._client.ports import HttpTransportPort
from oslovision._client.request_builder import USER_AGENT, RequestBuilder

__all__ = [
    "USER_AGENT",
    "FileSource",
    "HttpTransportPort",
    "ImageSource",
    "PreparedRequest",
    "RawResponse",
    "RequestBuilder",
    "RequestsTransportAdapter",
    "StreamSource",
    "UrlSource",
    "classify_response",
    "extract_export",
    "resolve_image_source",
]
