"""Typed data-transfer objects for the HTTP boundary.

These simple dataclasses describe what goes over the wire (``PreparedRequest``),
what comes back (``RawResponse``) and the accepted shapes of an image
argument (``ImageSource``).  They are trivial to construct in tests.
"""

from __future__ import annotations

import io
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO

from oslovision.exceptions import InvalidArgumentError

_URL_PREFIXES = ("http://", "https://")
_HTTP_2XX_MIN = 200
_HTTP_2XX_MAX = 300


@dataclass(frozen=True, slots=True)
class UrlSource:
    """Image referenced by a public URL; the server fetches it."""

    url: str


@dataclass(frozen=True, slots=True)
class FileSource:
    """Image stored in a local file."""

    path: Path


@dataclass(frozen=True, slots=True)
class StreamSource:
    """Image provided as an already-open binary stream owned by the caller."""

    stream: BinaryIO
    filename: str = "image"


ImageSource = UrlSource | FileSource | StreamSource


def _is_binary_stream(obj: object) -> bool:
    if isinstance(obj, io.TextIOBase):
        return False
    return callable(getattr(obj, "read", None))


def resolve_image_source(image: object) -> ImageSource:
    """Turn a user-supplied image argument into exactly one ``ImageSource``.

    Accepts an existing variant, a URL string, a path to an existing file,
    or an open binary stream.  Anything else raises ``InvalidArgumentError``.
    """
    if isinstance(image, (UrlSource, FileSource, StreamSource)):
        return image
    if isinstance(image, str) and image.startswith(_URL_PREFIXES):
        return UrlSource(url=image)
    if isinstance(image, (str, os.PathLike)):
        path = Path(image)
        if not path.is_file():
            msg = f"Image file not found: {path}"
            raise InvalidArgumentError(msg)
        return FileSource(path=path)
    if _is_binary_stream(image):
        # File objects expose the path they were opened with as ``name``.
        name = getattr(image, "name", None)
        filename = Path(name).name if isinstance(name, str) and name else "image"
        return StreamSource(stream=image, filename=filename)  # type: ignore[arg-type]
    msg = (
        "Invalid image type. Expected a URL string, a file path, "
        f"or a binary stream, got {type(image).__name__}"
    )
    raise InvalidArgumentError(msg)


@dataclass(frozen=True, slots=True)
class PreparedRequest:
    """Everything the transport needs to perform one HTTP call.

    ``path`` is relative to the configured base URL.  At most one of
    ``data``/``json`` carries the body; ``files`` turns ``data`` into a
    multipart form.
    """

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] | None = None
    data: dict[str, str] | None = None
    files: dict[str, tuple[str, Any]] | None = None
    json: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Status code and undecoded body returned by the transport."""

    status_code: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        """Return True for 2xx status codes."""
        return _HTTP_2XX_MIN <= self.status_code < _HTTP_2XX_MAX
