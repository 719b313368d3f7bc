"""Request construction for every Oslo API operation.

The builder is pure: it never touches the network.  The only I/O it performs
is reading a local image file for ``FileSource`` uploads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from oslovision._client.dtos import (
    FileSource,
    PreparedRequest,
    StreamSource,
    UrlSource,
)
from oslovision._version import __version__
from oslovision.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from oslovision._client.dtos import ImageSource
    from oslovision.config import ClientConfig
    from oslovision.models import AnnotationRequest

USER_AGENT = f"oslovision-python/{__version__}"


class RequestBuilder:
    """Build ``PreparedRequest`` objects carrying the client's credentials."""

    def __init__(self, cfg: ClientConfig) -> None:
        """Store the (immutable) config used for every request."""
        self._cfg = cfg

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._cfg.token}",
            "User-Agent": USER_AGENT,
        }
        if extra:
            headers.update(extra)
        return headers

    def build_test_request(self) -> PreparedRequest:
        """GET ``/test``: connectivity and token check."""
        return PreparedRequest(method="GET", path="/test", headers=self._headers())

    def build_add_image_request(
        self,
        project_identifier: str,
        source: ImageSource,
        split: str = "train",
        status: str = "pending",
    ) -> PreparedRequest:
        """POST ``/images`` as a URL form or a multipart upload.

        A ``UrlSource`` never opens a file: the server downloads the image
        itself.  A ``FileSource`` is read fully into memory; a
        ``StreamSource`` is handed to the transport unchanged.
        """
        fields = {
            "split": split,
            "status": status,
            "project_identifier": project_identifier,
        }
        if isinstance(source, UrlSource):
            return PreparedRequest(
                method="POST",
                path="/images",
                headers=self._headers(),
                data={"url": source.url, **fields},
            )
        if isinstance(source, FileSource):
            try:
                content = source.path.read_bytes()
            except OSError as e:
                msg = f"Cannot read image file {source.path}: {e}"
                raise InvalidArgumentError(msg) from e
            files = {"image": (source.path.name, content)}
        elif isinstance(source, StreamSource):
            files = {"image": (source.filename, source.stream)}
        else:
            msg = f"Unsupported image source: {type(source).__name__}"
            raise InvalidArgumentError(msg)
        return PreparedRequest(
            method="POST",
            path="/images",
            headers=self._headers(),
            data=fields,
            files=files,
        )

    def build_create_annotation_request(
        self,
        annotation: AnnotationRequest,
    ) -> PreparedRequest:
        """POST ``/annotations`` with a JSON body of all seven fields."""
        return PreparedRequest(
            method="POST",
            path="/annotations",
            headers=self._headers({"Content-Type": "application/json"}),
            json=annotation.model_dump(),
        )

    def build_download_export_request(
        self,
        project_identifier: str,
        version: int,
    ) -> PreparedRequest:
        """GET ``/exports/{version}?project_identifier={id}``."""
        if isinstance(version, bool) or not isinstance(version, int):
            msg = f"Export version must be an integer, got {version!r}"
            raise InvalidArgumentError(msg)
        return PreparedRequest(
            method="GET",
            path=f"/exports/{version}",
            headers=self._headers(),
            params={"project_identifier": project_identifier},
        )
