"""Oslo API client: build a request, send it, classify the response."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

from oslovision._client.classifier import classify_response
from oslovision._client.dtos import resolve_image_source
from oslovision._client.extractor import extract_export
from oslovision._client.http_adapter import RequestsTransportAdapter
from oslovision._client.request_builder import RequestBuilder
from oslovision.config import DEFAULT_BASE_URL, ClientConfig
from oslovision.exceptions import ConfigError
from oslovision.models import AnnotationRequest, export_key

if TYPE_CHECKING:
    import os
    from types import TracebackType

    from typing_extensions import Self

    from oslovision._client.dtos import PreparedRequest, RawResponse
    from oslovision._client.ports import HttpTransportPort


class OsloClient:
    """Synchronous client for the Oslo dataset API.

    Every public method performs exactly one HTTP round trip; nothing is
    cached and nothing is retried.  Can be used as a context manager to
    close the underlying HTTP session when done::

        with OsloClient.from_token("my-token") as client:
            client.test_api()
            image = client.add_image("my-project", "https://example.com/cat.jpg")
    """

    def __init__(
        self,
        cfg: ClientConfig | None = None,
        *,
        transport: HttpTransportPort | None = None,
    ) -> None:
        """Store client configuration and optional transport for DI.

        When *cfg* is ``None``, configuration is loaded automatically
        from environment variables, config file, and built-in preset
        via :meth:`ClientConfig.load`.

        When *transport* is provided it is used directly and left open on
        :meth:`close`.  Otherwise a ``RequestsTransportAdapter`` is created
        and owned by this client.
        """
        self._cfg = cfg or ClientConfig.load()
        if not self._cfg.token:
            msg = (
                "Oslo API token is not configured. Pass a token or set "
                "OSLO_API_TOKEN (or run `oslovision setup`)."
            )
            raise ConfigError(msg)
        if not self._cfg.base_url:
            msg = "Oslo API base URL is empty."
            raise ConfigError(msg)
        self._owns_transport = transport is None
        self._transport: HttpTransportPort = transport or RequestsTransportAdapter()
        self._builder = RequestBuilder(self._cfg)

    @classmethod
    def from_token(cls, token: str, base_url: str = DEFAULT_BASE_URL) -> OsloClient:
        """Create a client from an explicit token, ignoring config files."""
        return cls(ClientConfig(token=token, base_url=base_url))

    @property
    def config(self) -> ClientConfig:
        """Return the immutable configuration this client was built with."""
        return self._cfg

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> Self:
        """Return self; the transport is opened lazily by ``requests``."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the transport if this client created it."""
        self.close()

    def close(self) -> None:
        """Release pooled connections held by an owned transport."""
        if self._owns_transport:
            self._transport.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def test_api(self) -> Any:  # noqa: ANN401
        """Check that the API is up and the token is valid.

        Returns the decoded body of ``GET /test``.
        """
        return self._call(self._builder.build_test_request())

    def add_image(
        self,
        project_identifier: str,
        image: object,
        *,
        split: str = "train",
        status: str = "pending",
    ) -> Any:  # noqa: ANN401
        """Add an image to a project.

        Parameters
        ----------
        project_identifier:
            Project to add the image to.
        image:
            A URL string (``http://`` / ``https://``), a path to a local
            file, an open binary stream, or an ``ImageSource`` variant.
        split:
            Dataset split for the image.
        status:
            Initial review status of the image.

        Returns the decoded body describing the added image.

        """
        source = resolve_image_source(image)
        logger.debug(
            f"Adding {type(source).__name__} to project {project_identifier!r} "
            f"(split={split}, status={status})"
        )
        request = self._builder.build_add_image_request(
            project_identifier, source, split=split, status=status
        )
        return self._call(request)

    def create_annotation(  # noqa: PLR0913
        self,
        project_identifier: str,
        image_identifier: str,
        label: str,
        *,
        x0: float,
        y0: float,
        width_px: float,
        height_px: float,
    ) -> Any:  # noqa: ANN401
        """Create a bounding-box annotation on an image.

        ``x0``/``y0`` is the top-left corner of the box; all values in pixels.
        Returns the decoded body describing the created annotation.
        """
        annotation = AnnotationRequest(
            project_identifier=project_identifier,
            image_identifier=image_identifier,
            label=label,
            x0=x0,
            y0=y0,
            width_px=width_px,
            height_px=height_px,
        )
        return self._call(self._builder.build_create_annotation_request(annotation))

    def download_export(
        self,
        project_identifier: str,
        version: int,
        output_dir: str | os.PathLike[str] = ".",
    ) -> str:
        """Download export *version* of a project and unpack it.

        The archive is written to ``{output_dir}/{project}_v{version}.zip``,
        extracted to ``{output_dir}/{project}_v{version}/`` and then deleted.
        Returns the extraction directory path.
        """
        request = self._builder.build_download_export_request(
            project_identifier, version
        )
        response = self._send(request)
        if not response.ok:
            classify_response(response.status_code, response.body)
        result = extract_export(
            response.body,
            Path(output_dir),
            export_key(project_identifier, version),
        )
        return str(result.extracted_directory_path)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _send(self, request: PreparedRequest) -> RawResponse:
        logger.debug(f"{request.method} {request.path}")
        return self._transport.send(self._cfg.base_url, request)

    def _call(self, request: PreparedRequest) -> Any:  # noqa: ANN401
        response = self._send(request)
        return classify_response(response.status_code, response.body)
