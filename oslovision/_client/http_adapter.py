"""``requests`` adapter implementing ``HttpTransportPort``.

This is the only module that imports and interacts with ``requests``.
It converts a ``PreparedRequest`` into a ``requests`` call and the reply
into a ``RawResponse``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import requests
from loguru import logger

from oslovision._client.dtos import RawResponse
from oslovision.exceptions import TransportError

if TYPE_CHECKING:
    from oslovision._client.dtos import PreparedRequest


def join_url(base_url: str, path: str) -> str:
    """Append *path* to *base_url* without doubling or dropping the slash."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class RequestsTransportAdapter:
    """``HttpTransportPort`` implementation backed by a ``requests.Session``.

    No retries are configured: a failed exchange surfaces immediately as
    ``TransportError``.  *timeout* is passed to every call as-is
    (``None`` waits forever, as ``requests`` does by default).
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: float | tuple[float, float] | None = None,
    ) -> None:
        """Wrap *session* or open a new one owned by this adapter."""
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(self, base_url: str, request: PreparedRequest) -> RawResponse:
        """Perform *request* and return its status code and body."""
        url = join_url(base_url, request.path)
        logger.trace(f"{request.method} {url}")
        try:
            response = self.session.request(
                request.method,
                url,
                headers=request.headers,
                params=request.params,
                data=request.data,
                files=request.files,
                json=request.json,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{request.method} {url} failed: {e}") from e
        logger.trace(
            f"{request.method} {url} -> HTTP {response.status_code} "
            f"({len(response.content)} bytes)"
        )
        return RawResponse(
            status_code=response.status_code,
            body=response.content,
        )

    def close(self) -> None:
        """Close the session if this adapter opened it."""
        if self._owns_session:
            self.session.close()
