"""Protocol defining the HTTP transport boundary.

``HttpTransportPort`` is the single seam between the client and the network.
In production it is satisfied by ``RequestsTransportAdapter``; in tests a
trivial fake returning canned ``RawResponse`` objects can be used instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from oslovision._client.dtos import PreparedRequest, RawResponse


class HttpTransportPort(Protocol):
    """Minimal interface for the HTTP operations used by ``OsloClient``."""

    def send(self, base_url: str, request: PreparedRequest) -> RawResponse:
        """Perform *request* against *base_url* and return the raw response."""
        ...

    def close(self) -> None:
        """Release any pooled connections."""
        ...
