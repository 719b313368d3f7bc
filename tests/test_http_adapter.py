"""Tests for RequestsTransportAdapter with a mocked requests.Session."""

from __future__ import annotations

import dataclasses
from unittest.mock import MagicMock, patch

import pytest
import requests

from oslovision._client.dtos import PreparedRequest
from oslovision._client.http_adapter import RequestsTransportAdapter, join_url
from oslovision.exceptions import TransportError


def _mock_session(status_code: int = 200, content: bytes = b"{}") -> MagicMock:
    session = MagicMock()
    session.request.return_value = MagicMock(
        status_code=status_code,
        content=content,
        headers={"Content-Type": "application/json"},
    )
    return session


@pytest.mark.parametrize(
    ("base", "path", "expected"),
    [
        ("https://a/api/v1", "/test", "https://a/api/v1/test"),
        ("https://a/api/v1/", "/test", "https://a/api/v1/test"),
        ("https://a/api/v1", "exports/2", "https://a/api/v1/exports/2"),
    ],
)
def test_join_url(base: str, path: str, expected: str) -> None:
    assert join_url(base, path) == expected


def test_send_forwards_every_field() -> None:
    session = _mock_session(201, b'{"id": 1}')
    adapter = RequestsTransportAdapter(session, timeout=5.0)
    request = PreparedRequest(
        method="POST",
        path="/images",
        headers={"Authorization": "Bearer t"},
        data={"split": "train"},
        files={"image": ("a.jpg", b"bytes")},
    )

    response = adapter.send("https://a/api/v1", request)

    session.request.assert_called_once_with(
        "POST",
        "https://a/api/v1/images",
        headers={"Authorization": "Bearer t"},
        params=None,
        data={"split": "train"},
        files={"image": ("a.jpg", b"bytes")},
        json=None,
        timeout=5.0,
    )
    assert response.status_code == 201
    assert response.body == b'{"id": 1}'
    assert response.ok
    assert [f.name for f in dataclasses.fields(response)] == ["status_code", "body"]


def test_non_2xx_is_returned_not_raised() -> None:
    adapter = RequestsTransportAdapter(_mock_session(503, b""))

    response = adapter.send("https://a", PreparedRequest(method="GET", path="/test"))

    assert response.status_code == 503
    assert not response.ok


def test_network_failure_becomes_transport_error() -> None:
    session = MagicMock()
    session.request.side_effect = requests.ConnectionError("refused")
    adapter = RequestsTransportAdapter(session)

    with pytest.raises(TransportError, match="refused"):
        adapter.send("https://a", PreparedRequest(method="GET", path="/test"))


def test_close_only_closes_owned_session() -> None:
    external = MagicMock()
    RequestsTransportAdapter(external).close()
    external.close.assert_not_called()

    with patch("oslovision._client.http_adapter.requests.Session") as session_cls:
        adapter = RequestsTransportAdapter()
        adapter.close()
    session_cls.return_value.close.assert_called_once_with()
