"""Shared pytest fixtures for oslovision tests."""

from __future__ import annotations

import io
import json
import zipfile

import pytest

from oslovision._client.dtos import RawResponse
from oslovision.client import OsloClient
from oslovision.config import ClientConfig
from tests.fixtures.fake_transport import FakeTransport

TEST_TOKEN = "test_token"
TEST_BASE_URL = "https://app.oslo.vision/api/v1"

_OSLO_ENV_VARS = ("OSLO_API_TOKEN", "OSLO_BASE_URL", "OSLOVISION_CONFIG")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's real token and config out of every test."""
    for var in _OSLO_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("OSLOVISION_NO_INTERACTIVE", "true")


@pytest.fixture
def cfg() -> ClientConfig:
    """Config with a fixed token and the default base URL."""
    return ClientConfig(token=TEST_TOKEN, base_url=TEST_BASE_URL)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def json_response(payload: object, status_code: int = 200) -> RawResponse:
    """Build a RawResponse whose body is *payload* encoded as JSON."""
    return RawResponse(
        status_code=status_code,
        body=json.dumps(payload).encode("utf-8"),
    )


def make_client(
    *responses: RawResponse,
    cfg: ClientConfig | None = None,
) -> tuple[OsloClient, FakeTransport]:
    """Create an OsloClient backed by a FakeTransport returning *responses*."""
    transport = FakeTransport(*responses)
    client = OsloClient(
        cfg or ClientConfig(token=TEST_TOKEN, base_url=TEST_BASE_URL),
        transport=transport,
    )
    return client, transport


def make_zip(entries: dict[str, bytes]) -> bytes:
    """Build an in-memory ZIP archive from ``{name: content}``.

    Names ending with ``/`` are stored as directory entries.
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in entries.items():
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, content)
    return buf.getvalue()
