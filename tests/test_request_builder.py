"""Tests for RequestBuilder and image source resolution."""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from oslovision._client.dtos import (
    FileSource,
    StreamSource,
    UrlSource,
    resolve_image_source,
)
from oslovision._client.request_builder import USER_AGENT, RequestBuilder
from oslovision._version import __version__
from oslovision.config import ClientConfig
from oslovision.exceptions import InvalidArgumentError
from oslovision.models import AnnotationRequest


@pytest.fixture
def builder(cfg: ClientConfig) -> RequestBuilder:
    return RequestBuilder(cfg)


# ---------------------------------------------------------------------------
# Common headers
# ---------------------------------------------------------------------------


def test_user_agent_names_client_and_version() -> None:
    assert USER_AGENT == f"oslovision-python/{__version__}"


def test_every_request_carries_auth_and_user_agent(
    builder: RequestBuilder, tmp_path: Path
) -> None:
    image = tmp_path / "cat.jpg"
    image.write_bytes(b"\xff\xd8jpeg")
    annotation = AnnotationRequest(
        project_identifier="p",
        image_identifier="i",
        label="cat",
        x0=1,
        y0=2,
        width_px=3,
        height_px=4,
    )
    requests = [
        builder.build_test_request(),
        builder.build_add_image_request("p", UrlSource("https://x/y.jpg")),
        builder.build_add_image_request("p", FileSource(image)),
        builder.build_create_annotation_request(annotation),
        builder.build_download_export_request("p", 1),
    ]
    for request in requests:
        assert request.headers["Authorization"] == "Bearer test_token"
        assert request.headers["User-Agent"] == USER_AGENT


def test_test_request(builder: RequestBuilder) -> None:
    request = builder.build_test_request()
    assert request.method == "GET"
    assert request.path == "/test"
    assert request.data is None
    assert request.json is None


# ---------------------------------------------------------------------------
# add image
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "url", ["https://example.com/image.jpg", "http://example.com/a.png"]
)
def test_add_image_url_form_never_opens_file(
    builder: RequestBuilder, url: str
) -> None:
    with patch("pathlib.Path.read_bytes") as read_bytes, patch(
        "builtins.open"
    ) as open_:
        source = resolve_image_source(url)
        request = builder.build_add_image_request("test_project", source)

    read_bytes.assert_not_called()
    open_.assert_not_called()
    assert request.method == "POST"
    assert request.path == "/images"
    assert request.data == {
        "url": url,
        "split": "train",
        "status": "pending",
        "project_identifier": "test_project",
    }
    assert request.files is None


def test_add_image_file_is_multipart(builder: RequestBuilder, tmp_path: Path) -> None:
    image = tmp_path / "dog.png"
    image.write_bytes(b"\x89PNG fake")

    request = builder.build_add_image_request(
        "proj", FileSource(image), split="val", status="approved"
    )

    assert request.data == {
        "split": "val",
        "status": "approved",
        "project_identifier": "proj",
    }
    assert request.files == {"image": ("dog.png", b"\x89PNG fake")}


def test_add_image_stream_passed_through(builder: RequestBuilder) -> None:
    stream = io.BytesIO(b"fake image data")

    request = builder.build_add_image_request("proj", StreamSource(stream))

    assert request.files is not None
    filename, payload = request.files["image"]
    assert filename == "image"
    assert payload is stream
    assert "url" not in (request.data or {})


def test_add_image_unreadable_file(builder: RequestBuilder, tmp_path: Path) -> None:
    missing = FileSource(tmp_path / "gone.jpg")
    with pytest.raises(InvalidArgumentError, match="Cannot read image file"):
        builder.build_add_image_request("proj", missing)


def test_add_image_rejects_unknown_source(builder: RequestBuilder) -> None:
    with pytest.raises(InvalidArgumentError):
        builder.build_add_image_request("proj", "not-a-source")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# annotations / exports
# ---------------------------------------------------------------------------


def test_create_annotation_json_body(builder: RequestBuilder) -> None:
    annotation = AnnotationRequest(
        project_identifier="test_project",
        image_identifier="test_image",
        label="cat",
        x0=10,
        y0=20,
        width_px=100,
        height_px=150,
    )

    request = builder.build_create_annotation_request(annotation)

    assert request.method == "POST"
    assert request.path == "/annotations"
    assert request.headers["Content-Type"] == "application/json"
    assert request.json == {
        "project_identifier": "test_project",
        "image_identifier": "test_image",
        "label": "cat",
        "x0": 10,
        "y0": 20,
        "width_px": 100,
        "height_px": 150,
    }
    assert list(request.json) == [
        "project_identifier",
        "image_identifier",
        "label",
        "x0",
        "y0",
        "width_px",
        "height_px",
    ]


def test_form_requests_do_not_force_json_content_type(
    builder: RequestBuilder,
) -> None:
    request = builder.build_add_image_request("p", UrlSource("https://x/y.jpg"))
    assert "Content-Type" not in request.headers


def test_download_export_request(builder: RequestBuilder) -> None:
    request = builder.build_download_export_request("test_project", 3)
    assert request.method == "GET"
    assert request.path == "/exports/3"
    assert request.params == {"project_identifier": "test_project"}


@pytest.mark.parametrize("version", ["1", 1.0, True, None])
def test_download_export_rejects_non_int_version(
    builder: RequestBuilder, version: object
) -> None:
    with pytest.raises(InvalidArgumentError, match="integer"):
        builder.build_download_export_request("p", version)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# resolve_image_source
# ---------------------------------------------------------------------------


def test_resolve_url() -> None:
    assert resolve_image_source("https://a/b.jpg") == UrlSource("https://a/b.jpg")


def test_resolve_existing_path(tmp_path: Path) -> None:
    image = tmp_path / "a.jpg"
    image.write_bytes(b"x")
    assert resolve_image_source(str(image)) == FileSource(image)
    assert resolve_image_source(image) == FileSource(image)


def test_resolve_missing_path_fails(tmp_path: Path) -> None:
    with pytest.raises(InvalidArgumentError, match="not found"):
        resolve_image_source(str(tmp_path / "nope.jpg"))


def test_resolve_directory_fails(tmp_path: Path) -> None:
    with pytest.raises(InvalidArgumentError):
        resolve_image_source(tmp_path)


def test_resolve_open_file_keeps_name(tmp_path: Path) -> None:
    image = tmp_path / "photo.jpg"
    image.write_bytes(b"x")
    with image.open("rb") as fh:
        source = resolve_image_source(fh)
        assert isinstance(source, StreamSource)
        assert source.stream is fh
        assert source.filename == "photo.jpg"


def test_resolve_bytes_io() -> None:
    stream = io.BytesIO(b"data")
    source = resolve_image_source(stream)
    assert source == StreamSource(stream=stream, filename="image")


def test_resolve_variant_is_identity() -> None:
    source = UrlSource("https://a/b.jpg")
    assert resolve_image_source(source) is source


@pytest.mark.parametrize("bad", [42, None, b"bytes", io.StringIO("text"), ["x"]])
def test_resolve_rejects_other_types(bad: object) -> None:
    with pytest.raises(InvalidArgumentError, match="Invalid image type"):
        resolve_image_source(bad)
