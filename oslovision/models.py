"""Pydantic models for Oslo API payloads and results."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class AnnotationRequest(BaseModel):
    """Bounding-box annotation to create on an image.

    ``x0``/``y0`` is the top-left corner; all geometry is in pixels.
    Field order is the order of keys in the JSON body.
    """

    model_config = ConfigDict(frozen=True)

    project_identifier: str
    image_identifier: str
    label: str
    x0: float
    y0: float
    width_px: float
    height_px: float


class ExportResult(BaseModel):
    """Where a downloaded export was unpacked."""

    model_config = ConfigDict(frozen=True)

    extracted_directory_path: Path
    entry_count: int = 0


def export_key(project_identifier: str, version: int) -> str:
    """Return the ``{project}_v{version}`` name shared by the archive and its folder."""
    return f"{project_identifier}_v{version}"
