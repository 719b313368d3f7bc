"""Persist a downloaded export archive and unpack it next to itself.

Extraction is best-effort: when a step fails, files written so far are left
on disk and the intermediate ``.zip`` may remain.
"""

from __future__ import annotations

import shutil
import zipfile
import zlib
from typing import TYPE_CHECKING

from loguru import logger

from oslovision.exceptions import ArchiveError, ExportIOError
from oslovision.models import ExportResult

if TYPE_CHECKING:
    from pathlib import Path


def _entry_target(extract_dir: Path, name: str) -> Path:
    """Resolve archive entry *name* under *extract_dir*, rejecting escapes."""
    target = (extract_dir / name).resolve()
    if not target.is_relative_to(extract_dir.resolve()):
        msg = f"Archive entry {name!r} points outside {extract_dir}"
        raise ArchiveError(msg, path=extract_dir)
    return target


def _extract_members(archive: zipfile.ZipFile, extract_dir: Path) -> int:
    """Materialize every entry of *archive*; return the number of files written."""
    written = 0
    for info in archive.infolist():
        target = _entry_target(extract_dir, info.filename)
        if info.is_dir():
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        with archive.open(info) as src, target.open("wb") as dst:
            shutil.copyfileobj(src, dst)
        written += 1
    return written


def extract_export(content: bytes, output_dir: Path, key: str) -> ExportResult:
    """Write *content* to ``{output_dir}/{key}.zip`` and unpack it.

    The archive is extracted into ``{output_dir}/{key}`` (created with all
    missing parents) and deleted once every entry has been written.

    Raises
    ------
    ArchiveError
        When *content* is not a readable ZIP archive or an entry escapes
        the extraction directory.
    ExportIOError
        When the filesystem refuses a write, mkdir or delete.

    """
    zip_path = output_dir / f"{key}.zip"
    extract_dir = output_dir / key
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        zip_path.write_bytes(content)
        extract_dir.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(zip_path) as archive:
            written = _extract_members(archive, extract_dir)
        zip_path.unlink()
    except zipfile.BadZipFile as e:
        msg = f"Export archive {zip_path} is not a valid ZIP file: {e}"
        raise ArchiveError(msg, path=zip_path) from e
    except (zlib.error, NotImplementedError, RuntimeError, EOFError) as e:
        # Corrupt streams, unsupported compression and encrypted entries.
        msg = f"Export archive {zip_path} cannot be unpacked: {e}"
        raise ArchiveError(msg, path=zip_path) from e
    except OSError as e:
        msg = f"Failed to extract export {zip_path} into {extract_dir}: {e}"
        raise ExportIOError(msg, path=extract_dir) from e
    logger.info(f"Export extracted to {extract_dir} ({written} files)")
    return ExportResult(extracted_directory_path=extract_dir, entry_count=written)
