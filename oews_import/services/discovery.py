"""Locate release files in the data directory and unpack archives."""

from __future__ import annotations

import logging
import shutil
import zipfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from oews_import.lib.exceptions import FileDiscoveryException
from .year_resolver import resolve_year

logger = logging.getLogger(__name__)

SKIP_MEMBER_PREFIXES = ("__macosx", ".", "~$")


class InputMode(str, Enum):
    """Shape of the files found in the data directory."""

    ARCHIVES = "archives"
    FILES = "files"

    @property
    def extensions(self) -> tuple:
        if self is InputMode.ARCHIVES:
            return (".zip",)
        return (".xlsx", ".xls")


@dataclass(frozen=True)
class InputPreview:
    file_name: str
    full_path: Path
    extracted_year: Optional[int]
    file_size_mb: float


def _is_skipped(name: str) -> bool:
    return name.lower().startswith(SKIP_MEMBER_PREFIXES)


def discover_inputs(data_dir: Path, mode: InputMode) -> List[Path]:
    """Return the input files of ``mode`` in ``data_dir``, sorted by path.

    The directory is created when missing. Sorting makes "first file"
    tie-breaks reproducible across platforms.
    """
    data_dir = Path(data_dir)
    if not data_dir.exists():
        data_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Created data directory %s", data_dir)

    files = [
        path
        for path in data_dir.iterdir()
        if path.is_file()
        and path.suffix.lower() in mode.extensions
        and not _is_skipped(path.name)
    ]
    return sorted(files, key=lambda path: path.as_posix())


def preview_inputs(data_dir: Path, mode: InputMode) -> List[InputPreview]:
    """Describe discovered inputs, sorted by resolved year (unresolved last)."""
    previews = [
        InputPreview(
            file_name=path.name,
            full_path=path,
            extracted_year=resolve_year(path.name),
            file_size_mb=round(path.stat().st_size / 1024 / 1024, 2),
        )
        for path in discover_inputs(data_dir, mode)
    ]
    return sorted(
        previews,
        key=lambda item: (item.extracted_year is None, item.extracted_year or 0, item.file_name),
    )


def extract_archive(archive_path: Path, extract_dir: Path) -> List[Path]:
    """
    Extract an archive, flattening nested folders.

    Args:
        archive_path: Path of the .zip file
        extract_dir: Existing directory that receives the files

    Returns:
        Extracted file paths, sorted

    Raises:
        FileDiscoveryException: If the archive cannot be read
    """
    extract_dir = Path(extract_dir)
    extracted: List[Path] = []
    try:
        with zipfile.ZipFile(archive_path, "r") as archive:
            for member in archive.infolist():
                if member.is_dir():
                    continue
                parts = Path(member.filename).parts
                if any(_is_skipped(part) for part in parts):
                    continue
                destination = extract_dir / parts[-1]
                if destination in extracted:
                    logger.debug("Skipping duplicate member name %s", member.filename)
                    continue
                with archive.open(member) as source, destination.open("wb") as target:
                    shutil.copyfileobj(source, target)
                extracted.append(destination)
    except zipfile.BadZipFile as exc:
        raise FileDiscoveryException(
            f"Invalid ZIP file {archive_path.name}: {exc}", {"archive": str(archive_path)}
        ) from exc

    logger.debug("Extracted %s files from %s", len(extracted), archive_path.name)
    return sorted(extracted, key=lambda path: path.as_posix())
