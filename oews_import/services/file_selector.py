"""Pick the authoritative data file in an archive and the data sheet in a workbook."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

DATA_FILE_EXTENSIONS = (".xlsx", ".xls", ".csv")
NATIONAL_KEYWORDS = ("national", "nat")
SHEET_KEYWORDS = ("data", "national", "all", "oews", "employment")


def is_data_file(path: Path) -> bool:
    return path.suffix.lower() in DATA_FILE_EXTENSIONS


def select_archive_file(paths: Sequence[Path]) -> Optional[Path]:
    """
    Choose the single data file among an archive's extracted files.

    Files are filtered to spreadsheet/CSV extensions; a national file is
    preferred, otherwise the first file in the given order is used.
    Callers should pass ``paths`` in a deterministic (sorted) order.

    Args:
        paths: Extracted file paths

    Returns:
        The chosen path, or None if no data file is present
    """
    candidates = [Path(path) for path in paths if is_data_file(Path(path))]
    if not candidates:
        return None

    for candidate in candidates:
        lowered = candidate.name.lower()
        if any(keyword in lowered for keyword in NATIONAL_KEYWORDS):
            return candidate

    logger.debug("No national file found, falling back to %s", candidates[0].name)
    return candidates[0]


def select_sheet(sheet_names: Sequence[str]) -> Optional[str]:
    """
    Choose the data sheet of a workbook.

    Keywords are tried in priority order; the first keyword with any
    matching sheet wins, and within it the first matching sheet. Without
    a match the first sheet is used.
    """
    if not sheet_names:
        return None

    for keyword in SHEET_KEYWORDS:
        matching = [name for name in sheet_names if keyword in str(name).lower()]
        if matching:
            return matching[0]

    return sheet_names[0]
