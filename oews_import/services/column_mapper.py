"""Map historical OEWS header spellings onto canonical column names."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from oews_import.oews_schema import HEADER_ALIASES

logger = logging.getLogger(__name__)


def map_column(raw_name: str) -> str:
    """Return the canonical name for ``raw_name``.

    Lookup is case-insensitive. Unknown headers are passed through
    lower-cased; selecting the canonical columns is left to the caller.
    """
    name = str(raw_name).strip()
    return HEADER_ALIASES.get(name.upper(), name.lower())


def build_rename_plan(columns: Iterable[str]) -> Tuple[Dict[str, str], List[str]]:
    """Plan the rename of a table's headers.

    When several headers map to the same canonical name (for example a
    file carrying both ``AREA`` and ``ST``) the first one wins and the
    others are returned for dropping.
    """
    rename_map: Dict[str, str] = {}
    drop_columns: List[str] = []
    seen: set[str] = set()

    for column in columns:
        canonical = map_column(column)
        if canonical in seen:
            logger.debug("Dropping duplicate column %r (maps to %s)", column, canonical)
            drop_columns.append(column)
            continue
        rename_map[column] = canonical
        seen.add(canonical)

    return rename_map, drop_columns
