"""Normalize a raw release table onto the canonical OEWS schema."""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, List, Optional

import pandas as pd

from oews_import.oews_schema import (
    CANONICAL_COLUMNS,
    FLAG_COLUMNS,
    INTEGER_COLUMNS,
    NUMERIC_COLUMNS,
    YEAR_COLUMN,
)
from .column_mapper import build_rename_plan

logger = logging.getLogger(__name__)

NON_NUMERIC_CHARS = re.compile(r"[^0-9.\-]")


def coerce_numeric(value: Any) -> Optional[float]:
    """Parse a noisy numeric cell.

    Everything except digits, ``.`` and ``-`` is stripped before parsing,
    so ``"$45,231.50"`` becomes 45231.5 and ``"12.3%"`` becomes 12.3.
    Empty or unparseable results (``"*"``, ``"N/A"``, ``"#"``) are None.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)

    cleaned = NON_NUMERIC_CHARS.sub("", str(value))
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def coerce_flag(value: Any) -> Optional[str]:
    """Reduce an annual/hourly indicator (e.g. ``TRUE``) to one upper-case character."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    text = str(value).strip()
    return text[0].upper() if text else None


def normalize(raw: pd.DataFrame, year: int) -> pd.DataFrame:
    """
    Map a raw table onto the canonical columns for ``year``.

    Steps: rename headers, stamp the year, add missing canonical columns
    as null, keep only the canonical columns in canonical order, then
    coerce the numeric columns. The ``*_prse`` columns stay text.

    Args:
        raw: Table as read from the source file
        year: Year attributed to the source file

    Returns:
        DataFrame with exactly ``CANONICAL_COLUMNS``
    """
    rename_map, drop_columns = build_rename_plan(raw.columns)
    df = raw.drop(columns=drop_columns).rename(columns=rename_map)

    # The file's year always wins over any year column in the data.
    df[YEAR_COLUMN] = int(year)

    missing = [column for column in CANONICAL_COLUMNS if column not in df.columns]
    for column in missing:
        df[column] = None
    if missing:
        logger.debug("Year %s: added missing columns %s", year, ", ".join(missing))

    extra = [column for column in df.columns if column not in CANONICAL_COLUMNS]
    if extra:
        logger.debug("Year %s: dropping unrecognized columns %s", year, ", ".join(extra))

    df = df.loc[:, CANONICAL_COLUMNS].copy()

    for column in NUMERIC_COLUMNS:
        df[column] = pd.to_numeric(df[column].map(coerce_numeric), errors="coerce")
    for column in INTEGER_COLUMNS:
        df[column] = df[column].round().astype("Int64")
    for column in FLAG_COLUMNS:
        df[column] = df[column].map(coerce_flag)

    df[YEAR_COLUMN] = df[YEAR_COLUMN].astype(int)
    return df.reset_index(drop=True)


def to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert a normalized frame into insert-ready dicts with nulls as None."""
    cleaned = df.astype(object).where(df.notna(), None)
    return cleaned.to_dict(orient="records")
