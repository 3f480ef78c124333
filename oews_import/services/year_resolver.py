"""Derive the survey year of a release from its file name."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Union

FOUR_DIGIT_YEAR = re.compile(r"(?<!\d)(\d{4})(?!\d)")

# Early archives are named like oes_19m3, oesm20all or oes99nat.
TWO_DIGIT_PATTERNS = (
    re.compile(r"oes_(\d{2})"),
    re.compile(r"oesm(\d{2})"),
    re.compile(r"oes(\d{2})"),
)

CENTURY_PIVOT = 97


def expand_two_digit_year(two_digit_year: int) -> int:
    """97-99 -> 1997-1999, everything else -> 20xx."""
    if two_digit_year >= CENTURY_PIVOT:
        return 1900 + two_digit_year
    return 2000 + two_digit_year


def resolve_year(filename: Union[str, Path]) -> Optional[int]:
    """
    Extract a four-digit year from a file name.

    A standalone run of four digits wins; otherwise the two-digit
    ``oes_NN``/``oesmNN``/``oesNN`` forms are tried in that order.

    Args:
        filename: File name or path; only the base name is inspected

    Returns:
        The year, or None when no rule matches
    """
    name = Path(filename).name

    match = FOUR_DIGIT_YEAR.search(name)
    if match:
        return int(match.group(1))

    lowered = name.lower()
    for pattern in TWO_DIGIT_PATTERNS:
        match = pattern.search(lowered)
        if match:
            return expand_two_digit_year(int(match.group(1)))

    return None
