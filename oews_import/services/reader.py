"""
Spreadsheet and delimited-text parsing

Reads OEWS release files into pandas DataFrames with every cell kept as
text; numeric coercion happens later, in the normalizer.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = {".xlsx", ".xls"}
TEXT_EXTENSIONS = {".csv", ".txt"}

# Only truly empty cells become null; codes such as "N/A" or "*" stay text.
READ_OPTIONS = {
    "dtype": str,
    "keep_default_na": False,
    "na_values": [""],
}


def is_excel_file(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() in EXCEL_EXTENSIONS


def list_sheets(path: Union[str, Path]) -> List[str]:
    """
    List the sheet names of a workbook

    Args:
        path: Path to an .xlsx/.xls file

    Returns:
        Sheet names in workbook order
    """
    with pd.ExcelFile(path) as workbook:
        return [str(name) for name in workbook.sheet_names]


def read_table(path: Union[str, Path], sheet_name: Optional[str] = None) -> pd.DataFrame:
    """
    Read a release file into a DataFrame of text cells

    Args:
        path: Path to an Excel workbook or a CSV/TXT file
        sheet_name: Sheet to read; the first sheet when None

    Returns:
        DataFrame with the file's own header names

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the extension is not supported
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in EXCEL_EXTENSIONS:
        df = pd.read_excel(path, sheet_name=sheet_name if sheet_name is not None else 0, **READ_OPTIONS)
    elif suffix in TEXT_EXTENSIONS:
        df = pd.read_csv(path, encoding_errors="replace", low_memory=False, **READ_OPTIONS)
    else:
        raise ValueError(f"Unsupported data file type: {path.name}")

    df.columns = [str(column).strip() for column in df.columns]
    logger.info("Read %s rows from %s", len(df), path.name)
    return df
