import zipfile
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
import pytest

from oews_import.cli.config import ImportConfig
from oews_import.database.connection import OEWSStore


@pytest.fixture
def sqlite_config(tmp_path: Path) -> ImportConfig:
    """Configuration pointing at a throwaway SQLite database and data directory."""
    return ImportConfig(
        user=None,
        password=None,
        database_url=f"sqlite:///{tmp_path / 'oews.db'}",
        data_dir=tmp_path / "data",
    )


@pytest.fixture
def store(sqlite_config: ImportConfig):
    """Connected store with the oews_data table created."""
    db = OEWSStore.connect(sqlite_config)
    db.create_table()
    try:
        yield db
    finally:
        db.close()


def sample_frame(rows: int = 5, a_mean: Optional[List[str]] = None) -> pd.DataFrame:
    """A small raw release table using the modern upper-case headers."""
    a_mean = a_mean or [f"{50000 + i * 1000}" for i in range(rows)]
    return pd.DataFrame(
        {
            "AREA": ["99"] * rows,
            "OCC_CODE": [f"11-10{i:02d}" for i in range(rows)],
            "A_MEAN": a_mean,
        }
    )


def write_workbook(path: Path, sheets: Dict[str, pd.DataFrame]) -> Path:
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for name, frame in sheets.items():
            frame.to_excel(writer, sheet_name=name, index=False)
    return path


def write_archive(path: Path, members: Dict[str, str]) -> Path:
    """Write a zip whose members are text payloads keyed by archive path."""
    with zipfile.ZipFile(path, "w") as archive:
        for name, payload in members.items():
            archive.writestr(name, payload)
    return path
