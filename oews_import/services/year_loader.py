"""Load one year of OEWS data: locate, parse, normalize, replace."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

import pandas as pd
from tqdm import tqdm

from oews_import.database.connection import OEWSStore
from oews_import.lib.exceptions import FileDiscoveryException, YearLoadException
from .discovery import InputMode, extract_archive
from .file_selector import select_archive_file, select_sheet
from .normalizer import normalize, to_records
from .reader import is_excel_file, list_sheets, read_table

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1000
PROGRESS_EVERY_BATCHES = 10


@dataclass(frozen=True)
class YearSource:
    """A release file (or archive) attributed to one survey year."""

    year: int
    path: Path
    mode: InputMode = InputMode.FILES
    sheet_name: Optional[str] = None


class LoadStatus(str, Enum):
    LOADED = "loaded"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class YearLoadResult:
    """Outcome of loading one year."""

    year: int
    source_file: str
    status: LoadStatus
    rows_loaded: int = 0
    rows_deleted: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status is LoadStatus.LOADED


class YearLoader:
    """
    Replace one year's rows in the store with the contents of its source.

    The year's existing rows are deleted, then the normalized rows are
    appended in batches. By default each step commits separately, so a
    failure part-way through can leave the year partially loaded; with
    ``atomic=True`` the delete and all batches share one transaction.
    """

    def __init__(
        self,
        store: OEWSStore,
        batch_size: int = DEFAULT_BATCH_SIZE,
        atomic: bool = False,
        reader: Callable[..., pd.DataFrame] = read_table,
        show_progress: bool = True,
    ):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.store = store
        self.batch_size = batch_size
        self.atomic = atomic
        self.reader = reader
        self.show_progress = show_progress

    def load_year(self, source: YearSource) -> YearLoadResult:
        """
        Load ``source`` and report the outcome instead of raising.

        Args:
            source: Year and file to load

        Returns:
            YearLoadResult with status loaded, empty or failed
        """
        logger.info("Processing file: %s for year: %s", source.path.name, source.year)
        try:
            if source.mode is InputMode.ARCHIVES:
                with tempfile.TemporaryDirectory(prefix=f"oews_{source.year}_") as tmp_dir:
                    return self._load_archive(source, Path(tmp_dir))
            return self._load_file(source, source.path, source.sheet_name)
        except Exception as exc:  # per-year failures never abort the run
            return self._failed(source, exc)

    def _failed(self, source: YearSource, exc: Exception) -> YearLoadResult:
        logger.error(
            "Error processing file %s for year %s: %s",
            source.path.name,
            source.year,
            exc,
            exc_info=logger.isEnabledFor(logging.DEBUG),
        )
        return YearLoadResult(
            year=source.year,
            source_file=source.path.name,
            status=LoadStatus.FAILED,
            error=str(exc),
        )

    def _load_archive(self, source: YearSource, extract_dir: Path) -> YearLoadResult:
        extracted = extract_archive(source.path, extract_dir)
        data_file = select_archive_file(extracted)
        if data_file is None:
            raise FileDiscoveryException(
                f"No data files found in {source.path.name}",
                {"archive": str(source.path), "members": [p.name for p in extracted]},
            )
        logger.info("Using %s from %s", data_file.name, source.path.name)
        return self._load_file(source, data_file, source.sheet_name)

    def _load_file(self, source: YearSource, data_file: Path, sheet_name: Optional[str]) -> YearLoadResult:
        if sheet_name is None and is_excel_file(data_file):
            sheets = list_sheets(data_file)
            logger.info("Available sheets: %s", ", ".join(sheets))
            sheet_name = select_sheet(sheets)
            logger.info("Using sheet: %s", sheet_name)

        raw = self.reader(data_file, sheet_name)
        if raw.empty:
            logger.warning("No data found in file: %s", data_file.name)
            return YearLoadResult(
                year=source.year,
                source_file=data_file.name,
                status=LoadStatus.EMPTY,
            )

        normalized = normalize(raw, source.year)
        records = to_records(normalized)
        deleted, loaded = self.replace_year(source.year, records)

        logger.info("Successfully imported %s records for year %s", loaded, source.year)
        return YearLoadResult(
            year=source.year,
            source_file=data_file.name,
            status=LoadStatus.LOADED,
            rows_loaded=loaded,
            rows_deleted=deleted,
        )

    def replace_year(self, year: int, records: list) -> tuple[int, int]:
        """Delete ``year`` from the store, then append ``records`` in batches."""
        if self.atomic:
            with self.store.transaction() as conn:
                return self._replace(year, records, conn)
        return self._replace(year, records, None)

    def _replace(self, year: int, records: list, connection) -> tuple[int, int]:
        deleted = self.store.delete_year(year, connection=connection)
        if deleted:
            logger.info("Removed %s existing rows for year %s", deleted, year)

        total = len(records)
        loaded = 0
        starts = range(0, total, self.batch_size)
        with tqdm(
            total=total,
            unit="rows",
            desc=f"Loading {year}",
            leave=False,
            disable=not self.show_progress,
        ) as progress:
            for batch_number, start in enumerate(starts, start=1):
                batch = records[start:start + self.batch_size]
                try:
                    loaded += self.store.append_rows(batch, connection=connection)
                except Exception as exc:
                    raise YearLoadException(
                        year,
                        f"Insert failed after {loaded} of {total} rows: {exc}",
                        {"batch": batch_number, "rows_loaded": loaded},
                    ) from exc
                progress.update(len(batch))
                if batch_number % PROGRESS_EVERY_BATCHES == 1:
                    logger.info("Inserted %s of %s rows for year %s", loaded, total, year)

        return deleted, loaded
