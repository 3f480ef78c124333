"""Run a full import: discover sources, load each year, summarize the store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import pandas as pd

from oews_import.cli.config import ImportConfig
from oews_import.database.connection import OEWSStore
from oews_import.lib.exceptions import FileDiscoveryException
from .discovery import InputMode, discover_inputs
from .year_loader import DEFAULT_BATCH_SIZE, YearLoader, YearLoadResult, YearSource
from .year_resolver import resolve_year

logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    """What a run did and what the store holds afterwards."""

    files_found: int = 0
    outcomes: List[YearLoadResult] = field(default_factory=list)
    total_records: int = 0
    years_in_store: List[int] = field(default_factory=list)
    sample: Optional[pd.DataFrame] = None
    message: Optional[str] = None

    @property
    def years_processed(self) -> int:
        return len(self.outcomes)

    @property
    def successful_years(self) -> List[int]:
        return [outcome.year for outcome in self.outcomes if outcome.success]

    @property
    def failed_years(self) -> List[int]:
        return [outcome.year for outcome in self.outcomes if not outcome.success]


def build_year_sources(paths: Sequence[Path], mode: InputMode) -> List[YearSource]:
    """
    Turn discovered paths into one source per year, oldest first.

    Paths without a resolvable year are skipped. When several paths
    resolve to the same year, the first in discovery order is kept.

    Raises:
        FileDiscoveryException: If no path yields a year
    """
    by_year: dict[int, YearSource] = {}
    for path in paths:
        year = resolve_year(path.name)
        if year is None:
            logger.warning("Could not extract year from %s, skipping", path.name)
            continue
        if year in by_year:
            logger.warning(
                "Multiple files for year %s; using %s and ignoring %s",
                year,
                by_year[year].path.name,
                path.name,
            )
            continue
        by_year[year] = YearSource(year=year, path=path, mode=mode)

    if not by_year:
        raise FileDiscoveryException(
            "Could not extract years from any filenames. Please check file naming.",
            {"files": [path.name for path in paths]},
        )

    return [by_year[year] for year in sorted(by_year)]


class ImportOrchestrator:
    """Sequentially load every year found among the discovered inputs."""

    def __init__(self, store: OEWSStore, mode: InputMode, loader: Optional[YearLoader] = None):
        self.store = store
        self.mode = mode
        self.loader = loader or YearLoader(store)

    def run(self, paths: Sequence[Path]) -> ImportSummary:
        summary = ImportSummary(files_found=len(paths))

        self.store.create_table()

        try:
            sources = build_year_sources(paths, self.mode)
        except FileDiscoveryException as exc:
            logger.error(exc.message)
            summary.message = exc.message
            self._describe_store(summary)
            return summary

        logger.info(
            "Processing %s files for years: %s",
            len(sources),
            ", ".join(str(source.year) for source in sources),
        )
        for source in sources:
            summary.outcomes.append(self.loader.load_year(source))

        self._describe_store(summary)
        if summary.total_records:
            summary.sample = self.store.sample_rows()
        return summary

    def _describe_store(self, summary: ImportSummary) -> None:
        summary.total_records = self.store.count_records()
        summary.years_in_store = self.store.distinct_years()


def run_import(
    config: ImportConfig,
    mode: InputMode,
    atomic: bool = False,
    store_factory: Callable[[ImportConfig], OEWSStore] = OEWSStore.connect,
    show_progress: bool = True,
) -> ImportSummary:
    """
    Discover inputs under ``config.data_dir`` and import them.

    The store is only contacted when at least one input file exists, and
    it is always closed before returning.
    """
    logger.info("Starting BLS OEWS data import process (%s)...", mode.value)
    paths = discover_inputs(config.data_dir, mode)
    if not paths:
        message = f"No {mode.value} found in {config.data_dir}"
        logger.warning(message)
        return ImportSummary(message=message)

    store = store_factory(config)
    try:
        loader = YearLoader(
            store,
            batch_size=config.batch_size or DEFAULT_BATCH_SIZE,
            atomic=atomic,
            show_progress=show_progress,
        )
        return ImportOrchestrator(store, mode, loader).run(paths)
    finally:
        store.close()
