"""Command-line interface for importing OEWS releases into the database."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click

from oews_import.cli import display
from oews_import.cli.config import ImportConfig, load_env_file
from oews_import.cli.error_handler import safe_execute
from oews_import.database.connection import OEWSStore
from oews_import.lib.logging_config import resolve_log_level, setup_logging
from oews_import.services import orchestrator
from oews_import.services.discovery import InputMode, preview_inputs

logger = logging.getLogger(__name__)

MODE_OPTION = click.option(
    "--mode",
    type=click.Choice([mode.value for mode in InputMode]),
    default=InputMode.ARCHIVES.value,
    show_default=True,
    help="archives: one .zip per year; files: loose .xlsx/.xls workbooks",
)
DATA_DIR_OPTION = click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory scanned for input files (default: OEWS_DATA_DIR or bls_oews_data)",
)


def _load_config(**overrides) -> ImportConfig:
    # The group callback has already loaded any .env file.
    config = ImportConfig.from_env(environ=os.environ)
    config = config.with_overrides(**overrides)
    logger.debug("Configuration: %s", config.to_dict())
    return config


@click.group()
@click.option("--verbose", "-v", count=True, help="Increase verbosity (use up to -vv)")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--env-file", type=click.Path(dir_okay=False), default=None, help="Load settings from this .env file")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: bool, log_file: Optional[Path], env_file: Optional[str]) -> None:
    """Import BLS OEWS annual releases into the oews_data table."""
    load_env_file(env_file)
    setup_logging(
        resolve_log_level(verbose, quiet, default=os.getenv("LOG_LEVEL", "INFO")),
        log_file=log_file or (Path(os.environ["LOG_FILE"]) if os.getenv("LOG_FILE") else None),
    )
    ctx.obj = {"verbose": verbose, "quiet": quiet, "env_file": env_file}


@cli.command(name="import")
@MODE_OPTION
@DATA_DIR_OPTION
@click.option("--batch-size", type=click.IntRange(min=1), default=None, help="Rows per insert batch")
@click.option("--atomic", is_flag=True, help="Replace each year inside a single transaction")
@click.pass_context
@safe_execute
def import_command(
    ctx: click.Context,
    mode: str,
    data_dir: Optional[Path],
    batch_size: Optional[int],
    atomic: bool,
) -> None:
    """Load every year found in the data directory, replacing existing rows."""
    config = _load_config(data_dir=data_dir, batch_size=batch_size)
    summary = orchestrator.run_import(
        config,
        InputMode(mode),
        atomic=atomic,
        show_progress=not ctx.obj.get("quiet"),
    )
    display.print_import_summary(summary)
    if summary.files_found == 0:
        click.echo(f"Please place your BLS OEWS {mode} in the '{config.data_dir}' directory")


@cli.command()
@MODE_OPTION
@DATA_DIR_OPTION
@click.pass_context
@safe_execute
def preview(ctx: click.Context, mode: str, data_dir: Optional[Path]) -> None:
    """List input files and the year read from each name, without importing."""
    config = ImportConfig.from_env(environ=os.environ, validate=False)
    display.print_preview(preview_inputs(data_dir or config.data_dir, InputMode(mode)))


@cli.command(name="create-table")
@click.pass_context
@safe_execute
def create_table(ctx: click.Context) -> None:
    """Create or verify the oews_data table."""
    config = _load_config()
    with OEWSStore.connect(config) as store:
        store.create_table()
    click.echo("OEWS table created/verified successfully")


@cli.command()
@click.pass_context
@safe_execute
def status(ctx: click.Context) -> None:
    """Show record counts per year currently in the database."""
    config = _load_config()
    with OEWSStore.connect(config) as store:
        store.create_table()
        display.print_status(store.year_counts())


def main() -> None:  # pragma: no cover - console entry point
    cli(prog_name="oews-import")


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    main()
