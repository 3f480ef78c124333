"""
CLI Display Utilities

Formatted console output for import summaries, previews and status.
"""

from typing import Any, Dict, List, Sequence

import click

from oews_import.services.discovery import InputPreview
from oews_import.services.orchestrator import ImportSummary


def print_table(headers: List[str], rows: Sequence[Sequence[Any]]):
    """
    Print a formatted table

    Args:
        headers: List of column headers
        rows: List of row data
    """
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(str(cell)))

    header_row = " | ".join(h.ljust(col_widths[i]) for i, h in enumerate(headers))
    click.echo(header_row)
    click.echo("-" * len(header_row))

    for row in rows:
        click.echo(" | ".join(str(cell).ljust(col_widths[i]) for i, cell in enumerate(row)))


def print_preview(previews: Sequence[InputPreview]):
    """Print discovered files with the year resolved from each name."""
    if not previews:
        click.echo("No input files found.")
        return

    click.echo("Found files:")
    print_table(
        ["filename", "extracted_year", "file_size_mb"],
        [
            [item.file_name, item.extracted_year if item.extracted_year is not None else "NA", item.file_size_mb]
            for item in previews
        ],
    )


def print_import_summary(summary: ImportSummary):
    """Print the end-of-run summary."""
    click.echo("\n=== Import Summary ===")
    if summary.message:
        click.echo(summary.message)

    click.echo(
        f"Files processed successfully: {len(summary.successful_years)} of {summary.years_processed}"
    )
    for outcome in summary.outcomes:
        if outcome.success:
            status = click.style("ok", fg="green")
            detail = f"{outcome.rows_loaded:,} rows"
        else:
            status = click.style(outcome.status.value, fg="red" if outcome.error else "yellow")
            detail = outcome.error or "no rows"
        click.echo(f"  {outcome.year} [{status}] {outcome.source_file}: {detail}")

    click.echo(f"Total records in database: {summary.total_records:,}")
    years = ", ".join(str(year) for year in summary.years_in_store) or "none"
    click.echo(f"Years in database: {years}")

    if summary.sample is not None and not summary.sample.empty:
        click.echo("\nSample data:")
        print_table(
            list(summary.sample.columns),
            list(summary.sample.itertuples(index=False, name=None)),
        )


def print_status(year_counts: Dict[int, int]):
    """Print row counts per year."""
    if not year_counts:
        click.echo("The oews_data table is empty.")
        return

    print_table(["year", "records"], [[year, f"{count:,}"] for year, count in year_counts.items()])
    click.echo(f"\nTotal records: {sum(year_counts.values()):,}")
