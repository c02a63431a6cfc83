# src/cli/runner.py

"""Headless import runner: wires the job together and reports progress."""

import logging
from pathlib import Path

from rich.console import Console
from rich.progress import Progress
from rich.table import Table

from src.config.settings import ConfigurationError, SyncConfig
from src.scrapers.flipkart_client import FlipkartAPIError, FlipkartClient
from src.services.import_job import (
    ImportJob,
    ImportSummary,
    UnknownCategoryError,
)
from src.services.product_upserter import ProductUpserter
from src.storage.product_store import SQLiteProductStore

logger = logging.getLogger("affiliate_sync.cli")

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_ERROR = 2

# Stderr console so stdout stays clean for piping
_err = Console(stderr=True)


def _load_config() -> SyncConfig | None:
    """Read and validate configuration, printing the error if unusable."""
    try:
        config = SyncConfig.from_env()
        config.validate()
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return None
    return config


def _print_summary(summary: ImportSummary) -> None:
    """Render per-category counts and the completion message."""
    table = Table(
        title=summary.title,
        show_lines=False,
        title_style="bold cyan",
    )
    table.add_column("Category", style="bold")
    table.add_column("Created", justify="right", style="green")
    table.add_column("Updated", justify="right")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Status")

    for r in summary.results:
        status = "[green]ok[/green]" if r.ok else f"[red]{r.error}[/red]"
        table.add_row(
            r.category,
            str(r.created),
            str(r.updated),
            str(r.failed),
            status,
        )
    _err.print(table)

    colour = "green" if summary.success else "red"
    _err.print(f"[{colour}]{summary.message}[/{colour}]")


def run_import(
    category: str | None = None,
    db_path: Path | None = None,
    uid: int = 0,
) -> int:
    """Run the import and return an exit code (0 ok, 1 partial, 2 error)."""
    config = _load_config()
    if config is None:
        return EXIT_ERROR

    store = SQLiteProductStore(db_path)
    try:
        job = ImportJob(
            FlipkartClient(config),
            ProductUpserter(store, config, uid=uid),
        )
        try:
            plan = job.prepare(category)
        except (FlipkartAPIError, UnknownCategoryError) as exc:
            logger.error("Import aborted: %s", exc, exc_info=True)
            _err.print(f"[red]Import aborted: {exc}[/red]")
            return EXIT_ERROR

        _err.print(f"[bold]{plan.title}[/bold]")
        summary = ImportSummary(title=plan.title)
        with Progress(console=_err) as progress:
            task = progress.add_task(
                "Importing..", total=len(plan.categories),
            )
            try:
                for result in job.iter_units(plan.categories):
                    summary.add(result)
                    progress.update(task, description=result.message)
                    progress.advance(task)
            except KeyboardInterrupt:
                summary.interrupted = True
                logger.warning(
                    "Import interrupted after %d categories",
                    summary.processed,
                )

        _print_summary(summary)
        logger.info(
            "%s (%d created, %d updated, %d skipped)",
            summary.message,
            summary.created,
            summary.updated,
            summary.failed_products,
        )
        return EXIT_OK if summary.success else EXIT_PARTIAL
    finally:
        store.close()


def run_list_categories() -> int:
    """Print the categories available to the configured affiliate."""
    config = _load_config()
    if config is None:
        return EXIT_ERROR

    try:
        categories = FlipkartClient(config).fetch_categories()
    except FlipkartAPIError as exc:
        logger.error("Category fetch failed: %s", exc, exc_info=True)
        _err.print(f"[red]Category fetch failed: {exc}[/red]")
        return EXIT_ERROR

    table = Table(
        title="Flipkart Categories",
        title_style="bold cyan",
    )
    table.add_column("Category", style="bold")
    table.add_column("Listing URL", overflow="fold", style="dim")
    for key in sorted(categories):
        table.add_row(key, categories[key])
    Console().print(table)
    return EXIT_OK
