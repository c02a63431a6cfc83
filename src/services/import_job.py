# src/services/import_job.py

"""Batch import of Flipkart categories into the local product store."""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from src.scrapers.flipkart_client import FlipkartClient
from src.services.product_upserter import ProductUpserter, UpsertOutcome

logger = logging.getLogger("affiliate_sync.import")

SUCCESS_MESSAGE = "The products are successfully imported from flipkart."


class UnknownCategoryError(Exception):
    """Raised when a requested category is not in the category directory."""


@dataclass
class CategoryResult:
    """Outcome of importing one category (one unit of work)."""

    category: str
    url: str
    created: int = 0
    updated: int = 0
    failed: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the listing was fetched (individual products may fail)."""
        return self.error is None

    @property
    def message(self) -> str:
        """Progress line reported once the unit finishes."""
        return f"Completed importing category : {self.category}"


@dataclass
class ImportPlan:
    """Categories selected for a run and the run's title."""

    title: str
    categories: dict[str, str]


@dataclass
class ImportSummary:
    """Aggregate of a finished (or interrupted) import run."""

    title: str
    processed: int = 0
    results: list[CategoryResult] = field(
        default_factory=lambda: list[CategoryResult]()
    )
    interrupted: bool = False

    def add(self, result: CategoryResult) -> None:
        """Record a finished unit and bump the processed count."""
        self.results.append(result)
        self.processed += 1

    @property
    def failures(self) -> list[CategoryResult]:
        """Units whose listing could not be fetched."""
        return [r for r in self.results if not r.ok]

    @property
    def success(self) -> bool:
        """True when no unit failed and the run was not interrupted."""
        return not self.failures and not self.interrupted

    @property
    def created(self) -> int:
        return sum(r.created for r in self.results)

    @property
    def updated(self) -> int:
        return sum(r.updated for r in self.results)

    @property
    def failed_products(self) -> int:
        return sum(r.failed for r in self.results)

    @property
    def message(self) -> str:
        """Completion message naming the first failed unit, if any."""
        if self.failures:
            first = self.failures[0]
            operation = ImportJob.import_category.__name__
            return (
                f"An error occurred while processing {operation} "
                f"with arguments : {first.category}"
            )
        if self.interrupted:
            return (
                f"Import interrupted after {self.processed} categories."
            )
        return SUCCESS_MESSAGE


class ImportJob:
    """Drives category units sequentially, isolating failures per unit."""

    def __init__(
        self,
        client: FlipkartClient,
        upserter: ProductUpserter,
    ) -> None:
        self.client = client
        self.upserter = upserter

    def prepare(self, category: str | None = None) -> ImportPlan:
        """Fetch the category directory and select the units to run.

        Raises:
            FlipkartAPIError: when the category directory cannot be read.
            UnknownCategoryError: when *category* is not listed.
        """
        categories = self.client.fetch_categories()
        if category:
            if category not in categories:
                raise UnknownCategoryError(
                    f"Unknown category: {category}"
                )
            return ImportPlan(
                title=f"Importing products from {category}",
                categories={category: categories[category]},
            )
        return ImportPlan(
            title=f"Importing products from {len(categories)} categories",
            categories=categories,
        )

    def import_category(self, category: str, url: str) -> CategoryResult:
        """Fetch one listing and upsert every product in it.

        A failing product is logged and skipped; a failing listing fetch
        is recorded on the returned result.
        """
        result = CategoryResult(category=category, url=url)
        try:
            products = self.client.fetch_products(url)
        except Exception as exc:
            logger.error(
                "Category '%s' failed: %s", category, exc, exc_info=True,
            )
            result.error = str(exc)
            return result

        for raw in products:
            try:
                outcome = self.upserter.create_or_update(raw)
            except Exception as exc:
                result.failed += 1
                logger.warning(
                    "Skipping product in '%s': %s",
                    category,
                    exc,
                    exc_info=True,
                )
                continue
            if outcome is UpsertOutcome.CREATED:
                result.created += 1
            else:
                result.updated += 1

        logger.info(
            "Category '%s': %d created, %d updated, %d skipped",
            category,
            result.created,
            result.updated,
            result.failed,
        )
        return result

    def iter_units(
        self, categories: dict[str, str],
    ) -> Iterator[CategoryResult]:
        """Yield one result per category as each unit completes."""
        for key, url in categories.items():
            yield self.import_category(key, url)

    def run(
        self,
        category: str | None = None,
        on_progress: Callable[[CategoryResult, ImportSummary], None]
        | None = None,
    ) -> ImportSummary:
        """Import one category, or all of them, and summarise the run."""
        plan = self.prepare(category)
        logger.info(plan.title)
        summary = ImportSummary(title=plan.title)
        for result in self.iter_units(plan.categories):
            summary.add(result)
            if on_progress is not None:
                on_progress(result, summary)
        logger.info(summary.message)
        return summary
