# main.py

"""Entry point for the affiliate_sync Flipkart product importer."""

import argparse
import logging
import sys
from pathlib import Path

from src.config.logging_config import setup_logging

logger = logging.getLogger("affiliate_sync.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="affiliate_sync",
        description="Import Flipkart affiliate products into the local store.",
        epilog=(
            "Credentials and update toggles are read from the environment "
            "(or a .env file): FLIPKART_NATIVE_API, FLIPKART_TRACKING_ID, "
            "FLIPKART_TOKEN, FLIPKART_UPDATE_*."
        ),
    )
    parser.add_argument(
        "-c",
        "--category",
        default=None,
        help="Import a single category (default: all categories).",
    )
    parser.add_argument(
        "--list-categories",
        action="store_true",
        default=False,
        dest="list_categories",
        help="Print the available categories and exit.",
    )
    parser.add_argument(
        "--db",
        default=None,
        dest="db_path",
        help="Path to the SQLite product store (default: data/products.db).",
    )
    parser.add_argument(
        "--uid",
        type=int,
        default=0,
        help="User id recorded as owner of newly created products.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Echo INFO log records to stderr.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Route to category listing or a product import run."""
    args = _build_parser().parse_args(argv)
    log_file = setup_logging(
        run_label="categories" if args.list_categories else "import",
        verbose=args.verbose,
    )
    logger.info("affiliate_sync starting, log file: %s", log_file)

    from src.cli.runner import run_import, run_list_categories

    if args.list_categories:
        exit_code = run_list_categories()
    else:
        exit_code = run_import(
            category=args.category,
            db_path=Path(args.db_path) if args.db_path else None,
            uid=args.uid,
        )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
