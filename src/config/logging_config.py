# src/config/logging_config.py

"""Run-scoped logging for affiliate_sync.

Each CLI invocation gets its own file under ``logs/`` named after the run
kind and launch time (``import_20260214_153045.log``,
``categories_20260214_153102.log``).  Products the importer skips are only
reported here, with tracebacks, so the file handler always records DEBUG.
The stderr echo level comes from ``--verbose`` or ``AFFILIATE_SYNC_LOG_LEVEL``.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "affiliate_sync"
LOG_LEVEL_ENV = "AFFILIATE_SYNC_LOG_LEVEL"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def console_level(verbose: bool = False) -> int:
    """Stderr level: INFO when verbose, else the env level, else WARNING."""
    if verbose:
        return logging.INFO
    name = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else None
    return level if isinstance(level, int) else logging.WARNING


def _attach(
    logger: logging.Logger,
    handler: logging.Handler,
    level: int,
    fmt: str,
) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=_DATE_FORMAT))
    logger.addHandler(handler)


def current_log_file() -> Path | None:
    """Path of the run log already attached to the root logger, if any."""
    for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def setup_logging(
    run_label: str = "import",
    log_dir: Path | None = None,
    verbose: bool = False,
) -> Path:
    """Attach the run log and stderr handlers to ``affiliate_sync``.

    A second call in the same process keeps the existing handlers and
    returns the log file already in use.
    """
    existing = current_log_file()
    if existing is not None:
        return existing

    logs_dir = log_dir or Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    started = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"{run_label}_{started}.log"

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)
    _attach(
        root_logger,
        logging.FileHandler(log_file, encoding="utf-8"),
        logging.DEBUG,
        _FILE_FORMAT,
    )
    _attach(
        root_logger,
        logging.StreamHandler(sys.stderr),
        console_level(verbose),
        _CONSOLE_FORMAT,
    )
    root_logger.debug("Run log opened at %s", log_file)
    return log_file
