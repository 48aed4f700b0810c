# src/config/logging_config.py

"""Per-run timestamped logging configuration for catalog_manager.

Every launch (TUI or headless CLI) writes to its own file inside ``logs/``,
named after the launch time (e.g. ``logs/run_20261019_091502.log``).  The
``catalog_manager.*`` loggers used by the API client, cache, form reducer and
UI all propagate to the handlers installed here.

Only the headless CLI gets a stderr handler.  Under the TUI anything written
to stderr would be painted over Textual's screen, so the file is the only
sink there.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "catalog_manager"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _run_log_path() -> Path:
    Settings.LOGS_DIR.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return Settings.LOGS_DIR / f"run_{stamp}.log"


def _console_level() -> int:
    """Resolve ``CONSOLE_LOG_LEVEL``; unknown names fall back to WARNING."""
    level = logging.getLevelName(Settings.CONSOLE_LOG_LEVEL.upper())
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(console: bool = True) -> Path:
    """Attach the run-file (and optionally stderr) handlers.

    Args:
        console: Also log to stderr at ``Settings.CONSOLE_LOG_LEVEL``.

    Returns:
        Path of the log file for this run.  When handlers are already
        installed the existing file is returned and nothing is added.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)

    log_file = _run_log_path()
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, _DATE_FORMAT))
    root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(_console_level())
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)

    root_logger.info(
        "Logging to %s (console=%s)", log_file, "on" if console else "off"
    )
    return log_file
