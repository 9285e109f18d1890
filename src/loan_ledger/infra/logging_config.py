"""Logging setup for the HTTP application."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Send ``loan_ledger`` logs to stdout at ``level``.

    Unknown level names fall back to INFO. Calling this again replaces the
    handler rather than adding a second one.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    app_logger = logging.getLogger("loan_ledger")
    app_logger.setLevel(log_level)
    for existing in app_logger.handlers[:]:
        app_logger.removeHandler(existing)
    app_logger.addHandler(handler)
