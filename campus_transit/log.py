"""Logging setup driven by the ``logging`` config section."""

from __future__ import annotations

import logging
from pathlib import Path

from campus_transit.config import LoggingConfig

LOG_FILE_NAME = "campus_transit.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: LoggingConfig) -> None:
    """Send package logs to the console and to ``<log_dir>/campus_transit.log``."""
    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8")
    file_handler.setFormatter(formatter)

    root = logging.getLogger("campus_transit")
    root.setLevel(config.level.upper())
    root.handlers.clear()
    root.addHandler(console)
    root.addHandler(file_handler)


__all__ = ["configure_logging"]
