# === FILE: site_crawler/logger.py ===
"""Site-wide logging configuration for the **SiteCrawler** project.

Highlights
----------
* Unified format for console and optional file output (with rotation).
* Single, importable instance :data:`logger` - simply::

      from site_crawler.logger import logger
      logger.info("crawling url `%s`", url)
* Console level names are coloured when stdout is a terminal.
* Nothing is configured on import; the CLI calls :func:`configure`.
"""
from __future__ import annotations

import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Final, Optional, Union

import click

# --------------------------------------------------------------------------- #
# Constants & basic types                                                     #
# --------------------------------------------------------------------------- #

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "SiteCrawler"

_LEVEL_COLORS: Final[Dict[int, str]] = {
    logging.DEBUG: "blue",
    logging.INFO: "green",
    logging.WARNING: "magenta",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}

_LevelT = Union[int, str]


# --------------------------------------------------------------------------- #
# Helper builders                                                             #
# --------------------------------------------------------------------------- #


class _ColorFormatter(logging.Formatter):
    """Formatter that paints the level name with :func:`click.style`."""

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        color = _LEVEL_COLORS.get(record.levelno)
        if color:
            record.levelname = click.style(original, fg=color)
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _stdout_handler(fmt: str, color: Optional[bool]) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    if color is None:
        color = sys.stdout.isatty()
    handler.setFormatter(_ColorFormatter(fmt) if color else logging.Formatter(fmt))
    return handler


def _file_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #


def timestamped_log_file(directory: str | Path) -> Path:
    """Return ``<directory>/<YYYY-mm-dd_HHMMSS>.log``, creating *directory*."""
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)
    return path / f"{datetime.now():%Y-%m-%d_%H%M%S}.log"


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
    color: Optional[bool] = None,
) -> logging.Logger:
    """(Re)configure the global project logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Path to a logfile. *None* -> console-only output.
    log_format
        Format string for :class:`logging.Formatter`.
    replace_handlers
        *True* - remove existing handlers; *False* - just append new one(s).
    color
        Colour console level names; *None* -> only when stdout is a terminal.
    """
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        lg.handlers.clear()

    lg.addHandler(_stdout_handler(log_format, color))

    if log_file is not None:
        lg.addHandler(_file_handler(log_file, log_format))

    lg.propagate = False
    return lg


# --------------------------------------------------------------------------- #
# Ready-to-use instance                                                       #
# --------------------------------------------------------------------------- #

logger: logging.Logger = logging.getLogger(_LOGGER_NAME)

__all__ = ["logger", "configure", "timestamped_log_file"]
