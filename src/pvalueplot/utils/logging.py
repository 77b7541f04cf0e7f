"""Logging helpers for pvalueplot.

Library modules use ``get_logger(__name__)`` only. Scripts and the demo app call
``configure_logging()`` to send the ``pvalueplot`` logger to stderr; the root
logger is never touched and no log files are written.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

# Default format for pvalueplot logs
DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Root logger name of the package
ROOT_LOGGER_NAME = "pvalueplot"

# Environment variable holding the default level for configure_logging()
LOG_LEVEL_ENV_VAR = "PVALUEPLOT_LOG_LEVEL"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the pvalueplot logger only (never root).

    Use this in standalone scripts/demos. When pvalueplot is imported by an
    application that configures logging, do not call this.

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to PVALUEPLOT_LOG_LEVEL
        env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to DEFAULT_FMT.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        If True, remove existing handlers before adding new ones (allows
        reconfiguration). If False, skip if a stderr handler is already present.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if fmt is None:
        fmt = DEFAULT_FMT
    if datefmt is None:
        datefmt = DEFAULT_DATEFMT

    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    If name is None, returns the 'pvalueplot' logger.
    Otherwise, returns logging.getLogger(name).
    """
    if name is None:
        name = ROOT_LOGGER_NAME
    return logging.getLogger(name)
