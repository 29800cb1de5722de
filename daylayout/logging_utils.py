"""
Logging helpers for daylayout.

Library modules only ever call ``get_logger(__name__)``. Entry points
(``server.py``, ``render_days.py``) call ``configure_logging()`` once to get
output on stderr; an application embedding daylayout configures its own
handlers instead.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "daylayout"
DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Attach a stderr handler to the ``daylayout`` logger (never the root logger).

    Parameters
    ----------
    level:
        Logging level name or number. Defaults to the ``DAYLAYOUT_LOG_LEVEL``
        environment variable, or ``"INFO"``.
    fmt, datefmt:
        Formatter settings; standard defaults when omitted.
    force:
        Drop existing handlers first. Otherwise a second call is a no-op.
    """
    if level is None:
        level = os.environ.get("DAYLAYOUT_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
    else:
        for handler in logger.handlers:
            if isinstance(handler, logging.StreamHandler) and handler.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or LOGGER_NAME)
