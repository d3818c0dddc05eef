#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/logging_utils.py
"""Logging setup for the mdlayout command line and embedding applications.

The dispatcher logs one DEBUG line per processed node. That trace is only
wanted with ``--trace``, so plain DEBUG output keeps it muted, along with the
chatty DEBUG output of the imaging and charset-detection libraries.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

TRACE_LOGGER = "mdlayout.processors.base"
NOISY_LOGGERS = ("PIL", "chardet", "reportlab")

_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_PLAIN_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install console (and optionally file) handlers on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "INFO")
    log_file : str, optional
        Also append log records to this file
    trace_mode : bool, default False
        Emit the per-node dispatch trace, with timestamps and logger names

    Returns
    -------
    logging.Logger
        The configured root logger

    """
    if isinstance(log_level, int):
        level = log_level
    else:
        level = logging.getLevelName(str(log_level).upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if trace_mode:
        formatter = logging.Formatter(_TRACE_FORMAT, datefmt="%H:%M:%S")
    else:
        formatter = logging.Formatter(_PLAIN_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            root_logger.warning(f"Could not open log file {log_file}: {exc}")

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # NOTSET defers to the root level, so --trace with DEBUG shows every node
    logging.getLogger(TRACE_LOGGER).setLevel(logging.NOTSET if trace_mode else max(level, logging.INFO))
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if log_file and len(handlers) > 1:
        root_logger.info(f"Logging to file: {log_file}")
    return root_logger
