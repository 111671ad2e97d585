#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/logging_utils.py
"""Logging setup for applications that run flare2markup conversions.

Modules only create ``logging.getLogger(__name__)`` loggers under the
``flare2markup`` namespace. List repairs, unresolved variables and missing
snippets are logged at WARNING; list analysis and post-pass timings at DEBUG.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LIBRARY_LOGGER = "flare2markup"


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    library_level: int | str | None = None,
) -> logging.Logger:
    """Configure root logging handlers for batch conversion jobs.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO"); unknown names fall back to INFO
    log_file : str, optional
        Path of a log file that receives the same records as stderr
    trace_mode : bool, default False
        Include timestamps and logger names, useful when tracing one topic
    library_level : int | str, optional
        Separate level for the ``flare2markup`` loggers, e.g. "DEBUG" to trace
        list analysis while the application stays at INFO

    Returns
    -------
    logging.Logger
        The configured root logger.

    """
    resolved_level = _resolve_level(log_level)
    handler_level = resolved_level

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    if library_level is not None:
        library_logger.setLevel(_resolve_level(library_level))
        handler_level = min(resolved_level, library_logger.level)
    else:
        library_logger.setLevel(logging.NOTSET)

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    for handler in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if file_error is not None:
        root_logger.warning("Could not create log file %s: %s", log_file, file_error)
    elif log_file:
        root_logger.info("Logging to file: %s", log_file)

    # BeautifulSoup reports markup it had to guess at; keep it out of conversion logs
    logging.getLogger("bs4").setLevel(max(resolved_level, logging.WARNING))

    return root_logger
