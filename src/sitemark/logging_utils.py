"""Logging setup for hosts that render documents with sitemark.

sitemark modules log under the ``sitemark`` namespace:

- DEBUG: option fallbacks, asset lookup misses, per-document render timings
- WARNING: failing resolver lookups, skipped mistune plugins
- ERROR: failing hooks (with traceback)

A site build that renders many posts calls ``configure_logging`` once to see
these records. Only the ``sitemark`` logger is touched; the host's root
logger and its handlers are left alone.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "sitemark"

# Set on handlers installed here so a second call replaces only those
_HANDLER_FLAG = "_sitemark_handler"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _install(logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_FLAG, True)
    logger.addHandler(handler)


def remove_handlers(logger: Optional[logging.Logger] = None) -> None:
    """Detach and close the handlers a previous ``configure_logging`` call installed."""
    logger = logger or logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_FLAG, False)]:
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    log_level: int | str = logging.WARNING,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send sitemark's log records to stderr and optionally a file.

    Parameters
    ----------
    log_level : int | str, default WARNING
        Numeric logging level or string name (e.g., "DEBUG" to see render
        timings). Unknown names select INFO.
    log_file : str, optional
        Path of a build log that also receives the records.
    trace_mode : bool, default False
        When true, emit timestamps and module names, which tells apart the
        renderer, site lookups and hooks.

    Returns
    -------
    logging.Logger
        The ``sitemark`` package logger.

    Notes
    -----
    The package logger stops propagating to the root logger while these
    handlers are installed, so records are not printed twice by hosts that
    configure root logging themselves.

    """
    level = _resolve_level(log_level)

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    remove_handlers(package_logger)
    package_logger.setLevel(level)
    package_logger.propagate = False

    if trace_mode:
        format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
    else:
        format_str = "sitemark %(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    _install(package_logger, logging.StreamHandler(sys.stderr), level, formatter)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not open build log %s: %s", log_file, exc)
        else:
            _install(package_logger, file_handler, level, formatter)
            package_logger.debug("Writing render log to %s", log_file)

    return package_logger


__all__ = ["PACKAGE_LOGGER_NAME", "configure_logging", "remove_handlers"]
