#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sitemark/utils/decorators.py
"""Timing helpers for the render path."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger receiving the timing line
    operation : str
        Description of the timed operation (e.g. ``"Rendering (post.md)"``)

    Examples
    --------
        >>> with debug_timer(logger, "Rendering (hello.md)"):
        ...     html = markdown(text)
        ... # Logs: "Rendering (hello.md) completed in 0.01s" at DEBUG level

    Notes
    -----
    Nothing is measured unless DEBUG is enabled for ``logger``.

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield


__all__ = ["debug_timer"]
