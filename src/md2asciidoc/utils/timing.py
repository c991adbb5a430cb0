#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2asciidoc/utils/timing.py
"""Timing helpers for DEBUG-level logging of conversion stages."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long a conversion stage took, when DEBUG logging is enabled.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the stage being timed (e.g., "Parsing (gfm)")

    Examples
    --------
        >>> with debug_timer(logger, "Rendering"):
        ...     text = renderer.render_to_string(document)
        ... # Logs: "Rendering completed in 0.01s" at DEBUG level

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
