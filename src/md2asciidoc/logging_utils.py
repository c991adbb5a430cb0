"""Logging setup for the md2asciidoc command-line front end.

The conversion engine never installs handlers; every library module only
emits records through ``logging.getLogger(__name__)``. The CLI calls
:func:`configure_logging` once at startup.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_PLAIN_FORMAT = "md2asciidoc: %(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name or number into a numeric logging level.

    Unknown names fall back to ``WARNING``.
    """
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.WARNING)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install stderr (and optionally file) handlers on the package logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "DEBUG").
    log_file : str, optional
        Path of a log file that receives the same records.
    trace_mode : bool, default False
        Include timestamps and logger names in every record.

    Returns
    -------
    logging.Logger
        The configured ``md2asciidoc`` logger.

    """
    level = resolve_log_level(log_level)
    formatter = logging.Formatter(
        _TRACE_FORMAT if trace_mode else _PLAIN_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:  # pragma: no cover - depends on the filesystem
            log_file_error = exc

    package_logger = logging.getLogger("md2asciidoc")
    package_logger.setLevel(level)
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    if log_file_error is not None:
        package_logger.warning("Could not open log file %s: %s", log_file, log_file_error)

    return package_logger
