"""Logging helpers for tagreader.

All library records go to loggers below ``tagreader``. The package root
carries a NullHandler, so nothing is printed unless the application
configures logging itself. The scanner and reader only log at DEBUG:
degraded tokenization, failed mandatory searches, date format misses.

Example:
    >>> import logging
    >>> logging.getLogger("tagreader").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging

_ROOT = "tagreader"

logging.getLogger(_ROOT).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a tagreader module.

    Names outside the package namespace are moved under it, so
    ``get_logger("dates")`` and ``get_logger("tagreader.dates")`` are the
    same logger.

    Example:
        >>> get_logger("scanner").name
        'tagreader.scanner'
    """
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
