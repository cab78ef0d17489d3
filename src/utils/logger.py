"""Centralized logging setup for the passport OCR service.

All modules log through named stdlib loggers; this module installs the
single stdout handler and keeps chatty third-party loggers quiet.
"""

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP and imaging libraries log every request/decoder at DEBUG.
_NOISY_LOGGERS = ("urllib3", "PIL", "multipart")


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure the root logger once.

    Args:
        level: Logging level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        stream: Output stream for the handler. Defaults to stdout.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()

    if root.handlers:
        return

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Get a named logger, typically for ``__name__`` of the calling module."""
    return logging.getLogger(name)
