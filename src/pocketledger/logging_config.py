"""Logging setup for the pocketledger logger hierarchy."""

import logging
import sys
import threading
from typing import Any

_LOGGER_NAME = "pocketledger"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False
_lock = threading.Lock()


def configure_logging(level: int = logging.WARNING, stream: Any = None) -> None:
    """Attach a stream handler to the pocketledger logger (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)


def reset_logging() -> None:
    """Reset logging configuration. For tests only."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
