"""Logging setup for the FinTrack API."""
import logging
import sys
import threading
from typing import Optional

_LOGGER_PREFIX = "fintrack"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_configured = False
_lock = threading.Lock()


def configure_logging(level: str = "INFO", handler: Optional[logging.Handler] = None) -> None:
    """Configure the fintrack logger hierarchy (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(getattr(logging, level, logging.INFO))
    root_logger.propagate = False

    h = handler or logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(h)
