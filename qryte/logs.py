"""File logging for the order console."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from qryte.config import DEBUG_LOG_PATH

_FORMAT = "%(asctime)s %(name)s %(message)s"


class _UTCFormatter(logging.Formatter):
    converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return time.strftime("%Y-%m-%dT%H:%M:%S", self.converter(record.created)) + f".{int(record.msecs):03d}Z"


def configure_logging(path: str | Path | None = None, level: int = logging.DEBUG) -> logging.Handler | None:
    """Attach a debug file handler to the ``qryte`` logger; never raises."""
    log_file = Path(path or DEBUG_LOG_PATH)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        # Logging must never interfere with app flow.
        return None
    handler.setFormatter(_UTCFormatter(_FORMAT))
    root = logging.getLogger("qryte")
    root.setLevel(level)
    root.addHandler(handler)
    return handler
