"""
Logging filters for suppressing repeated warnings from configuration sources.
"""

import logging
import threading


class SuppressRepeatedErrorsFilter(logging.Filter):
    """
    Drop a warning or error identical to the previous one from the same logger.

    A directory that stays broken fails on every poll; only the first
    failure is logged until the message changes or something else is
    logged by that logger.
    """

    def __init__(self, name: str = ""):
        super().__init__(name)
        self._last: dict[str, tuple[int, str]] = {}
        self._lock = threading.Lock()

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            msg = record.getMessage()
        except Exception:
            return True

        key = (record.levelno, msg)
        with self._lock:
            previous = self._last.get(record.name)
            self._last[record.name] = key

        if record.levelno < logging.WARNING:
            return True
        return previous != key
