"""
The sync capability shared by all configuration sources.

Every source offers a one-shot fetch and a stream of later snapshots. A
stream is fed by a single background producer through a queue holding at
most one configuration, so a slow consumer blocks the producer instead of
letting updates pile up.
"""

import queue
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping

from kubedns_sync.config.model import Configuration
from kubedns_sync.config.validation import validate

Emit = Callable[[Configuration], None]
Producer = Callable[[Emit], None]


class UpdateStream:
    """
    Single-consumer stream of configuration snapshots.

    Iterating blocks until the next snapshot arrives and never ends. A
    stream without a producer never yields anything.
    """

    def __init__(self, producer: Producer | None = None, name: str = "config-stream"):
        self._queue: queue.Queue[Configuration] = queue.Queue(maxsize=1)
        self._thread: threading.Thread | None = None
        if producer is not None:
            self._thread = threading.Thread(
                target=producer, args=(self._queue.put,), name=name, daemon=True
            )
            self._thread.start()

    def __iter__(self) -> Iterator[Configuration]:
        while True:
            yield self._queue.get()

    def poll(self, timeout: float | None = None) -> Configuration | None:
        """
        Return the next snapshot, or None if none arrives in time.

        Args:
            timeout: Seconds to wait; None or 0 returns immediately
        """
        try:
            if timeout:
                return self._queue.get(timeout=timeout)
            return self._queue.get_nowait()
        except queue.Empty:
            return None


class Sync(ABC):
    """A configuration source."""

    @abstractmethod
    def fetch_once(self) -> Configuration:
        """
        Fetch and validate the current configuration.

        Raises:
            SyncError: if the configuration cannot be read, parsed or
                       validated
        """

    @abstractmethod
    def stream(self) -> UpdateStream:
        """Start delivering configuration updates."""


def load_configuration(data: Mapping[str, str] | None) -> Configuration:
    """Parse ConfigMap style data and validate the result."""
    config = Configuration.from_data(data)
    validate(config)
    return config
