"""
Sync reading the DNS configuration from a directory.

Two layouts are understood and can be mixed:

- ConfigMap volume layout: files named 'federations', 'stubDomains' and
  'upstreamNameservers', each holding the JSON value of that field.
- Fragment files ending in .json, .yaml or .yml, each holding a whole
  object with any of the three fields.

Files are applied in sorted name order; a later file overrides the fields
it sets. Hidden entries such as the '..data' links of projected volumes
are skipped.
"""

import logging
import time
from pathlib import Path

import yaml

from kubedns_sync.config.model import CONFIG_KEYS, Configuration
from kubedns_sync.config.validation import validate
from kubedns_sync.errors import ConfigSourceError, ConfigurationParseError, SyncError
from kubedns_sync.sync.base import Emit, Sync, UpdateStream


log = logging.getLogger(__name__)

FRAGMENT_SUFFIXES = (".json", ".yaml", ".yml")


class DirectorySync(Sync):
    """
    Sync polling a configuration directory.

    Args:
        directory: Directory holding the configuration files
        period: Seconds between two reads of the directory
    """

    def __init__(self, directory: str | Path, period: float):
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        self.directory = Path(directory)
        self.period = period
        log.info(
            f"DirectorySync: initialized with directory={self.directory}, "
            f"period={self.period}s"
        )

    def _read_document(self) -> dict:
        try:
            entries = sorted(p for p in self.directory.iterdir() if not p.name.startswith("."))
        except OSError as e:
            raise ConfigSourceError(f"cannot read directory {self.directory}: {e}") from e

        document: dict = {}
        for path in entries:
            if path.name in CONFIG_KEYS:
                key = path.name
            elif path.suffix in FRAGMENT_SUFFIXES:
                key = None
            else:
                continue
            if not path.is_file():
                continue

            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigSourceError(f"cannot read {path}: {e}") from e
            try:
                value = yaml.safe_load(text)
            except yaml.YAMLError as e:
                raise ConfigurationParseError(key or path.name, str(e)) from e

            if key is not None:
                document[key] = value
            elif value is None:
                continue
            elif isinstance(value, dict):
                document.update((k, v) for k, v in value.items() if k in CONFIG_KEYS)
            else:
                raise ConfigurationParseError(path.name, "expected an object")

        return document

    def fetch_once(self) -> Configuration:
        config = Configuration.from_document(self._read_document())
        validate(config)
        return config

    def _poll(self, emit: Emit) -> None:
        next_tick = time.monotonic() + self.period
        while True:
            delay = next_tick - time.monotonic()
            if delay > 0:
                time.sleep(delay)
            # Ticks missed while the consumer was busy are dropped
            now = time.monotonic()
            while next_tick <= now:
                next_tick += self.period

            try:
                config = self.fetch_once()
            except SyncError as e:
                log.warning(f"DirectorySync: skipping update from {self.directory}: {e}")
                continue

            emit(config)

    def stream(self) -> UpdateStream:
        return UpdateStream(self._poll, name="directory-sync")
