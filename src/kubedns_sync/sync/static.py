"""
Sync for a configuration that never changes, e.g. one built from flags.
"""

import logging

from kubedns_sync.config.model import Configuration
from kubedns_sync.config.validation import validate
from kubedns_sync.sync.base import Sync, UpdateStream


log = logging.getLogger(__name__)


class StaticSync(Sync):
    """
    Sync wrapping a single pre-built configuration.

    The configuration is validated on construction, so an invalid
    configuration, e.g. from --nameservers, fails at startup and
    fetch_once() never fails. The stream never delivers anything since
    there is nothing to watch.
    """

    def __init__(self, config: Configuration):
        validate(config)
        self.config = config
        log.info(
            f"StaticSync: initialized with {len(config.upstream_nameservers)} upstream "
            f"nameservers and {len(config.federations)} federations"
        )

    def fetch_once(self) -> Configuration:
        return self.config

    def stream(self) -> UpdateStream:
        return UpdateStream()
