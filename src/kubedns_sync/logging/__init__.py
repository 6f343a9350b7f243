"""
Logging helpers for kubedns-sync.

The filter can also be used in a logging.yaml passed to --logging-config:

    filters:
      suppress_repeated:
        (): kubedns_sync.logging.SuppressRepeatedErrorsFilter
"""

from kubedns_sync.logging.config import setup_logging
from kubedns_sync.logging.filters import SuppressRepeatedErrorsFilter

__all__ = ["SuppressRepeatedErrorsFilter", "setup_logging"]
