"""
DNS configuration model, validation and sync settings.
"""

from kubedns_sync.config.model import Configuration
from kubedns_sync.config.settings import Settings
from kubedns_sync.config.validation import ValidationError, validate

__all__ = ["Configuration", "Settings", "ValidationError", "validate"]
