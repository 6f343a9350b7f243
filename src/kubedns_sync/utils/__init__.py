"""
Utility functions for kubedns-sync.
"""

from kubedns_sync.utils.nameserver import (
    parse_federations,
    split_host_port,
    split_nameservers,
    validate_nameserver_ip_and_port,
)

__all__ = [
    "parse_federations",
    "split_host_port",
    "split_nameservers",
    "validate_nameserver_ip_and_port",
]
