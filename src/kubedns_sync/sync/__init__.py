"""
Configuration sources and the orchestration of their updates.

    sync = select_backend(settings, kube_client)
    start(sync, apply_config, consume(apply_config))
"""

from kubedns_sync.sync.base import Sync, UpdateStream
from kubedns_sync.sync.configmap import ConfigMapSync
from kubedns_sync.sync.directory import DirectorySync
from kubedns_sync.sync.orchestrator import consume, select_backend, start
from kubedns_sync.sync.static import StaticSync

__all__ = [
    "ConfigMapSync",
    "DirectorySync",
    "StaticSync",
    "Sync",
    "UpdateStream",
    "consume",
    "select_backend",
    "start",
]
