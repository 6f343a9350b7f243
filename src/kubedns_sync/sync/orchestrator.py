"""
Selection of the configuration source and start of the update loop.
"""

import logging
import threading
from collections.abc import Callable

from kubedns_sync.config.model import Configuration
from kubedns_sync.config.settings import Settings
from kubedns_sync.errors import ConflictingSourcesError, StartupError
from kubedns_sync.sync.base import Sync, UpdateStream
from kubedns_sync.sync.configmap import ConfigMapSync
from kubedns_sync.sync.directory import DirectorySync
from kubedns_sync.sync.static import StaticSync


log = logging.getLogger(__name__)


def select_backend(settings: Settings, kube_client=None) -> Sync:
    """
    Create the sync for the configuration source named by the settings.

    Args:
        settings: Bootstrap settings
        kube_client: Kubernetes CoreV1Api client, required for a ConfigMap

    Returns:
        A ConfigMapSync, DirectorySync or StaticSync

    Raises:
        ConflictingSourcesError: if both a ConfigMap and a directory are set
        StartupError: if a ConfigMap is set but no client was given
        ValidationError: if the static configuration is invalid
    """
    if settings.configmap and settings.config_dir:
        raise ConflictingSourcesError()

    if settings.configmap:
        if kube_client is None:
            raise StartupError("a Kubernetes client is required to read a ConfigMap")
        log.info(
            f"Using configuration read from ConfigMap: "
            f"{settings.configmap_namespace}:{settings.configmap}"
        )
        return ConfigMapSync(kube_client, settings.configmap_namespace, settings.configmap)

    if settings.config_dir:
        log.info(
            f"Using configuration read from directory: {settings.config_dir} "
            f"with period {settings.config_period}s"
        )
        return DirectorySync(settings.config_dir, settings.config_period)

    log.info("ConfigMap and ConfigDir not configured, using values from settings")
    return StaticSync(settings.static_configuration())


def start(
    sync: Sync,
    on_update: Callable[[Configuration], None],
    on_stream: Callable[[UpdateStream], None],
) -> threading.Thread:
    """
    Deliver the initial configuration and start the update loop.

    on_update is called with the initial configuration before this
    function returns. on_stream then runs on a daemon thread with the
    sync's update stream and is expected to consume it for the lifetime
    of the process.

    Args:
        sync: The configuration source
        on_update: Called once with the initial configuration
        on_stream: Called with the stream of later configurations

    Returns:
        The thread running on_stream

    Raises:
        SyncError: if the initial configuration cannot be fetched
    """
    initial = sync.fetch_once()
    on_update(initial)

    thread = threading.Thread(
        target=on_stream, args=(sync.stream(),), name="config-sync", daemon=True
    )
    thread.start()
    return thread


def consume(on_update: Callable[[Configuration], None]) -> Callable[[UpdateStream], None]:
    """Wrap a per-configuration callback into a stream consumer."""

    def _consume(stream: UpdateStream) -> None:
        for config in stream:
            on_update(config)

    return _consume
