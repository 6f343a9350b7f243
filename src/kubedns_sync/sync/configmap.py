"""
Sync reading the DNS configuration from a Kubernetes ConfigMap.

The ConfigMap data keys 'federations', 'stubDomains' and
'upstreamNameservers' each hold the JSON value of that field, e.g.:

    data:
      stubDomains: |
        {"acme.local": ["1.2.3.4"]}
      upstreamNameservers: |
        ["8.8.8.8", "8.8.4.4"]

Updates are picked up by watching the ConfigMap. Every change event is
forwarded; malformed updates are logged and dropped.
"""

import logging
import time

import urllib3
from kubernetes import watch
from kubernetes.client.rest import ApiException

from kubedns_sync.config.model import Configuration
from kubedns_sync.errors import ConfigMapNotFoundError, ConfigSourceError, SyncError
from kubedns_sync.sync.base import Emit, Sync, UpdateStream, load_configuration


log = logging.getLogger(__name__)

HTTP_NOT_FOUND = 404
HTTP_GONE = 410


class ConfigMapSync(Sync):
    """
    Sync watching a ConfigMap.

    Args:
        client: Kubernetes CoreV1Api (or compatible) client
        namespace: Namespace of the ConfigMap
        name: Name of the ConfigMap
        retry_period: Seconds to wait before re-establishing a failed watch
        watch_timeout: Server side timeout of a single watch request
    """

    def __init__(
        self,
        client,
        namespace: str,
        name: str,
        retry_period: float = 1.0,
        watch_timeout: int = 300,
    ):
        self.client = client
        self.namespace = namespace
        self.name = name
        self.retry_period = retry_period
        self.watch_timeout = watch_timeout
        log.info(f"ConfigMapSync: initialized with configmap={namespace}:{name}")

    def fetch_once(self) -> Configuration:
        try:
            configmap = self.client.read_namespaced_config_map(self.name, self.namespace)
        except ApiException as e:
            if e.status == HTTP_NOT_FOUND:
                raise ConfigMapNotFoundError(self.namespace, self.name) from e
            raise ConfigSourceError(
                f"cannot read ConfigMap {self.namespace}:{self.name}: {e.status} {e.reason}"
            ) from e
        return load_configuration(configmap.data)

    def _handle_event(self, event: dict, emit: Emit) -> str | None:
        """
        Forward one watch event.

        Returns:
            The resource version carried by the event, if any
        """
        event_type = event.get("type")
        obj = event.get("object")
        metadata = getattr(obj, "metadata", None)
        version = getattr(metadata, "resource_version", None)

        if event_type in ("ADDED", "MODIFIED"):
            try:
                config = load_configuration(obj.data)
            except SyncError as e:
                log.warning(
                    f"ConfigMapSync: dropping invalid update of "
                    f"{self.namespace}:{self.name}: {e}"
                )
                return version
            log.info(
                f"ConfigMapSync: {self.namespace}:{self.name} {event_type.lower()} "
                f"(resourceVersion={version})"
            )
            emit(config)
        elif event_type == "DELETED":
            log.warning(
                f"ConfigMapSync: {self.namespace}:{self.name} was deleted, "
                f"reverting to default configuration"
            )
            emit(Configuration())
        else:
            log.warning(f"ConfigMapSync: ignoring watch event {event_type}: {obj}")
        return version

    def _watch(self, emit: Emit) -> None:
        resource_version = None
        while True:
            kwargs = {
                "field_selector": f"metadata.name={self.name}",
                "timeout_seconds": self.watch_timeout,
            }
            if resource_version:
                kwargs["resource_version"] = resource_version

            w = watch.Watch()
            try:
                for event in w.stream(
                    self.client.list_namespaced_config_map, self.namespace, **kwargs
                ):
                    resource_version = self._handle_event(event, emit) or resource_version
                continue
            except ApiException as e:
                if e.status == HTTP_GONE:
                    log.info(
                        f"ConfigMapSync: resourceVersion {resource_version} expired, "
                        f"restarting watch"
                    )
                    resource_version = None
                else:
                    log.warning(f"ConfigMapSync: watch failed: {e.status} {e.reason}")
            except (urllib3.exceptions.HTTPError, OSError) as e:
                log.warning(f"ConfigMapSync: watch disconnected: {e}")
            finally:
                w.stop()

            time.sleep(self.retry_period)

    def stream(self) -> UpdateStream:
        return UpdateStream(self._watch, name="configmap-sync")
