"""
Shared fixtures and fakes for kubedns-sync tests.

The Kubernetes API is replaced by a fake CoreV1Api and a scripted watch,
so no cluster is needed.
"""

import json
import logging
import threading
from pathlib import Path

import pytest
from kubernetes.client import V1ConfigMap, V1ObjectMeta
from kubernetes.client.rest import ApiException

from kubedns_sync.config.model import Configuration
from kubedns_sync.sync import configmap as configmap_module


# ============================================================================
# Kubernetes fakes
# ============================================================================


def make_configmap(
    data: dict[str, str] | None = None,
    name: str = "kube-dns",
    namespace: str = "kube-system",
    resource_version: str = "1",
) -> V1ConfigMap:
    """Create a ConfigMap object as returned by the Kubernetes client."""
    return V1ConfigMap(
        data=data,
        metadata=V1ObjectMeta(
            name=name, namespace=namespace, resource_version=resource_version
        ),
    )


class FakeCoreV1Api:
    """
    Fake of kubernetes.client.CoreV1Api serving ConfigMaps from a dict.

    Keys are (namespace, name) tuples.
    """

    def __init__(self, configmaps: dict[tuple[str, str], V1ConfigMap] | None = None):
        self.configmaps = configmaps or {}
        self.reads: list[tuple[str, str]] = []

    def read_namespaced_config_map(self, name, namespace, **kwargs):
        self.reads.append((namespace, name))
        try:
            return self.configmaps[(namespace, name)]
        except KeyError:
            raise ApiException(status=404, reason="Not Found")

    def list_namespaced_config_map(self, namespace, **kwargs):
        raise AssertionError("list_namespaced_config_map is only called by the watch")


class FakeWatch:
    """
    Scripted replacement for kubernetes.watch.Watch.

    Each call to stream() consumes the next batch of the script: a list of
    events is yielded, an exception is raised. Once the script is exhausted
    stream() blocks forever, like an idle watch.
    """

    script: list = []
    calls: list = []

    def __init__(self):
        self.stopped = False

    def stream(self, func, *args, **kwargs):
        type(self).calls.append((func, args, kwargs))
        if not type(self).script:
            threading.Event().wait()
        batch = type(self).script.pop(0)
        if isinstance(batch, BaseException):
            raise batch
        yield from batch

    def stop(self):
        self.stopped = True


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def configmap():
    """Factory fixture to create ConfigMap objects."""
    return make_configmap


@pytest.fixture
def kube_client():
    """Factory fixture to create fake Kubernetes clients."""

    def _create(*configmaps: V1ConfigMap) -> FakeCoreV1Api:
        return FakeCoreV1Api(
            {(cm.metadata.namespace, cm.metadata.name): cm for cm in configmaps}
        )

    return _create


@pytest.fixture
def fake_watch(monkeypatch):
    """Install a fresh scripted watch; set .script before streaming."""
    watch_cls = type("ScriptedWatch", (FakeWatch,), {"script": [], "calls": []})
    monkeypatch.setattr(configmap_module.watch, "Watch", watch_cls)
    return watch_cls


@pytest.fixture
def config_dir(tmp_path):
    """Factory fixture writing files into a configuration directory."""

    def _create(files: dict[str, object] | None = None) -> Path:
        directory = tmp_path / "kube-dns-config"
        directory.mkdir(exist_ok=True)
        for name, content in (files or {}).items():
            if isinstance(content, bytes):
                (directory / name).write_bytes(content)
                continue
            text = content if isinstance(content, str) else json.dumps(content)
            (directory / name).write_text(text)
        return directory

    return _create


@pytest.fixture
def valid_config():
    """A configuration exercising every field."""
    return Configuration(
        federations={"myfed": "example.com"},
        stub_domains={"acme.local": ["1.2.3.4", "1.2.3.5:5353"]},
        upstream_nameservers=["8.8.8.8", "8.8.4.4:53"],
    )


@pytest.fixture
def valid_configmap_data():
    """ConfigMap data matching valid_config."""
    return {
        "federations": '{"myfed": "example.com"}',
        "stubDomains": '{"acme.local": ["1.2.3.4", "1.2.3.5:5353"]}',
        "upstreamNameservers": '["8.8.8.8", "8.8.4.4:53"]',
    }


@pytest.fixture
def restore_root_logger():
    """Undo changes made to the root logger by setup_logging()."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
