"""
Exception hierarchy for kubedns-sync.
"""


class SyncError(Exception):
    """Base class for configuration synchronization errors."""


class ConfigurationParseError(SyncError):
    """The external representation of a configuration could not be parsed."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"invalid configuration data for {key!r}: {message}")


class ConfigSourceError(SyncError):
    """The configuration source could not be read."""


class ConfigMapNotFoundError(ConfigSourceError):
    def __init__(self, namespace: str, name: str):
        self.namespace = namespace
        self.name = name
        super().__init__(f"ConfigMap {namespace}:{name} was not found")


class StartupError(SyncError):
    """Synchronization cannot be started; the process must not continue."""


class ConflictingSourcesError(StartupError):
    def __init__(self):
        super().__init__("Cannot use both ConfigMap and ConfigDir")
