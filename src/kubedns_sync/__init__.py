"""
kubedns-sync: configuration synchronization for cluster DNS resolvers.

Obtains the stub domain, upstream nameserver and federation configuration
from a ConfigMap, a directory or static settings, validates it, and
delivers an initial value plus a stream of updates to a consumer.
"""

__version__ = "0.1.0"
