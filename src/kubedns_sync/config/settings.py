"""
Bootstrap settings selecting where the DNS configuration comes from.
"""

from dataclasses import dataclass, field

from kubedns_sync.config.model import Configuration
from kubedns_sync.utils.nameserver import split_nameservers

DEFAULT_CLUSTER_DOMAIN = "cluster.local."
DEFAULT_CONFIGMAP_NAMESPACE = "kube-system"
DEFAULT_CONFIG_PERIOD = 10.0


@dataclass(frozen=True)
class Settings:
    """
    Immutable settings for a configuration sync.

    At most one of configmap and config_dir may be set. When neither is,
    the configuration is built from federations and nameservers.

    Settings are not hashable since federations is a dict.

    Attributes:
        cluster_domain: Domain served by the cluster DNS
        configmap_namespace: Namespace of the ConfigMap
        configmap: Name of the ConfigMap holding the configuration
        config_dir: Directory holding the configuration files
        config_period: Seconds between two reads of config_dir
        federations: Federation name -> domain used without a ConfigMap
        nameservers: Comma-separated upstream nameservers used without a
                     ConfigMap, e.g. '8.8.8.8,8.8.4.4:53'
    """

    cluster_domain: str = DEFAULT_CLUSTER_DOMAIN
    configmap_namespace: str = DEFAULT_CONFIGMAP_NAMESPACE
    configmap: str = ""
    config_dir: str = ""
    config_period: float = DEFAULT_CONFIG_PERIOD
    federations: dict[str, str] = field(default_factory=dict)
    nameservers: str = ""

    __hash__ = None

    def static_configuration(self) -> Configuration:
        """Configuration assembled from the federations and nameservers."""
        return Configuration(
            federations=dict(self.federations),
            upstream_nameservers=split_nameservers(self.nameservers),
        )
