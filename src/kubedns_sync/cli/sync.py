#!/usr/bin/env python3
"""
Keep a DNS configuration in sync with its source.

Selects the configuration source from the flags, delivers the initial
configuration and then every update until the process is stopped. Each
configuration is logged and, with --print, written to stdout as a YAML
document.

Exit codes:
  0 - Stopped by the user
  1 - Synchronization could not be started
"""

import argparse
import logging
import sys

import yaml
from kubernetes import client, config as kube_config
from kubernetes.config import ConfigException

from kubedns_sync.config.model import Configuration
from kubedns_sync.config.settings import (
    DEFAULT_CLUSTER_DOMAIN,
    DEFAULT_CONFIG_PERIOD,
    DEFAULT_CONFIGMAP_NAMESPACE,
    Settings,
)
from kubedns_sync.errors import StartupError, SyncError
from kubedns_sync.logging import setup_logging
from kubedns_sync.sync.orchestrator import consume, select_backend, start
from kubedns_sync.utils.nameserver import parse_federations


log = logging.getLogger(__name__)


def build_kube_client(kubeconfig: str | None = None) -> client.CoreV1Api:
    """Load the in-cluster credentials, or a kubeconfig file when given."""
    try:
        if kubeconfig:
            kube_config.load_kube_config(config_file=kubeconfig)
        else:
            kube_config.load_incluster_config()
    except ConfigException as e:
        raise StartupError(f"cannot load Kubernetes credentials: {e}") from e
    return client.CoreV1Api()


def settings_from_args(args: argparse.Namespace) -> Settings:
    try:
        federations = parse_federations(args.federations)
    except ValueError as e:
        raise StartupError(f"invalid --federations: {e}") from e

    return Settings(
        cluster_domain=args.cluster_domain,
        configmap_namespace=args.configmap_namespace,
        configmap=args.configmap,
        config_dir=args.config_dir,
        config_period=args.config_period,
        federations=federations,
        nameservers=args.nameservers,
    )


def make_consumer(print_config: bool):
    """Return the callback applied to every configuration."""

    def apply_config(config: Configuration) -> None:
        log.info(
            f"Applying configuration: upstreamNameservers={config.upstream_nameservers}, "
            f"stubDomains={sorted(config.stub_domains)}, "
            f"federations={sorted(config.federations)}"
        )
        if print_config:
            sys.stdout.write(
                yaml.safe_dump(config.to_data(), explicit_start=True, sort_keys=True)
            )
            sys.stdout.flush()

    return apply_config


def main() -> int:
    p = argparse.ArgumentParser(description="Synchronize kube-dns configuration")
    p.add_argument(
        "--cluster-domain", default=DEFAULT_CLUSTER_DOMAIN, help="Cluster domain"
    )
    p.add_argument("--configmap", default="", help="ConfigMap holding the configuration")
    p.add_argument(
        "--configmap-namespace",
        default=DEFAULT_CONFIGMAP_NAMESPACE,
        help="Namespace of the ConfigMap",
    )
    p.add_argument("--config-dir", default="", help="Directory holding the configuration")
    p.add_argument(
        "--config-period",
        type=float,
        default=DEFAULT_CONFIG_PERIOD,
        help="Seconds between two reads of --config-dir",
    )
    p.add_argument(
        "--federations", default="", help="Federations as name=domain,name2=domain2"
    )
    p.add_argument(
        "--nameservers", default="", help="Comma-separated upstream nameservers"
    )
    p.add_argument("--kubeconfig", help="Kubeconfig file (default: in-cluster)")
    p.add_argument(
        "--print", dest="print_config", action="store_true", help="Print each configuration"
    )
    p.add_argument("--logging-config", help="Logging config file")
    args = p.parse_args()

    setup_logging(args.logging_config)

    apply_config = make_consumer(args.print_config)
    try:
        settings = settings_from_args(args)
        kube_client = None
        if settings.configmap and not settings.config_dir:
            kube_client = build_kube_client(args.kubeconfig)
        sync = select_backend(settings, kube_client)
        thread = start(sync, apply_config, consume(apply_config))
    except SyncError as e:
        log.critical(f"Failed to start configuration sync: {e}")
        return 1

    try:
        thread.join()
    except KeyboardInterrupt:
        log.info("Interrupted, exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
