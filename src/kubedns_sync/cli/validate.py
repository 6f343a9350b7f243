#!/usr/bin/env python3
"""
Validate a DNS configuration directory or file.

Reads the configuration once, the way the sync would, and shows the
result as tables.

Exit codes:
  0 - Configuration is valid
  1 - Configuration could not be read or is invalid
"""

import argparse
import sys

import yaml
from tabulate import tabulate

from kubedns_sync.config.model import Configuration
from kubedns_sync.config.validation import validate
from kubedns_sync.errors import ConfigSourceError, ConfigurationParseError, SyncError
from kubedns_sync.logging import setup_logging
from kubedns_sync.sync.directory import DirectorySync
from kubedns_sync.utils.nameserver import validate_nameserver_ip_and_port


def load_file(path: str) -> Configuration:
    """Load and validate a single configuration document."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigSourceError(f"cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationParseError(path, str(e)) from e

    config = Configuration.from_document(document)
    validate(config)
    return config


def format_configuration(config: Configuration) -> list[str]:
    """Format a validated configuration as tables."""
    lines = []

    if config.upstream_nameservers:
        rows = []
        for ns in config.upstream_nameservers:
            ip, port = validate_nameserver_ip_and_port(ns)
            rows.append([ns, ip, port])
        lines.append("UPSTREAM NAMESERVERS")
        lines.append(tabulate(rows, headers=["Nameserver", "IP", "Port"], tablefmt="simple"))
        lines.append("")

    if config.stub_domains:
        rows = [
            [domain, ", ".join(nameservers)]
            for domain, nameservers in sorted(config.stub_domains.items())
        ]
        lines.append("STUB DOMAINS")
        lines.append(tabulate(rows, headers=["Domain", "Nameservers"], tablefmt="simple"))
        lines.append("")

    if config.federations:
        rows = sorted(config.federations.items())
        lines.append("FEDERATIONS")
        lines.append(tabulate(rows, headers=["Name", "Domain"], tablefmt="simple"))
        lines.append("")

    if not lines:
        lines.append("Empty configuration (node defaults apply)")
        lines.append("")

    return lines


def main() -> int:
    p = argparse.ArgumentParser(description="Validate a kube-dns configuration")
    source = p.add_mutually_exclusive_group(required=True)
    source.add_argument("--config-dir", help="Configuration directory")
    source.add_argument("--file", help="Single configuration document (JSON/YAML)")
    p.add_argument("--logging-config", help="Logging config file")
    args = p.parse_args()

    setup_logging(args.logging_config)

    try:
        if args.config_dir:
            config = DirectorySync(args.config_dir, period=1).fetch_once()
        else:
            config = load_file(args.file)
    except SyncError as e:
        print("Validation failed", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return 1

    for line in format_configuration(config):
        print(line)
    print("Configuration is valid")
    return 0


if __name__ == "__main__":
    sys.exit(main())
