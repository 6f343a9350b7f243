"""
The DNS configuration object and its external representation.

The wire format uses the field names 'federations', 'stubDomains' and
'upstreamNameservers'. In a ConfigMap each of them is a separate data key
holding JSON text; in a document all three live in one object.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import yaml

from kubedns_sync.errors import ConfigurationParseError


log = logging.getLogger(__name__)

FEDERATIONS_KEY = "federations"
STUB_DOMAINS_KEY = "stubDomains"
UPSTREAM_NAMESERVERS_KEY = "upstreamNameservers"

CONFIG_KEYS = (FEDERATIONS_KEY, STUB_DOMAINS_KEY, UPSTREAM_NAMESERVERS_KEY)


@dataclass
class Configuration:
    """
    DNS configuration populated from a ConfigMap, a directory or settings.

    Attributes:
        federations: Federation name -> domain name of the federations the
                     cluster belongs to
        stub_domains: Domain suffix (e.g. 'acme.local') -> nameservers that
                      receive the queries for that suffix
        upstream_nameservers: Nameservers used instead of the ones
                              inherited from the node (at most three)
    """

    federations: dict[str, str] = field(default_factory=dict)
    stub_domains: dict[str, list[str]] = field(default_factory=dict)
    upstream_nameservers: list[str] = field(default_factory=list)

    @classmethod
    def from_data(cls, data: Mapping[str, str] | None) -> "Configuration":
        """
        Build a configuration from ConfigMap style data.

        Each present key holds the text of one field. Missing keys keep
        their default value, other keys are ignored.

        Args:
            data: Mapping of wire field name to JSON/YAML text

        Returns:
            The parsed (not yet validated) configuration

        Raises:
            ConfigurationParseError: if a value cannot be parsed or has the
                                     wrong shape
        """
        document: dict[str, Any] = {}
        for key in CONFIG_KEYS:
            if not data or key not in data:
                continue
            text = data[key]
            if text is None:
                continue
            try:
                document[key] = yaml.safe_load(text)
            except yaml.YAMLError as e:
                raise ConfigurationParseError(key, str(e)) from e
        return cls.from_document(document)

    @classmethod
    def from_document(cls, document: Any) -> "Configuration":
        """
        Build a configuration from a whole-object document.

        Raises:
            ConfigurationParseError: if the document or one of its fields
                                     has the wrong shape
        """
        if document is None:
            return cls()
        if not isinstance(document, Mapping):
            raise ConfigurationParseError(
                "document", f"expected an object, got {type(document).__name__}"
            )

        unknown = set(document) - set(CONFIG_KEYS)
        if unknown:
            log.debug(f"Configuration: ignoring unknown fields {sorted(map(str, unknown))}")

        return cls(
            federations=_parse_federations(document.get(FEDERATIONS_KEY)),
            stub_domains=_parse_stub_domains(document.get(STUB_DOMAINS_KEY)),
            upstream_nameservers=_parse_upstream(document.get(UPSTREAM_NAMESERVERS_KEY)),
        )

    def to_data(self) -> dict[str, Any]:
        """Return the configuration keyed by its wire field names."""
        return {
            FEDERATIONS_KEY: dict(self.federations),
            STUB_DOMAINS_KEY: {k: list(v) for k, v in self.stub_domains.items()},
            UPSTREAM_NAMESERVERS_KEY: list(self.upstream_nameservers),
        }


def _parse_federations(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationParseError(FEDERATIONS_KEY, "expected an object")
    for name, domain in value.items():
        if not isinstance(name, str) or not isinstance(domain, str):
            raise ConfigurationParseError(
                FEDERATIONS_KEY, f"expected string name and domain, got {name!r}: {domain!r}"
            )
    return dict(value)


def _parse_stub_domains(value: Any) -> dict[str, list[str]]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationParseError(STUB_DOMAINS_KEY, "expected an object")
    stub_domains: dict[str, list[str]] = {}
    for domain, nameservers in value.items():
        if not isinstance(domain, str):
            raise ConfigurationParseError(
                STUB_DOMAINS_KEY, f"expected a string domain, got {domain!r}"
            )
        stub_domains[domain] = _parse_string_list(STUB_DOMAINS_KEY, nameservers)
    return stub_domains


def _parse_upstream(value: Any) -> list[str]:
    if value is None:
        return []
    return _parse_string_list(UPSTREAM_NAMESERVERS_KEY, value)


def _parse_string_list(key: str, value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationParseError(key, f"expected a list of strings, got {value!r}")
    return list(value)
