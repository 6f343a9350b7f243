"""
Validation of DNS configuration objects.

A configuration is checked in three passes: federations, stub domains and
upstream nameservers. The first invalid entry rejects the whole object.
"""

import re

from kubedns_sync.config.model import (
    FEDERATIONS_KEY,
    STUB_DOMAINS_KEY,
    UPSTREAM_NAMESERVERS_KEY,
    Configuration,
)
from kubedns_sync.errors import SyncError
from kubedns_sync.utils.nameserver import parse_ip, validate_nameserver_ip_and_port

DNS1123_LABEL_MAX_LENGTH = 63
DNS1123_SUBDOMAIN_MAX_LENGTH = 253
MAX_UPSTREAM_NAMESERVERS = 3

_DNS1123_LABEL = re.compile(r"[a-z0-9]([-a-z0-9]*[a-z0-9])?")
_UINT = re.compile(r"[0-9]+")


class ValidationError(SyncError, ValueError):
    """
    A configuration failed validation.

    Attributes:
        field: Wire name of the failing pass ('federations', 'stubDomains'
               or 'upstreamNameservers')
    """

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


def is_dns1123_label(value: str) -> bool:
    """Check for a lowercase RFC 1123 label, e.g. 'my-name'."""
    return (
        len(value) <= DNS1123_LABEL_MAX_LENGTH
        and _DNS1123_LABEL.fullmatch(value) is not None
    )


def is_dns1123_subdomain(value: str) -> bool:
    """Check for a lowercase RFC 1123 subdomain, e.g. 'example.com'."""
    if not value or len(value) > DNS1123_SUBDOMAIN_MAX_LENGTH:
        return False
    return all(is_dns1123_label(label) for label in value.split("."))


def validate_federation_name(name: str) -> None:
    if not is_dns1123_label(name):
        raise ValidationError(
            FEDERATIONS_KEY, f'"{name}" not a valid federation name'
        )


def validate_federation_domain(domain: str) -> None:
    if not is_dns1123_subdomain(domain):
        raise ValidationError(
            FEDERATIONS_KEY, f'"{domain}" not a valid federation domain'
        )


def validate_federations(config: Configuration) -> None:
    for name, domain in config.federations.items():
        validate_federation_name(name)
        validate_federation_domain(domain)


def validate_stub_domains(config: Configuration) -> None:
    """
    Check stub domain names and their nameservers.

    Nameservers are split on the first ':' only, so unbracketed IPv6
    literals are not supported. A nameserver whose host is not an IP is
    still accepted when the whole string is a DNS-1123 subdomain.
    """
    for domain, nameservers in config.stub_domains.items():
        if not is_dns1123_subdomain(domain):
            raise ValidationError(STUB_DOMAINS_KEY, f'invalid domain name: "{domain}"')

        for ns in nameservers:
            host, sep, port = ns.partition(":")
            if sep and (not _UINT.fullmatch(port) or int(port) > 65535):
                raise ValidationError(STUB_DOMAINS_KEY, f'invalid nameserver: "{ns}"')
            if parse_ip(host) is None and not is_dns1123_subdomain(ns):
                raise ValidationError(STUB_DOMAINS_KEY, f'invalid nameserver: "{ns}"')


def validate_upstream_nameservers(config: Configuration) -> None:
    if len(config.upstream_nameservers) > MAX_UPSTREAM_NAMESERVERS:
        raise ValidationError(
            UPSTREAM_NAMESERVERS_KEY,
            "upstreamNameserver cannot have more than three entries",
        )

    for ns in config.upstream_nameservers:
        try:
            validate_nameserver_ip_and_port(ns)
        except ValueError as e:
            raise ValidationError(
                UPSTREAM_NAMESERVERS_KEY, f'invalid upstream nameserver "{ns}": {e}'
            ) from e


def validate(config: Configuration) -> None:
    """
    Validate a configuration.

    Args:
        config: The configuration to check

    Raises:
        ValidationError: on the first invalid entry, checking federations,
                         then stub domains, then upstream nameservers
    """
    validate_federations(config)
    validate_stub_domains(config)
    validate_upstream_nameservers(config)
