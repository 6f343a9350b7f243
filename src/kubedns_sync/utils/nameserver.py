"""
Nameserver address and flag parsing utilities for kubedns-sync.

Provides strict host:port splitting, upstream nameserver validation and
the parsers for the comma-separated command line values.
"""

import ipaddress
import re

DEFAULT_DNS_PORT = "53"

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")


def parse_ip(value: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    """
    Return the parsed IP address, or None if value is not an IP literal.

    IPv6 scope IDs such as 'fe80::1%eth0' are not IP literals.
    """
    if "%" in value:
        return None
    try:
        return ipaddress.ip_address(value)
    except ValueError:
        return None


def split_host_port(address: str) -> tuple[str, str]:
    """
    Split a network address of the form 'host:port' or '[host]:port'.

    A literal IPv6 host must be enclosed in square brackets. The port is
    returned unparsed.

    Args:
        address: Address to split, e.g. '10.0.0.1:5353' or '[::1]:53'

    Returns:
        tuple of (host, port)

    Raises:
        ValueError: if the address has no port, too many colons or
                    unbalanced brackets
    """
    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise ValueError(f"address {address}: missing ']' in address")
        host = address[1:end]
        rest = address[end + 1 :]
        if not rest:
            raise ValueError(f"address {address}: missing port in address")
        if not rest.startswith(":") or ":" in rest[1:]:
            raise ValueError(f"address {address}: unexpected characters after ']'")
        return host, rest[1:]

    i = address.rfind(":")
    if i < 0:
        raise ValueError(f"address {address}: missing port in address")
    host = address[:i]
    if ":" in host:
        raise ValueError(f"address {address}: too many colons in address")
    if "[" in host or "]" in host:
        raise ValueError(f"address {address}: unexpected bracket in address")
    return host, address[i + 1 :]


def validate_nameserver_ip_and_port(nameserver: str) -> tuple[str, str]:
    """
    Split and validate the IP and port of an upstream nameserver.

    A bare IP address gets the default port 53.

    Args:
        nameserver: Nameserver address, e.g. '8.8.8.8' or '10.0.0.1:5353'

    Returns:
        tuple of (ip, port) as strings

    Raises:
        ValueError: if the host is not an IP address or the port is not
                    in 1-65535
    """
    ip = parse_ip(nameserver)
    if ip is not None:
        return str(ip), DEFAULT_DNS_PORT

    host, port = split_host_port(nameserver)
    if parse_ip(host) is None:
        raise ValueError(f'bad IP address: "{host}"')
    if not _SIGNED_INT.fullmatch(port) or not 1 <= int(port) <= 65535:
        raise ValueError(f'bad port number: "{port}"')
    return host, port


def split_nameservers(value: str) -> list[str]:
    """
    Parse a comma-separated nameserver list, e.g. '8.8.8.8,8.8.4.4:53'.

    Whitespace around entries is trimmed and empty entries are dropped.
    """
    return [ns.strip() for ns in value.split(",") if ns.strip()]


def parse_federations(value: str) -> dict[str, str]:
    """
    Parse a federations flag value of the form 'name=domain,name2=domain2'.

    Args:
        value: Comma-separated list of name=domain pairs

    Returns:
        dict mapping federation names to domains

    Raises:
        ValueError: if an entry is not a name=domain pair
    """
    federations: dict[str, str] = {}
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, domain = item.partition("=")
        if not sep or not name.strip() or not domain.strip():
            raise ValueError(f"invalid federation entry {item!r}, expected name=domain")
        federations[name.strip()] = domain.strip()
    return federations
