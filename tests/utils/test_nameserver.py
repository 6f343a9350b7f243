"""Tests for utils/nameserver.py"""

import pytest

from kubedns_sync.utils.nameserver import (
    parse_federations,
    split_host_port,
    split_nameservers,
    validate_nameserver_ip_and_port,
)


class TestSplitHostPort:
    """Tests for split_host_port()."""

    def test_ipv4(self):
        assert split_host_port("10.0.0.1:53") == ("10.0.0.1", "53")

    def test_hostname(self):
        assert split_host_port("ns.local:5353") == ("ns.local", "5353")

    def test_bracketed_ipv6(self):
        assert split_host_port("[2001:db8::1]:53") == ("2001:db8::1", "53")

    def test_empty_port_kept(self):
        assert split_host_port("10.0.0.1:") == ("10.0.0.1", "")

    @pytest.mark.parametrize(
        "address",
        ["10.0.0.1", "2001:db8::1", "[2001:db8::1]", "[2001:db8::1", "[::1]x53", "a:b:c"],
    )
    def test_invalid(self, address):
        with pytest.raises(ValueError):
            split_host_port(address)


class TestValidateNameserverIpAndPort:
    """Tests for validate_nameserver_ip_and_port()."""

    def test_bare_ip_gets_default_port(self):
        """'10.0.0.1' is normalized to ('10.0.0.1', '53')."""
        assert validate_nameserver_ip_and_port("10.0.0.1") == ("10.0.0.1", "53")

    def test_bare_ipv6(self):
        assert validate_nameserver_ip_and_port("2001:db8::1") == ("2001:db8::1", "53")

    def test_ip_and_port(self):
        assert validate_nameserver_ip_and_port("10.0.0.1:5353") == ("10.0.0.1", "5353")

    def test_bracketed_ipv6_and_port(self):
        assert validate_nameserver_ip_and_port("[::1]:53") == ("::1", "53")

    @pytest.mark.parametrize("port", ["0", "65536", "70000", "-1", "abc", ""])
    def test_bad_port(self, port):
        with pytest.raises(ValueError, match="bad port number"):
            validate_nameserver_ip_and_port(f"10.0.0.1:{port}")

    def test_bad_ip(self):
        with pytest.raises(ValueError, match="bad IP address"):
            validate_nameserver_ip_and_port("not-an-ip:53")

    @pytest.mark.parametrize("nameserver", ["fe80::1%eth0", "[fe80::1%eth0]:53"])
    def test_ipv6_zone_rejected(self, nameserver):
        with pytest.raises(ValueError):
            validate_nameserver_ip_and_port(nameserver)

    def test_hostname_without_port(self):
        with pytest.raises(ValueError, match="missing port"):
            validate_nameserver_ip_and_port("ns.corp.local")


class TestSplitNameservers:
    """Tests for split_nameservers()."""

    def test_splits_on_comma(self):
        assert split_nameservers("8.8.8.8,8.8.4.4") == ["8.8.8.8", "8.8.4.4"]

    def test_trims_and_drops_empty(self):
        assert split_nameservers(" 8.8.8.8 , ,8.8.4.4:53,") == ["8.8.8.8", "8.8.4.4:53"]

    def test_empty(self):
        assert split_nameservers("") == []


class TestParseFederations:
    """Tests for parse_federations()."""

    def test_single(self):
        assert parse_federations("myfed=example.com") == {"myfed": "example.com"}

    def test_multiple(self):
        assert parse_federations("a=a.example.com, b=b.example.com") == {
            "a": "a.example.com",
            "b": "b.example.com",
        }

    def test_empty(self):
        assert parse_federations("") == {}

    @pytest.mark.parametrize("value", ["myfed", "=example.com", "myfed="])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="expected name=domain"):
            parse_federations(value)
