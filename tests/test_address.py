"""Tests for sdpx._address."""

import socket

import pytest

from sdpx import (
    MAX_SDP_ADDRESS,
    AddressFormatError,
    MalformedAddressError,
    NetworkAddress,
    UnsupportedFamilyError,
    format_address,
    ip_version,
)


class TestIPv4:
    def test_unicast(self, nameinfo) -> None:
        addr = NetworkAddress.from_host("192.168.1.100", 5004)
        assert format_address(addr, nameinfo) == "IN IP4 192.168.1.100"

    @pytest.mark.parametrize("host", ["224.0.0.1", "239.1.1.1", "239.255.255.250"])
    def test_multicast_gets_ttl(self, host, nameinfo) -> None:
        value = format_address(NetworkAddress.from_host(host, 5004), nameinfo)
        assert value.startswith("IN IP4 ")
        assert value.endswith("/255")
        assert value == f"IN IP4 {host}/255"

    def test_system_getnameinfo(self) -> None:
        addr = NetworkAddress(socket.AF_INET, ("239.1.1.1", 5004))
        assert format_address(addr) == "IN IP4 239.1.1.1/255"

    def test_marker(self, nameinfo) -> None:
        value = format_address(NetworkAddress.from_host("10.0.0.1"), nameinfo)
        assert ip_version(value) == "4"


class TestIPv6:
    def test_unicast(self, nameinfo) -> None:
        value = format_address(NetworkAddress.from_host("2001:db8::1", 5004), nameinfo)
        assert value == "IN IP6 2001:db8::1"
        assert ip_version(value) == "6"

    def test_multicast_has_no_ttl(self, nameinfo) -> None:
        value = format_address(NetworkAddress.from_host("ff0e::1", 5004), nameinfo)
        assert value == "IN IP6 ff0e::1"

    def test_scope_id_stripped(self, nameinfo) -> None:
        addr = NetworkAddress(socket.AF_INET6, ("fe80::1", 5004, 0, 3))
        value = format_address(addr, nameinfo)
        assert value.startswith("IN IP6 ")
        assert "%" not in value
        assert value == "IN IP6 fe80::1"

    def test_named_zone_stripped(self) -> None:
        def named_zone(sockaddr, flags):
            return "fe80::abcd%eth0", "0"

        addr = NetworkAddress(socket.AF_INET6, ("fe80::abcd", 0, 0, 2))
        assert format_address(addr, named_zone) == "IN IP6 fe80::abcd"

    def test_from_host_rejects_ipv4_zone(self) -> None:
        with pytest.raises(ValueError):
            NetworkAddress.from_host("10.0.0.1%eth0")

    def test_from_host_numeric_zone(self) -> None:
        addr = NetworkAddress.from_host("fe80::1%7", 5004)
        assert addr.sockaddr == ("fe80::1", 5004, 0, 7)
        assert addr.is_ipv6

    def test_system_getnameinfo(self) -> None:
        addr = NetworkAddress(socket.AF_INET6, ("ff0e::1", 5004, 0, 0))
        assert format_address(addr) == "IN IP6 ff0e::1"


class TestFailures:
    def test_missing_family(self, nameinfo) -> None:
        with pytest.raises(MalformedAddressError):
            format_address(NetworkAddress(family=None), nameinfo)

    def test_empty_sockaddr(self, nameinfo) -> None:
        with pytest.raises(MalformedAddressError):
            format_address(NetworkAddress(socket.AF_INET, ()), nameinfo)

    def test_unsupported_family(self, nameinfo) -> None:
        with pytest.raises(UnsupportedFamilyError):
            format_address(NetworkAddress(socket.AF_UNIX, ("/tmp/sock",)), nameinfo)

    def test_nameinfo_failure(self) -> None:
        def broken(sockaddr, flags):
            raise OSError("boom")

        with pytest.raises(MalformedAddressError):
            format_address(NetworkAddress.from_host("10.0.0.1"), broken)

    def test_family_mismatch(self, nameinfo) -> None:
        with pytest.raises(MalformedAddressError):
            format_address(NetworkAddress(socket.AF_INET, ("::1", 0)), nameinfo)

    def test_host_too_long(self) -> None:
        def long_host(sockaddr, flags):
            return "1111:2222:3333:4444:5555:6666:7777:8888%interface0", "0"

        with pytest.raises(MalformedAddressError):
            format_address(NetworkAddress.from_host("1111:2222:3333:4444:5555:6666:7777:8888"), long_host)

    def test_errors_share_base(self) -> None:
        assert issubclass(MalformedAddressError, AddressFormatError)
        assert issubclass(UnsupportedFamilyError, AddressFormatError)


def test_output_is_bounded(nameinfo) -> None:
    addr = NetworkAddress.from_host("1111:2222:3333:4444:5555:6666:7777:8888")
    assert len(format_address(addr, nameinfo)) <= MAX_SDP_ADDRESS


class TestFromSockaddr:
    def test_ipv4(self) -> None:
        assert NetworkAddress.from_sockaddr(("239.1.1.1", 5004)).family == socket.AF_INET

    def test_ipv6(self) -> None:
        addr = NetworkAddress.from_sockaddr(("ff0e::1", 5004))
        assert addr.family == socket.AF_INET6
        assert addr.sockaddr == ("ff0e::1", 5004, 0, 0)

    def test_empty(self) -> None:
        assert NetworkAddress.from_sockaddr(()).family is None
