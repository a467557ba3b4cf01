"""
Conversion of socket addresses to SDP connection values.

A connection value is ``IN IP4 <host>`` or ``IN IP6 <host>`` as used by the
``c=`` line and, without its prefix, by ``a=source-filter``.
"""

from __future__ import annotations

import ipaddress
import socket
from typing import Optional

from ._types import (
    MalformedAddressError,
    NameInfo,
    NetworkAddress,
    UnsupportedFamilyError,
)
from ._utils import MAX_SDP_ADDRESS, logger

_PREFIX_LEN = len("IN IP4 ")

# Room left for the host text, terminator included
_MAX_HOST_LEN = MAX_SDP_ADDRESS - _PREFIX_LEN - 1

_SOCKADDR_LEN = {
    socket.AF_INET: (2,),
    socket.AF_INET6: (2, 3, 4),
}


def _numeric_host(address: NetworkAddress, nameinfo: NameInfo) -> str:
    flags = socket.NI_NUMERICHOST | socket.NI_NUMERICSERV
    try:
        host, _ = nameinfo(address.sockaddr, flags)
    except (OSError, TypeError, ValueError) as exc:
        raise MalformedAddressError(f"cannot resolve {address.sockaddr!r}: {exc}") from exc

    if not host or len(host) > _MAX_HOST_LEN:
        raise MalformedAddressError(f"numeric host {host!r} does not fit")
    return host


def format_address(address: NetworkAddress, nameinfo: Optional[NameInfo] = None) -> str:
    """
    Format a socket address as an SDP connection value.

    IPv4 multicast groups get a ``/255`` TTL suffix. RFC 4566 made the TTL
    obsolete but older receivers still expect it. IPv6 scope ids are
    dropped since they have no meaning outside the local host.

    Args:
        address: Address to format
        nameinfo: Numeric host formatter, defaults to socket.getnameinfo

    Returns:
        Connection value, at most MAX_SDP_ADDRESS characters

    Raises:
        MalformedAddressError: truncated address or numeric lookup failure
        UnsupportedFamilyError: neither IPv4 nor IPv6

    Example:
        >>> format_address(NetworkAddress.from_host("239.1.1.1", 5004))
        'IN IP4 239.1.1.1/255'
    """
    if address.family is None or not address.sockaddr:
        raise MalformedAddressError("address too short to hold a family")
    if address.family not in _SOCKADDR_LEN:
        raise UnsupportedFamilyError(f"unsupported address family {address.family}")
    if len(address.sockaddr) not in _SOCKADDR_LEN[address.family]:
        raise MalformedAddressError(f"bad sockaddr {address.sockaddr!r}")

    host = _numeric_host(address, nameinfo or socket.getnameinfo)

    if address.family == socket.AF_INET:
        try:
            ip = ipaddress.IPv4Address(host)
        except ValueError as exc:
            raise MalformedAddressError(f"{host!r} is not an IPv4 address") from exc
        value = f"IN IP4 {host}"
        if ip.is_multicast:
            value += "/255"
    else:
        host = host.split("%", 1)[0]
        try:
            ipaddress.IPv6Address(host)
        except ValueError as exc:
            raise MalformedAddressError(f"{host!r} is not an IPv6 address") from exc
        value = f"IN IP6 {host}"

    logger.debug(f"Formatted {address.sockaddr!r} as {value!r}")
    return value


def ip_version(connection: str) -> str:
    """Return the IP version marker ("4" or "6") of a connection value."""
    return connection[5]


def strip_prefix(connection: str) -> str:
    """Return the address part of a connection value."""
    return connection[_PREFIX_LEN:]


__all__ = ["format_address", "ip_version", "strip_prefix"]
