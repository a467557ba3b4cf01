"""
Type definitions for SDP generation.

This module centralizes the data types and exceptions used throughout the
package: network addresses, session and media descriptors, the session
configuration and the error hierarchy.
"""

from __future__ import annotations

import ipaddress
import socket
import typing
from dataclasses import dataclass
from typing import Optional

from ._utils import PRODUCT, ntp_time64


# =============================================================================
# Exceptions
# =============================================================================


class SDPError(Exception):
    """Base exception for SDP generation errors."""

    pass


class ValidationError(SDPError, ValueError):
    """Raised when a text field is not safe to embed in an SDP line."""

    def __init__(self, field_name: str, reason: str) -> None:
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"{field_name}: {reason}")


class AddressFormatError(SDPError):
    """Raised when a network address cannot be expressed in SDP."""

    pass


class MalformedAddressError(AddressFormatError):
    """Raised when an address is truncated or cannot be resolved numerically."""

    pass


class UnsupportedFamilyError(AddressFormatError):
    """Raised for address families other than IPv4 and IPv6."""

    pass


class AllocationError(SDPError, MemoryError):
    """Raised when the document cannot grow to hold a new line."""

    pass


class ContractViolationError(SDPError, ValueError):
    """Raised when a caller breaks an argument precondition."""

    pass


# =============================================================================
# Capabilities
# =============================================================================

# socket.getnameinfo(sockaddr, flags) -> (host, port)
NameInfo = typing.Callable[[tuple, int], typing.Tuple[str, str]]
HostnameProvider = typing.Callable[[], str]
Clock = typing.Callable[[], int]


# =============================================================================
# Network Address
# =============================================================================


@dataclass(frozen=True)
class NetworkAddress:
    """
    A socket address as handed out by the socket module.

    ``family`` is an ``AF_*`` constant and ``sockaddr`` the matching tuple:
    ``(host, port)`` for IPv4 and ``(host, port, flowinfo, scope_id)`` for
    IPv6. A missing family or an empty tuple marks a truncated address.
    """

    family: Optional[int]
    sockaddr: tuple = ()

    @classmethod
    def from_sockaddr(cls, sockaddr: tuple) -> NetworkAddress:
        """
        Wrap a sockaddr tuple, guessing the family from its shape.

        Examples:
            ("239.1.1.1", 5004)              -> AF_INET
            ("ff0e::1", 5004, 0, 0)          -> AF_INET6
        """
        if not sockaddr:
            return cls(family=None, sockaddr=())
        if len(sockaddr) == 4:
            return cls(family=socket.AF_INET6, sockaddr=tuple(sockaddr))
        if len(sockaddr) == 2 and ":" in str(sockaddr[0]):
            host, port = sockaddr
            return cls(family=socket.AF_INET6, sockaddr=(host, port, 0, 0))
        return cls(family=socket.AF_INET, sockaddr=tuple(sockaddr))

    @classmethod
    def from_host(cls, host: str, port: int = 0) -> NetworkAddress:
        """
        Build an address from a numeric host string.

        An IPv6 ``%zone`` suffix is kept as a numeric scope id when it is a
        number, otherwise it is looked up as an interface name. IPv4 hosts with
        a zone raise ValueError.
        """
        zone = None
        if "%" in host:
            host, zone = host.split("%", 1)
        ip = ipaddress.ip_address(host)
        if ip.version == 4:
            if zone is not None:
                raise ValueError(f"IPv4 address {host!r} cannot carry a zone")
            return cls(family=socket.AF_INET, sockaddr=(str(ip), port))

        scope_id = 0
        if zone:
            scope_id = int(zone) if zone.isdigit() else socket.if_nametoindex(zone)
        return cls(family=socket.AF_INET6, sockaddr=(str(ip), port, 0, scope_id))

    @property
    def is_ipv6(self) -> bool:
        return self.family == socket.AF_INET6


# =============================================================================
# Descriptors
# =============================================================================


@dataclass
class SessionDescriptor:
    """Session-level metadata. ``None`` or an empty string means absent."""

    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass
class MediaDescriptor:
    """
    One media stream of the session.

    ``bw_indep`` and ``bandwidth`` are accepted for callers that track them
    but do not change the emitted lines.
    """

    port: int
    payload_type: int
    media_type: Optional[str] = None
    protocol: Optional[str] = None
    bw_indep: bool = False
    bandwidth: int = 0
    rtpmap: Optional[str] = None
    fmtp: Optional[str] = None


# =============================================================================
# Configuration
# =============================================================================


@dataclass
class SessionConfig:
    """Configuration and injected capabilities for session construction."""

    # a=tool: value
    tool: str = PRODUCT

    # Local host name for the o= line
    hostname: HostnameProvider = socket.gethostname

    # 64-bit NTP timestamp used as session id and version
    clock: Clock = ntp_time64

    # Numeric host formatting of a sockaddr
    nameinfo: NameInfo = socket.getnameinfo


__all__ = [
    # Exceptions
    "SDPError",
    "ValidationError",
    "AddressFormatError",
    "MalformedAddressError",
    "UnsupportedFamilyError",
    "AllocationError",
    "ContractViolationError",
    # Capabilities
    "NameInfo",
    "HostnameProvider",
    "Clock",
    # Data types
    "NetworkAddress",
    "SessionDescriptor",
    "MediaDescriptor",
    "SessionConfig",
]
