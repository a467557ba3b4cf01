"""sdpx - Session Description Protocol (RFC 4566) announcement builder."""

from __future__ import annotations

# Address formatting
from ._address import format_address, ip_version

# SDP builder
from ._sdp import SDPDocument, add_attribute, add_media, start_session

# Types and exceptions
from ._types import (
    AddressFormatError,
    AllocationError,
    ContractViolationError,
    MalformedAddressError,
    MediaDescriptor,
    NetworkAddress,
    SDPError,
    SessionConfig,
    SessionDescriptor,
    UnsupportedFamilyError,
    ValidationError,
)

# Utilities
from ._utils import EOL, MAX_SDP_ADDRESS, PRODUCT, VERSION, configure_logging, ntp_time64

# Validation
from ._validate import check_sdp_string, check_sdp_token, is_sdp_string

__version__ = VERSION

__all__ = [
    # Builder
    "SDPDocument",
    "start_session",
    "add_attribute",
    "add_media",
    # Address formatting
    "format_address",
    "ip_version",
    # Validation
    "is_sdp_string",
    "check_sdp_string",
    "check_sdp_token",
    # Data types
    "NetworkAddress",
    "SessionDescriptor",
    "MediaDescriptor",
    "SessionConfig",
    # Exceptions
    "SDPError",
    "ValidationError",
    "AddressFormatError",
    "MalformedAddressError",
    "UnsupportedFamilyError",
    "AllocationError",
    "ContractViolationError",
    # Utilities
    "EOL",
    "MAX_SDP_ADDRESS",
    "PRODUCT",
    "configure_logging",
    "ntp_time64",
    "__version__",
]
