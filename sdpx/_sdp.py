from __future__ import annotations

from typing import Any, List, Optional

from ._address import format_address, ip_version, strip_prefix
from ._types import (
    AddressFormatError,
    AllocationError,
    ContractViolationError,
    MediaDescriptor,
    NetworkAddress,
    SessionConfig,
    SessionDescriptor,
    ValidationError,
)
from ._utils import EOL, logger
from ._validate import check_sdp_string, check_sdp_token


class SDPDocument:
    """
    Session description under construction.

    The text always holds a well-formed prefix of an SDP document: every
    append either adds complete CRLF-terminated lines or raises and leaves
    the text untouched.
    """

    __slots__ = ("_text",)

    def __init__(self, text: str = "") -> None:
        self._text = text

    def _append(self, chunk: str) -> SDPDocument:
        try:
            text = self._text + chunk
        except MemoryError as exc:
            raise AllocationError(f"cannot grow SDP by {len(chunk)} characters") from exc
        self._text = text
        return self

    def add_attribute(
        self, name: str, value: Optional[str] = None, /, *args: Any, **kwargs: Any
    ) -> SDPDocument:
        """
        Append an ``a=<name>[:<value>]`` line.

        When positional or keyword arguments are given, ``value`` is a
        ``str.format`` template interpolated with them.

        Example:
            >>> doc.add_attribute("rtpmap", "{} {}", 96, "H264/90000")
        """
        name = check_sdp_token("attribute name", name)
        if value is None:
            return self._append(f"a={name}{EOL}")

        if args or kwargs:
            try:
                value = value.format(*args, **kwargs)
            except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
                raise ValidationError(f"attribute {name}", f"bad template: {exc}") from exc
        value = check_sdp_string(f"attribute {name}", str(value))
        return self._append(f"a={name}:{value}{EOL}")

    def add_media(
        self,
        media_type: Optional[str] = None,
        protocol: Optional[str] = None,
        port: int = 0,
        payload_type: int = 0,
        bw_indep: bool = False,
        bandwidth: int = 0,
        rtpmap: Optional[str] = None,
        fmtp: Optional[str] = None,
    ) -> SDPDocument:
        """
        Append a media description block.

        Args:
            media_type: Media type (default "video")
            protocol: Transport protocol (default "RTP/AVP")
            port: Destination port
            payload_type: RTP payload type, 0 to 127
            bw_indep: Unused
            bandwidth: Unused
            rtpmap: Value for ``a=rtpmap:<pt>``, omitted when None
            fmtp: Value for ``a=fmtp:<pt>``, omitted when None

        Raises:
            ContractViolationError: payload type or port out of range
            ValidationError: a text field is not line-safe
        """
        if isinstance(payload_type, bool) or not isinstance(payload_type, int):
            raise ContractViolationError(f"payload type must be an int, got {payload_type!r}")
        if not 0 <= payload_type <= 127:
            raise ContractViolationError(f"payload type {payload_type} not in [0, 127]")
        if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 65535:
            raise ContractViolationError(f"invalid port {port!r}")

        media_type = check_sdp_token("media type", media_type or "video")
        protocol = check_sdp_token("protocol", protocol or "RTP/AVP")

        lines = [
            f"m={media_type} {port} {protocol} {payload_type}",
            "b=RR:0",
        ]
        # RTP payload type map
        if rtpmap is not None:
            rtpmap = check_sdp_string("rtpmap", rtpmap)
            lines.append(f"a=rtpmap:{payload_type} {rtpmap}")
        # Format parameters
        if fmtp is not None:
            fmtp = check_sdp_string("fmtp", fmtp)
            lines.append(f"a=fmtp:{payload_type} {fmtp}")

        logger.debug(f"Adding media block: {lines[0]}")
        return self._append(EOL.join(lines) + EOL)

    def add_media_descriptor(self, media: MediaDescriptor) -> SDPDocument:
        """Append the media block described by ``media``."""
        return self.add_media(
            media_type=media.media_type,
            protocol=media.protocol,
            port=media.port,
            payload_type=media.payload_type,
            bw_indep=media.bw_indep,
            bandwidth=media.bandwidth,
            rtpmap=media.rtpmap,
            fmtp=media.fmtp,
        )

    def lines(self) -> List[str]:
        """Return the document lines without terminators."""
        return self._text.split(EOL)[:-1]

    def to_string(self) -> str:
        """Serialize SDP to string with CRLF line endings."""
        return self._text

    def to_bytes(self) -> bytes:
        """Serialize SDP to bytes."""
        return self._text.encode("utf-8")

    @property
    def content_type(self) -> str:
        """Return Content-Type for SDP."""
        return "application/sdp"

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self) -> str:
        return f"<SDPDocument lines={len(self.lines())}>"


def _optional_field(field_name: str, value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    return check_sdp_string(field_name, value)


def _source_filter(source: NetworkAddress, config: SessionConfig) -> Optional[str]:
    try:
        machine = format_address(source, config.nameinfo)
    except AddressFormatError as exc:
        logger.warning(f"Omitting source filter: {exc}")
        return None
    return f"a=source-filter: incl IN IP{ip_version(machine)} * {strip_prefix(machine)}"


def start_session(
    session: Optional[SessionDescriptor],
    address: NetworkAddress,
    source: Optional[NetworkAddress] = None,
    config: Optional[SessionConfig] = None,
) -> SDPDocument:
    """
    Create the session-level part of an SDP announcement.

    Args:
        session: Session name, description and optional contact fields
        address: Session destination, used for the o= and c= lines
        source: Originating host for source-specific multicast filtering.
            An address that cannot be formatted is skipped silently.
        config: Tool string and injected capabilities

    Returns:
        New SDPDocument holding the session-level lines

    Raises:
        ValidationError: a text field is not line-safe
        AddressFormatError: the session address cannot be formatted
        AllocationError: the document cannot be allocated

    Example:
        >>> doc = start_session(
        ...     SessionDescriptor(name="Test Stream", description="demo"),
        ...     NetworkAddress.from_host("239.1.1.1", 5004),
        ... )
        >>> doc.add_media("video", None, 5004, 96, rtpmap="H264/90000")
    """
    session = session or SessionDescriptor()
    config = config or SessionConfig()

    name = check_sdp_string("name", session.name or "Unnamed")
    description = check_sdp_string("description", session.description or "N/A")
    url = _optional_field("url", session.url)
    email = _optional_field("email", session.email)
    phone = _optional_field("phone", session.phone)

    tool = check_sdp_string("tool", config.tool)
    hostname = check_sdp_token("hostname", config.hostname())

    connection = format_address(address, config.nameinfo)

    source_filter = None
    if source is not None:
        source_filter = _source_filter(source, config)

    now = config.clock()

    lines = [
        "v=0",
        f"o=- {now} {now} IN IP{ip_version(connection)} {hostname}",
        f"s={name}",
        f"i={description}",
    ]
    if url is not None:
        lines.append(f"u={url}")
    if email is not None:
        lines.append(f"e={email}")
    if phone is not None:
        lines.append(f"p={phone}")
    lines.extend(
        [
            f"c={connection}",
            # One permanent time span, no repeat, no zone adjustment
            "t=0 0",
            f"a=tool:{tool}",
            "a=recvonly",
            "a=type:broadcast",
            "a=charset:UTF-8",
        ]
    )
    if source_filter is not None:
        lines.append(source_filter)

    logger.debug(f"Starting SDP session {name!r} on {connection}")
    try:
        text = EOL.join(lines) + EOL
    except MemoryError as exc:
        raise AllocationError("cannot allocate SDP document") from exc
    return SDPDocument(text)


def add_attribute(
    document: SDPDocument,
    name: str,
    value: Optional[str] = None,
    /,
    *args: Any,
    **kwargs: Any,
) -> SDPDocument:
    """Append an attribute line to ``document`` and return it."""
    return document.add_attribute(name, value, *args, **kwargs)


def add_media(document: SDPDocument, *args: Any, **kwargs: Any) -> SDPDocument:
    """Append a media block to ``document`` and return it."""
    return document.add_media(*args, **kwargs)


__all__ = [
    "SDPDocument",
    "start_session",
    "add_attribute",
    "add_media",
]
