"""Command-line front end printing an SDP announcement.

The session address, optional source filter, media streams and extra
attributes are taken from the command line; the resulting document is
written to standard output, ready to be handed to an RTSP or SAP sender.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from rich.panel import Panel

from ._sdp import start_session
from ._types import MediaDescriptor, NetworkAddress, SDPError, SessionConfig, SessionDescriptor
from ._utils import PRODUCT, configure_logging, console


def _parse_media(spec: str) -> MediaDescriptor:
    parts = spec.split(":", 4)
    if len(parts) < 3:
        raise argparse.ArgumentTypeError(f"expected TYPE:PORT:PT[:RTPMAP[:FMTP]], got {spec!r}")
    try:
        port = int(parts[1])
        payload_type = int(parts[2])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"bad media {spec!r}: {exc}") from exc
    return MediaDescriptor(
        media_type=parts[0] or None,
        port=port,
        payload_type=payload_type,
        rtpmap=parts[3] if len(parts) > 3 and parts[3] else None,
        fmtp=parts[4] if len(parts) > 4 and parts[4] else None,
    )


def _parse_attribute(spec: str) -> tuple[str, Optional[str]]:
    name, sep, value = spec.partition("=")
    if not name:
        raise argparse.ArgumentTypeError(f"empty attribute name in {spec!r}")
    return name, value if sep else None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sdpx", description="Generate an SDP announcement")
    parser.add_argument("address", help="Session destination address (IPv4 or IPv6)")
    parser.add_argument("--port", type=int, default=0, help="Session destination port")
    parser.add_argument("--name", help="Session name (s=)")
    parser.add_argument("--description", help="Session description (i=)")
    parser.add_argument("--url", help="Session URL (u=)")
    parser.add_argument("--email", help="Contact e-mail (e=)")
    parser.add_argument("--phone", help="Contact phone number (p=)")
    parser.add_argument("--source", help="Source host for a=source-filter")
    parser.add_argument("--tool", default=PRODUCT, help="a=tool value")
    parser.add_argument(
        "--media",
        action="append",
        default=[],
        type=_parse_media,
        metavar="TYPE:PORT:PT[:RTPMAP[:FMTP]]",
        help="Media stream to describe (repeatable)",
    )
    parser.add_argument(
        "--attribute",
        action="append",
        default=[],
        type=_parse_attribute,
        metavar="NAME[=VALUE]",
        help="Extra session attribute (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices={"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"},
        help="Logging verbosity",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Show the document in a panel instead of raw output",
    )
    return parser


def _address(host: str, port: int) -> NetworkAddress:
    try:
        return NetworkAddress.from_host(host, port)
    except (OSError, ValueError):
        # Let the formatter report it
        return NetworkAddress(family=None)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    session = SessionDescriptor(
        name=args.name,
        description=args.description,
        url=args.url,
        email=args.email,
        phone=args.phone,
    )
    source = _address(args.source, 0) if args.source else None

    try:
        document = start_session(
            session,
            _address(args.address, args.port),
            source=source,
            config=SessionConfig(tool=args.tool),
        )
        for name, value in args.attribute:
            document.add_attribute(name, value)
        for media in args.media:
            document.add_media_descriptor(media)
    except SDPError as exc:
        logging.error(f"Cannot build SDP: {exc}")
        return 2

    if args.pretty:
        console.print(Panel.fit(document.to_string().rstrip(), title="SDP", border_style="cyan"))
    else:
        sys.stdout.write(document.to_string())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
