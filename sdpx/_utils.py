"""Utilities and constants for SDP generation."""

import logging
import time

from rich.console import Console
from rich.logging import RichHandler

# Rich Console for pretty printing
console = Console()

# Get logger for the package
logger = logging.getLogger("sdpx")

VERSION = "0.1.0"
PRODUCT = f"sdpx {VERSION}"

EOL = "\r\n"

# Longest connection value, "IN IP6 " prefix included
MAX_SDP_ADDRESS = 47

# Seconds between the NTP epoch (1900) and the Unix epoch (1970)
NTP_EPOCH_OFFSET = 2208988800


def configure_logging(level: str = "INFO") -> None:
    """Route log records through a RichHandler on the shared console."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def ntp_time64() -> int:
    """Current time in NTP 64-bit fixed point: seconds << 32 | fraction."""
    seconds, nanoseconds = divmod(time.time_ns(), 1_000_000_000)
    fraction = (nanoseconds << 32) // 1_000_000_000
    return ((seconds + NTP_EPOCH_OFFSET) << 32) | fraction
