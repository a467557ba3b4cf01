"""Line-safety checks for text embedded in SDP lines."""

from __future__ import annotations

from typing import Union

from ._types import ValidationError

TextLike = Union[str, bytes]


def _line_safety_error(value: TextLike) -> str | None:
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError:
            return "invalid UTF-8 sequence"
    elif not isinstance(value, str):
        return f"expected text, got {type(value).__name__}"
    else:
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            return "cannot be encoded as UTF-8"

    if "\r" in value:
        return "contains a carriage return"
    if "\n" in value:
        return "contains a line feed"
    if "\x00" in value:
        return "contains a NUL character"
    return None


def is_sdp_string(value: TextLike) -> bool:
    """Return True if ``value`` can be embedded as a single SDP line value."""
    return _line_safety_error(value) is None


def check_sdp_string(field_name: str, value: TextLike) -> str:
    """
    Validate a text field and return it as ``str``.

    Bytes are decoded as strict UTF-8.

    Raises:
        ValidationError: if the value holds CR, LF, NUL or invalid UTF-8.
    """
    reason = _line_safety_error(value)
    if reason is not None:
        raise ValidationError(field_name, reason)
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def check_sdp_token(field_name: str, value: TextLike) -> str:
    """
    Validate a single space-separated field such as an attribute name.

    Raises:
        ValidationError: if the value is empty, holds whitespace or is not
            line-safe.
    """
    value = check_sdp_string(field_name, value)
    if not value:
        raise ValidationError(field_name, "must not be empty")
    if any(char.isspace() for char in value):
        raise ValidationError(field_name, "must not contain whitespace")
    return value


__all__ = ["is_sdp_string", "check_sdp_string", "check_sdp_token"]
