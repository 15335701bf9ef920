"""Strict dotted-decimal IPv4 normalization.

Only the four-part decimal form without leading zeros is accepted. Short
forms (``127.1``), single integers (``2130706433``), octal (``0177.0.0.1``)
and hexadecimal (``0x7f.0.0.1``) spellings all fail.
"""

from typing import Any

from .models import AddressFormatError

INVALID_LONG = -1
MAX_IPV4 = 0xFFFFFFFF

_DIGITS = frozenset("0123456789")
_IPV4_CHARS = _DIGITS | {"."}


def _parse_octet(part: str, text: str) -> int:
    if not part:
        raise AddressFormatError(text, "empty octet")
    if len(part) > 3:
        raise AddressFormatError(text, "octet longer than three digits")
    if not set(part) <= _DIGITS:
        raise AddressFormatError(text, "octet contains a non-digit")
    if len(part) > 1 and part[0] == "0":
        raise AddressFormatError(text, "octet has a leading zero")
    value = int(part)
    if value > 255:
        raise AddressFormatError(text, "octet out of range")
    return value


def parse_ipv4(text: Any) -> int:
    """Convert a canonical IPv4 string to its 32-bit integer value.

    Raises:
        AddressFormatError: if *text* is not exactly four decimal octets.
    """
    if not isinstance(text, str):
        raise AddressFormatError(text, "address must be a string")
    if not text:
        raise AddressFormatError(text, "empty address")
    if not set(text) <= _IPV4_CHARS:
        raise AddressFormatError(text, "unexpected character in IPv4 address")

    parts = text.split(".")
    if len(parts) != 4:
        raise AddressFormatError(text, f"expected 4 octets, got {len(parts)}")

    value = 0
    for part in parts:
        value = (value << 8) | _parse_octet(part, text)
    return value


def normalize_to_long(value: Any) -> int:
    """Return the 32-bit value of a canonical IPv4 string, or -1."""
    try:
        return parse_ipv4(value)
    except AddressFormatError:
        return INVALID_LONG


def from_long(value: Any) -> str:
    """Render a 32-bit integer as a canonical IPv4 string."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise AddressFormatError(value, "IPv4 value must be an integer")
    if not 0 <= value <= MAX_IPV4:
        raise AddressFormatError(value, "IPv4 value out of range")
    return ".".join(str((value >> shift) & 0xFF) for shift in (24, 16, 8, 0))
