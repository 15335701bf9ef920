"""Colon-hex IPv6 normalization with an optional strict dotted IPv4 tail."""

import ipaddress
from typing import Any, List

from .ipv4 import parse_ipv4
from .models import AddressFormatError

GROUP_COUNT = 8
MAX_IPV6 = (1 << 128) - 1

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_IPV6_CHARS = _HEX_DIGITS | {":", "."}


def _parse_groups(chunk: str, text: str) -> List[int]:
    if not chunk:
        return []
    groups = []
    for group in chunk.split(":"):
        if not group:
            raise AddressFormatError(text, "empty group")
        if len(group) > 4:
            raise AddressFormatError(text, "group longer than four hex digits")
        if not set(group) <= _HEX_DIGITS:
            raise AddressFormatError(text, "group contains a non-hex character")
        groups.append(int(group, 16))
    return groups


def _expand_ipv4_tail(text: str) -> str:
    """Replace a trailing dotted quad with its two hex groups."""
    head, sep, tail = text.rpartition(":")
    if not sep:
        raise AddressFormatError(text, "missing colon")
    if "." in head:
        raise AddressFormatError(text, "dotted segment before the last group")
    value = parse_ipv4(tail)
    return f"{head}:{value >> 16:x}:{value & 0xFFFF:x}"


def parse_ipv6(text: Any) -> int:
    """Convert colon-hex IPv6 notation to its 128-bit integer value.

    At most one ``::`` is allowed and it stands for one or more zero groups.
    A trailing dotted group must itself be a canonical IPv4 address.

    Raises:
        AddressFormatError: on any deviation from that grammar.
    """
    if not isinstance(text, str):
        raise AddressFormatError(text, "address must be a string")
    if not text:
        raise AddressFormatError(text, "empty address")
    if not set(text) <= _IPV6_CHARS:
        raise AddressFormatError(text, "unexpected character in IPv6 address")

    source = text
    if "." in text:
        text = _expand_ipv4_tail(text)

    compressions = text.count("::")
    if compressions > 1:
        raise AddressFormatError(source, "more than one '::'")

    if compressions == 1:
        head, tail = text.split("::")
        head_groups = _parse_groups(head, source)
        tail_groups = _parse_groups(tail, source)
        explicit = len(head_groups) + len(tail_groups)
        if explicit > GROUP_COUNT - 1:
            raise AddressFormatError(source, "too many groups around '::'")
        groups = head_groups + [0] * (GROUP_COUNT - explicit) + tail_groups
    else:
        groups = _parse_groups(text, source)
        if len(groups) != GROUP_COUNT:
            raise AddressFormatError(
                source, f"expected {GROUP_COUNT} groups, got {len(groups)}"
            )

    value = 0
    for group in groups:
        value = (value << 16) | group
    return value


def format_ipv6(value: int) -> str:
    """Render a 128-bit value in compressed notation."""
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_IPV6:
        raise AddressFormatError(value, "IPv6 value out of range")
    return ipaddress.IPv6Address(value).compressed
