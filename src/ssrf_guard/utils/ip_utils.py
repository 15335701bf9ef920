"""IP address classification tables.

Each table is an ordered tuple of ``(network, category)`` pairs; the first
entry that contains an address decides its category, so narrower networks
are listed ahead of the blocks that contain them. Matching is done on the
integer value produced by the strict normalizers, never on the text.
"""

from __future__ import annotations

import ipaddress
from typing import Iterator, Optional, Union

from ..models import AddressFamily, RangeCategory

IPv4Network = ipaddress.IPv4Network
IPv6Network = ipaddress.IPv6Network
IPNetwork = Union[IPv4Network, IPv6Network]
RangeMatch = tuple[IPNetwork, RangeCategory]

_IPV4_RANGES: tuple[tuple[IPv4Network, RangeCategory], ...] = (
    (ipaddress.IPv4Network("0.0.0.0/32"), RangeCategory.UNSPECIFIED),
    (ipaddress.IPv4Network("0.0.0.0/8"), RangeCategory.THIS_NETWORK),
    (ipaddress.IPv4Network("10.0.0.0/8"), RangeCategory.PRIVATE),
    (ipaddress.IPv4Network("100.64.0.0/10"), RangeCategory.SHARED_ADDRESS_SPACE),  # carrier-grade NAT
    (ipaddress.IPv4Network("127.0.0.0/8"), RangeCategory.LOOPBACK),
    (ipaddress.IPv4Network("169.254.0.0/16"), RangeCategory.LINK_LOCAL),
    (ipaddress.IPv4Network("172.16.0.0/12"), RangeCategory.PRIVATE),
    (ipaddress.IPv4Network("192.0.0.0/24"), RangeCategory.IETF_PROTOCOL),
    (ipaddress.IPv4Network("192.0.2.0/24"), RangeCategory.DOCUMENTATION),  # TEST-NET-1
    (ipaddress.IPv4Network("192.168.0.0/16"), RangeCategory.PRIVATE),
    (ipaddress.IPv4Network("198.18.0.0/15"), RangeCategory.BENCHMARKING),
    (ipaddress.IPv4Network("198.51.100.0/24"), RangeCategory.DOCUMENTATION),  # TEST-NET-2
    (ipaddress.IPv4Network("203.0.113.0/24"), RangeCategory.DOCUMENTATION),  # TEST-NET-3
    (ipaddress.IPv4Network("224.0.0.0/4"), RangeCategory.MULTICAST),
    (ipaddress.IPv4Network("255.255.255.255/32"), RangeCategory.BROADCAST),
    (ipaddress.IPv4Network("240.0.0.0/4"), RangeCategory.RESERVED),
)

_IPV6_RANGES: tuple[tuple[IPv6Network, RangeCategory], ...] = (
    (ipaddress.IPv6Network("::/128"), RangeCategory.UNSPECIFIED),
    (ipaddress.IPv6Network("::1/128"), RangeCategory.LOOPBACK),
    (ipaddress.IPv6Network("::ffff:0:0/96"), RangeCategory.IPV4_MAPPED),
    (ipaddress.IPv6Network("::/96"), RangeCategory.IPV4_COMPATIBLE),  # deprecated
    (ipaddress.IPv6Network("64:ff9b::/96"), RangeCategory.NAT64),
    (ipaddress.IPv6Network("100::/64"), RangeCategory.DISCARD_ONLY),
    (ipaddress.IPv6Network("2001::/32"), RangeCategory.TEREDO),
    (ipaddress.IPv6Network("2001::/23"), RangeCategory.IETF_PROTOCOL),
    (ipaddress.IPv6Network("2001:db8::/32"), RangeCategory.DOCUMENTATION),
    (ipaddress.IPv6Network("2002::/16"), RangeCategory.SIX_TO_FOUR),
    (ipaddress.IPv6Network("fe80::/10"), RangeCategory.LINK_LOCAL),
    (ipaddress.IPv6Network("fec0::/10"), RangeCategory.SITE_LOCAL),  # deprecated
    (ipaddress.IPv6Network("fc00::/7"), RangeCategory.UNIQUE_LOCAL),
    (ipaddress.IPv6Network("ff00::/8"), RangeCategory.MULTICAST),
)

# Wrappers that carry an IPv4 address, mapped to the shift of its 32 bits.
_IPV4_EMBEDDING = {
    RangeCategory.IPV4_MAPPED: 0,
    RangeCategory.IPV4_COMPATIBLE: 0,
    RangeCategory.NAT64: 0,
    RangeCategory.TEREDO: 64,  # server address
    RangeCategory.SIX_TO_FOUR: 80,
}


def _in_network(value: int, network: IPNetwork) -> bool:
    mask = int(network.netmask)
    return (value & mask) == (int(network.network_address) & mask)


def _match(value: int, table) -> Optional[RangeMatch]:
    for network, category in table:
        if _in_network(value, network):
            return network, category
    return None


def match_ipv4(value: int) -> Optional[RangeMatch]:
    """Return the first IPv4 range containing *value*, if any."""
    return _match(value, _IPV4_RANGES)


def match_ipv6(value: int) -> Optional[RangeMatch]:
    """Return the first IPv6 range containing *value*, if any."""
    return _match(value, _IPV6_RANGES)


def embedded_ipv4(value: int) -> Optional[int]:
    """Return the IPv4 address carried inside *value*, if it embeds one."""
    found = match_ipv6(value)
    if found is None or found[1] not in _IPV4_EMBEDDING:
        return None
    return (value >> _IPV4_EMBEDDING[found[1]]) & 0xFFFFFFFF


def iter_ranges(family: AddressFamily) -> Iterator[RangeMatch]:
    """Yield the classification table for *family* in match order."""
    if family is AddressFamily.IPV4:
        yield from _IPV4_RANGES
    elif family is AddressFamily.IPV6:
        yield from _IPV6_RANGES
