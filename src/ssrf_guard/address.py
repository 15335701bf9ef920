"""Public address classification API.

``is_public`` is the gate callers put in front of any outbound request: a
``False`` verdict means the address must not be contacted. Every failure
to normalize an input resolves to ``False``; nothing here raises for bad
input.
"""

import logging
from typing import Any

from .ipv4 import from_long, normalize_to_long, parse_ipv4
from .ipv6 import format_ipv6, parse_ipv6
from .models import (
    AddressFamily,
    AddressFormatError,
    Classification,
    NormalizedAddress,
    RangeCategory,
)
from .utils.ip_utils import embedded_ipv4, match_ipv4, match_ipv6

logger = logging.getLogger(__name__)

__all__ = ["classify", "is_public", "normalize", "normalize_to_long"]

_INVALID = NormalizedAddress(family=AddressFamily.INVALID)


def normalize(value: Any) -> NormalizedAddress:
    """Detect the address family of *value* and normalize it strictly."""
    if not isinstance(value, str) or not value.strip():
        logger.debug(f"Rejected non-string or blank address: {value!r}")
        return _INVALID

    try:
        if ":" in value:
            return NormalizedAddress(family=AddressFamily.IPV6, value=parse_ipv6(value))
        return NormalizedAddress(family=AddressFamily.IPV4, value=parse_ipv4(value))
    except AddressFormatError as e:
        logger.debug(f"Rejected address {value!r}: {e.reason}")
        return _INVALID


def _documentation_exempt(category: RangeCategory, allow_documentation: bool) -> bool:
    return allow_documentation and category is RangeCategory.DOCUMENTATION


def classify(value: Any, *, allow_documentation: bool = False) -> Classification:
    """Classify *value* and report which range, if any, made it non-public.

    IPv4-mapped, IPv4-compatible, NAT64, 6to4 and Teredo addresses are never
    public. Their embedded IPv4 address is unwrapped and, when it falls in an
    IPv4 range, that range is reported instead of the IPv6 wrapper.

    Args:
        value: Address literal; anything other than a canonical string is invalid.
        allow_documentation: Treat the documentation ranges as public.
    """
    address = value if isinstance(value, str) else None
    normalized = normalize(value)
    if not normalized.is_valid:
        return Classification(address=address, family=AddressFamily.INVALID, is_public=False)

    embedded = None
    if normalized.family is AddressFamily.IPV4:
        text = from_long(normalized.value)
        found = match_ipv4(normalized.value)
    else:
        text = format_ipv6(normalized.value)
        found = match_ipv6(normalized.value)
        embedded = embedded_ipv4(normalized.value)
        if embedded is not None:
            inner = match_ipv4(embedded)
            if inner is not None and not _documentation_exempt(inner[1], allow_documentation):
                found = inner

    if found is not None and _documentation_exempt(found[1], allow_documentation):
        found = None

    if found is not None:
        logger.debug(f"Address {value!r} is in {found[0]} ({found[1].value})")

    return Classification(
        address=address,
        family=normalized.family,
        normalized=text,
        is_public=found is None,
        category=found[1] if found else None,
        network=str(found[0]) if found else None,
        embedded_ipv4=from_long(embedded) if embedded is not None else None,
    )


def is_public(value: Any, *, allow_documentation: bool = False) -> bool:
    """Return True only for a canonical literal outside every non-public range."""
    return classify(value, allow_documentation=allow_documentation).is_public
