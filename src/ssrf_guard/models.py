"""Pydantic models and errors shared by the normalizers, classifier and tools."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class AddressFamily(str, Enum):
    """Outcome of family detection and strict normalization."""
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    INVALID = "invalid"


class RangeCategory(str, Enum):
    """Reason a numeric address is not public."""
    UNSPECIFIED = "unspecified"
    THIS_NETWORK = "this_network"
    PRIVATE = "private"
    SHARED_ADDRESS_SPACE = "shared_address_space"
    LOOPBACK = "loopback"
    LINK_LOCAL = "link_local"
    IETF_PROTOCOL = "ietf_protocol"
    DOCUMENTATION = "documentation"
    BENCHMARKING = "benchmarking"
    MULTICAST = "multicast"
    RESERVED = "reserved"
    BROADCAST = "broadcast"
    UNIQUE_LOCAL = "unique_local"
    IPV4_MAPPED = "ipv4_mapped"
    IPV4_COMPATIBLE = "ipv4_compatible"
    NAT64 = "nat64"
    DISCARD_ONLY = "discard_only"
    SIX_TO_FOUR = "six_to_four"
    TEREDO = "teredo"
    SITE_LOCAL = "site_local"


class NormalizedAddress(BaseModel):
    """Numeric form of an address literal, or the invalid marker."""
    family: AddressFamily
    value: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_valid(self) -> bool:
        """Check if normalization produced a numeric address."""
        return self.family is not AddressFamily.INVALID and self.value is not None


class Classification(BaseModel):
    """Full public/non-public decision for one input."""
    address: Optional[str] = None
    family: AddressFamily
    normalized: Optional[str] = None
    is_public: bool
    category: Optional[RangeCategory] = None
    network: Optional[str] = None
    embedded_ipv4: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class RangeEntry(BaseModel):
    """Serialisable row of a classification table."""
    family: AddressFamily
    network: str
    category: RangeCategory


class BulkCheckResponse(BaseModel):
    """Response model for the bulk classification tool."""
    results: List[Classification]
    total_requested: int
    public: int
    non_public: int
    duplicates_skipped: int = 0


class AddressFormatError(ValueError):
    """Raised when a literal is not in the single accepted canonical form."""

    def __init__(self, value: Any, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"{reason}: {value!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Return a serialisable representation of the error."""
        return {
            "error": "invalid_address",
            "value": self.value if isinstance(self.value, str) else repr(self.value),
            "reason": self.reason,
        }
