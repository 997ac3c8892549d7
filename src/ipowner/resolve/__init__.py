"""
Resolution Module

Combines reserved-block, ASN, reverse-name, public-suffix and
geolocation lookups into one record per address.
"""

from ipowner.resolve.core import (
    AsnSummary,
    NameSummary,
    ResolutionResult,
    ResolutionContext,
    OwnerResolver,
    RESERVED_ASN,
    RESERVED_COUNTRY,
    UNKNOWN_DOMAIN,
)

__all__ = [
    "AsnSummary",
    "NameSummary",
    "ResolutionResult",
    "ResolutionContext",
    "OwnerResolver",
    "RESERVED_ASN",
    "RESERVED_COUNTRY",
    "UNKNOWN_DOMAIN",
]
