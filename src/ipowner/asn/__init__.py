"""
ASN Resolution Module

Maps addresses to their origin AS, announced prefix and country
using DNS-served registries.
"""

from ipowner.asn.core import (
    AsnRecord,
    AsnResolver,
    parse_registry_a,
    parse_registry_b,
    parse_country,
)

__all__ = [
    "AsnRecord",
    "AsnResolver",
    "parse_registry_a",
    "parse_registry_b",
    "parse_country",
]
