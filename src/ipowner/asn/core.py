"""
Core ASN resolution over DNS-served registries.

Registry A (RouteViews style) answers ``<reversed-ip>.asn.<domain>``
with three TXT strings: asn, prefix, prefix length. Registry B (Team
Cymru style) answers ``<reversed-ip>.origin.asn.<domain>`` with one
pipe-delimited string, and ``as<asn>.asn.<domain>`` with the owning
country.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import re
from dataclasses import dataclass

from netaddr import IPNetwork, AddrFormatError

from ipowner.config import DEFAULT_REGISTRY_A, DEFAULT_REGISTRY_B
from ipowner.dns.core import DNSClient, first_answer
from ipowner.ip.core import Address


logger = logging.getLogger(__name__)

# "ASN | PREFIX/WIDTH | CC | RIR | DATE"
ORIGIN_PATTERN = re.compile(r"^\s*(\d+)\s*\|\s*([0-9A-Fa-f.:]+)/(\d{1,3})\s*(?:\||$)")

# "ASN | CC | RIR | DATE | NAME"
COUNTRY_PATTERN = re.compile(r"^\s*(\d+)\s*\|\s*([^|]*?)\s*(?:\||$)")


@dataclass(frozen=True)
class AsnRecord:
    """ASN data for an address. Registries may supply any subset."""
    number: str | None = None
    cidr: IPNetwork | None = None
    country_code: str | None = None


def _network(prefix: str, width: str) -> IPNetwork | None:
    try:
        return IPNetwork(f"{prefix}/{width}").cidr
    except (AddrFormatError, ValueError):
        logger.debug("Unparsable prefix %s/%s", prefix, width)
        return None


def parse_registry_a(fields: list[str] | None) -> tuple[str, IPNetwork] | None:
    """Read ``(asn, prefix, width)`` TXT strings."""
    if not fields or len(fields) != 3:
        return None
    asn, prefix, width = (f.strip() for f in fields)
    if not asn.isdigit():
        return None
    cidr = _network(prefix, width)
    if cidr is None:
        return None
    return asn, cidr


def parse_registry_b(fields: list[str] | None) -> tuple[str, IPNetwork] | None:
    """Read a single ``ASN | PREFIX/WIDTH | ...`` TXT string."""
    if not fields or len(fields) != 1:
        return None
    match = ORIGIN_PATTERN.match(fields[0])
    if not match:
        return None
    cidr = _network(match.group(2), match.group(3))
    if cidr is None:
        return None
    return match.group(1), cidr


def parse_country(fields: list[str] | None, asn: str | None = None) -> str | None:
    """Read the country code from a single ``ASN | CC | ...`` TXT string.

    When ``asn`` is given, an answer about a different AS is ignored.
    """
    if not fields or len(fields) != 1:
        return None
    match = COUNTRY_PATTERN.match(fields[0])
    if not match or not match.group(2):
        return None
    if asn is not None and int(match.group(1)) != int(asn):
        logger.debug("Country answer is for AS%s, not AS%s", match.group(1), asn)
        return None
    return match.group(2).upper()


class AsnResolver:
    """Resolve ASN, announced prefix and country for an address."""

    def __init__(
        self,
        client: DNSClient,
        registry_a: str = DEFAULT_REGISTRY_A,
        registry_b: str = DEFAULT_REGISTRY_B,
    ):
        self.client = client
        self.registry_a = registry_a
        self.registry_b = registry_b

    def query_registry_a(self, address: Address) -> tuple[str, IPNetwork] | None:
        # RouteViews only serves the IPv4 reverse tree
        if address.version != 4:
            return None
        name = f"{address.reverse_name}.asn.{self.registry_a}"
        return parse_registry_a(self.client.txt(name))

    def query_registry_b(self, address: Address) -> tuple[str, IPNetwork] | None:
        origin = "origin" if address.version == 4 else "origin6"
        name = f"{address.reverse_name}.{origin}.asn.{self.registry_b}"
        return parse_registry_b(self.client.txt(name))

    def query_country(self, asn: str) -> str | None:
        name = f"as{asn}.asn.{self.registry_b}"
        return parse_country(self.client.txt(name), asn)

    def resolve(self, address: Address) -> AsnRecord:
        """Look up an address, falling back from registry A to registry B."""
        origin = first_answer([
            lambda: self.query_registry_a(address),
            lambda: self.query_registry_b(address),
        ])
        if origin is None:
            logger.debug("%s: no ASN data from either registry", address)
            return AsnRecord()

        asn, cidr = origin
        country = self.query_country(asn)
        logger.debug("%s: AS%s %s country=%s", address, asn, cidr, country)
        return AsnRecord(number=asn, cidr=cidr, country_code=country)
