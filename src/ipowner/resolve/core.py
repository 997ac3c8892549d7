"""
Resolution of an address into one ownership and naming record.

Runs reserved-block classification, ASN lookup, reverse-name lookup
and registrable-domain extraction in that order, then merges the
geolocation record. Results are immutable and never share state.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Callable, Iterable, Iterator

from netaddr import IPNetwork

from ipowner.asn.core import AsnRecord, AsnResolver
from ipowner.config import ResolverConfig
from ipowner.dns.core import DNSClient
from ipowner.errors import InvalidAddressError
from ipowner.geo.core import EMPTY_GEO, GeoLocator, GeoRecord, open_locator
from ipowner.ip.core import RESERVED_BLOCKS, Address, block_label, classify_reserved, parse_address
from ipowner.logging_config import address_context
from ipowner.names.core import NameResolver, NameResult
from ipowner.suffix.core import SuffixTree, load_suffix_tree, registrable_domain


logger = logging.getLogger(__name__)

RESERVED_ASN = "RESERVED"
RESERVED_COUNTRY = "--"
UNKNOWN_DOMAIN = "#UNKNOWN"


@dataclass(frozen=True)
class AsnSummary:
    cidr: str = ""
    number: str = ""
    country_code: str = ""


@dataclass(frozen=True)
class NameSummary:
    domain: str
    host: str
    alt: str = ""


@dataclass(frozen=True)
class ResolutionResult:
    """Final record for one queried address."""
    ip_address: str
    geo: GeoRecord
    asn: AsnSummary
    name: NameSummary

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ResolutionContext:
    """Long-lived collaborators shared by every resolution in a run."""
    dns: DNSClient
    suffix_tree: SuffixTree
    geo: GeoLocator
    reserved_blocks: tuple[IPNetwork, ...] = RESERVED_BLOCKS
    config: ResolverConfig = field(default_factory=ResolverConfig)

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "ResolutionContext":
        """Open every data source named in the configuration.

        Raises:
            DataSourceError: if the suffix list, resolver configuration or
                geolocation database cannot be loaded
        """
        suffix_tree = load_suffix_tree(config.suffix_list_path)
        dns_client = DNSClient(nameservers=config.nameservers or None, timeout=config.dns_timeout)
        # Opened last so an earlier failure leaves nothing to close
        geo = open_locator(config)
        return cls(dns=dns_client, suffix_tree=suffix_tree, geo=geo, config=config)

    def close(self) -> None:
        self.geo.close()


def normalize_name(name: str) -> str:
    """Lowercase a DNS name and drop its trailing dot."""
    return name.strip().rstrip(".").lower()


class OwnerResolver:
    """Resolve addresses into ResolutionResult records."""

    def __init__(self, context: ResolutionContext, clock: Callable[[], float] = time.monotonic):
        self.context = context
        config = context.config
        self.asn_resolver = AsnResolver(
            context.dns,
            registry_a=config.registry_a,
            registry_b=config.registry_b,
        )
        self.name_resolver = NameResolver(
            context.dns,
            scan_deadline=config.scan_deadline,
            query_timeout=config.dns_timeout,
            whole_block_above=config.scan_whole_block_above,
            clock=clock,
        )

    def resolve(self, address: str | Address) -> ResolutionResult:
        """Resolve one address.

        Raises:
            InvalidAddressError: if a string argument is not an IP address
        """
        if isinstance(address, str):
            address = parse_address(address)

        with address_context(str(address.ip)):
            return self._resolve_parsed(address)

    def _resolve_parsed(self, address: Address) -> ResolutionResult:
        domain = None
        block = classify_reserved(address, self.context.reserved_blocks)
        if block is not None:
            logger.debug("%s: reserved block %s", address, block)
            asn = AsnRecord(number=RESERVED_ASN, cidr=block, country_code=RESERVED_COUNTRY)
            names = NameResult()
            domain = block_label(block)
        else:
            asn = self.asn_resolver.resolve(address)
            names = self.name_resolver.resolve(address, asn.cidr)

        primary = normalize_name(names.primary) if names.primary else ""
        alternate = normalize_name(names.alternate) if names.alternate else ""
        if not domain:
            domain = self._derive_domain(primary or alternate, asn)

        ip_address = str(address.ip)
        geo = self.context.geo.lookup(ip_address) or EMPTY_GEO

        return ResolutionResult(
            ip_address=ip_address,
            geo=geo,
            asn=AsnSummary(
                cidr=str(asn.cidr) if asn.cidr is not None else "",
                number=asn.number or "",
                country_code=asn.country_code or "",
            ),
            name=NameSummary(
                domain=domain,
                host=primary or ip_address,
                alt=alternate,
            ),
        )

    def _derive_domain(self, name: str, asn: AsnRecord) -> str:
        if name:
            domain = registrable_domain(name, self.context.suffix_tree)
            if domain:
                return domain
        if asn.number:
            return f"#AS{asn.number}"
        return UNKNOWN_DOMAIN

    def resolve_many(
        self, addresses: Iterable[str]
    ) -> Iterator[tuple[str, ResolutionResult | InvalidAddressError]]:
        """Resolve addresses one after another.

        A malformed address yields its InvalidAddressError in place of a
        result so the remaining inputs are still processed.
        """
        for text in addresses:
            try:
                yield text, self.resolve(text)
            except InvalidAddressError as e:
                logger.debug("Rejected input %r: %s", text, e)
                yield text, e
