"""
Core reverse-name resolution.

Tries the address's own PTR record, then the PTR of its announced
prefix's base address, then scans neighbouring addresses until one
answers or the scan deadline passes.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable

from netaddr import IPNetwork

from ipowner.config import DEFAULT_SCAN_DEADLINE
from ipowner.dns.core import DNSClient, DEFAULT_TIMEOUT, first_answer
from ipowner.ip.core import Address


logger = logging.getLogger(__name__)

# Prefixes longer than this are scanned whole; shorter ones only
# around the queried address.
WHOLE_BLOCK_ABOVE = 18
NEIGHBOURHOOD_PREFIX = 24


@dataclass(frozen=True)
class NameResult:
    """Names found for an address.

    ``alternate`` is only set when ``primary`` is absent.
    """
    primary: str | None = None
    alternate: str | None = None


def scan_range(address: Address, cidr: IPNetwork, whole_block_above: int = WHOLE_BLOCK_ABOVE) -> IPNetwork:
    """Range of candidates for the neighbourhood scan."""
    if cidr.prefixlen > whole_block_above:
        return cidr
    return IPNetwork(f"{address.ip}/{NEIGHBOURHOOD_PREFIX}").cidr


class NameResolver:
    """Find a display name for an address from reverse DNS."""

    def __init__(
        self,
        client: DNSClient,
        scan_deadline: float = DEFAULT_SCAN_DEADLINE,
        query_timeout: float = DEFAULT_TIMEOUT,
        whole_block_above: int = WHOLE_BLOCK_ABOVE,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.scan_deadline = scan_deadline
        self.query_timeout = query_timeout
        self.whole_block_above = whole_block_above
        self.clock = clock

    def resolve(self, address: Address, cidr: IPNetwork | None = None) -> NameResult:
        primary = self.client.ptr(str(address.ip))
        if primary:
            return NameResult(primary=primary)

        if cidr is None:
            return NameResult()

        alternate = first_answer([
            lambda: self.client.ptr(str(cidr.network)) or None,
            lambda: self.scan(address, cidr),
        ])
        return NameResult(alternate=alternate)

    def scan(self, address: Address, cidr: IPNetwork) -> str | None:
        """Query neighbours in address order until one has a PTR record.

        The deadline is wall-clock from the start of the scan. Each query's
        lifetime is clipped to the time left, so a slow upstream cannot push
        the scan past it.
        """
        network = scan_range(address, cidr, self.whole_block_above)
        already_queried = {address.ip, cidr.network}
        started = self.clock()
        queried = 0

        for candidate in network:
            remaining = self.scan_deadline - (self.clock() - started)
            if remaining <= 0:
                logger.info(
                    "%s: neighbourhood scan of %s stopped after %d queries (%.0fs deadline)",
                    address, network, queried, self.scan_deadline,
                )
                return None
            if candidate in already_queried:
                continue

            queried += 1
            name = self.client.ptr(str(candidate), lifetime=min(self.query_timeout, remaining))
            if name:
                logger.debug("%s: neighbour %s is %s", address, candidate, name)
                return name

        logger.debug("%s: no PTR records in %s", address, network)
        return None
