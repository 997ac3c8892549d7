"""
Core DNS transport.

Every query either returns data or None. NXDOMAIN, empty answers,
missing nameservers and timeouts are all "no data".
"""

import logging
from typing import Callable, Iterable, TypeVar

import dns.exception
import dns.name
import dns.resolver
import dns.reversename

from ipowner.errors import DataSourceError


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

T = TypeVar("T")


class DNSClient:
    """Thin TXT/PTR client over a dnspython resolver."""

    def __init__(self, nameservers: list[str] | tuple[str, ...] | None = None, timeout: float = DEFAULT_TIMEOUT):
        """
        Raises:
            DataSourceError: if the system resolver configuration cannot be
                read or a configured nameserver is not an address
        """
        try:
            self.resolver = dns.resolver.Resolver(configure=not nameservers)
            if nameservers:
                self.resolver.nameservers = list(nameservers)
        except dns.resolver.NoResolverConfiguration as e:
            raise DataSourceError("resolver configuration", "system resolver", str(e) or "no nameservers") from e
        except ValueError as e:
            raise DataSourceError("resolver configuration", ",".join(nameservers or ()), str(e)) from e
        # Same bound for UDP and the TCP retry on truncation
        self.resolver.timeout = timeout
        self.resolver.lifetime = timeout
        self.timeout = timeout

    def _resolve(self, name: str | dns.name.Name, record_type: str, lifetime: float | None = None):
        """Run one query, returning the answer or None."""
        if lifetime is None:
            lifetime = self.timeout
        try:
            return self.resolver.resolve(name, record_type, lifetime=lifetime)
        except dns.resolver.NXDOMAIN:
            logger.debug("%s %s: NXDOMAIN", name, record_type)
        except dns.resolver.NoAnswer:
            logger.debug("%s %s: no answer", name, record_type)
        except dns.resolver.NoNameservers:
            logger.debug("%s %s: no nameservers", name, record_type)
        except dns.exception.Timeout:
            logger.debug("%s %s: timed out after %.1fs", name, record_type, lifetime)
        except dns.exception.DNSException as e:
            logger.debug("%s %s: %s", name, record_type, e)
        return None

    def txt(self, name: str, lifetime: float | None = None) -> list[str] | None:
        """Return the strings of the first TXT record for a name."""
        answers = self._resolve(name, "TXT", lifetime)
        if answers is None:
            return None
        for rdata in answers:
            return [s.decode("utf-8", errors="replace") for s in rdata.strings]
        return None

    def ptr(self, address: str, lifetime: float | None = None) -> str | None:
        """Return the target of the first PTR record for an address."""
        try:
            rev_name = dns.reversename.from_address(address)
        except (dns.exception.SyntaxError, ValueError) as e:
            logger.debug("%s: cannot build reverse name: %s", address, e)
            return None
        answers = self._resolve(rev_name, "PTR", lifetime)
        if answers is None:
            return None
        for rdata in answers:
            return rdata.target.to_text(omit_final_dot=True)
        return None


def first_answer(attempts: Iterable[Callable[[], T | None]]) -> T | None:
    """Evaluate attempts in order and return the first one that has data."""
    for attempt in attempts:
        result = attempt()
        if result is not None:
            return result
    return None
