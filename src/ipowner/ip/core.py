"""
Core IP address handling and reserved-block classification.
"""

from dataclasses import dataclass

from netaddr import IPAddress, IPNetwork, AddrFormatError

from ipowner.errors import InvalidAddressError


# IANA reserved blocks that are never looked up. Order matters: the first
# containing block wins.
RESERVED_RANGES_V4 = [
    "0.0.0.0/8",           # "This" network
    "10.0.0.0/8",          # Private-Use
    "127.0.0.0/8",         # Loopback
    "169.254.0.0/16",      # Link-Local
    "172.16.0.0/12",       # Private-Use
    "192.168.0.0/16",      # Private-Use
]

RESERVED_BLOCKS: tuple[IPNetwork, ...] = tuple(IPNetwork(r) for r in RESERVED_RANGES_V4)

REVERSE_ZONES = (".in-addr.arpa", ".ip6.arpa")


@dataclass(frozen=True)
class Address:
    """A parsed IP address with its reverse-zone and host-network forms."""
    ip: IPAddress
    reverse_name: str
    cidr: IPNetwork

    @property
    def version(self) -> int:
        return self.ip.version

    def __str__(self) -> str:
        return str(self.ip)


def reverse_labels(ip: IPAddress) -> str:
    """Reverse-zone labels of an address without the arpa suffix.

    ``10.1.2.3`` gives ``3.2.1.10``; IPv6 addresses give their nibbles.
    """
    name = ip.reverse_dns.rstrip(".")
    for zone in REVERSE_ZONES:
        if name.endswith(zone):
            return name[: -len(zone)]
    return name


def parse_address(text: str) -> Address:
    """Parse an IP address literal.

    Raises:
        InvalidAddressError: if the text is not a single IPv4 or IPv6 address
    """
    if not isinstance(text, str) or not text.strip() or "/" in text:
        raise InvalidAddressError(str(text), "expected a single address")
    candidate = text.strip()

    try:
        ip = IPAddress(candidate)
    except (AddrFormatError, ValueError, TypeError) as e:
        raise InvalidAddressError(text, str(e)) from e

    prefix = 32 if ip.version == 4 else 128
    return Address(
        ip=ip,
        reverse_name=reverse_labels(ip),
        cidr=IPNetwork(f"{ip}/{prefix}"),
    )


def classify_reserved(
    address: Address,
    blocks: tuple[IPNetwork, ...] = RESERVED_BLOCKS,
) -> IPNetwork | None:
    """Return the first reserved block wholly containing the address, if any."""
    for block in blocks:
        if block.version != address.version:
            continue
        if address.cidr in block:
            return block
    return None


def is_reserved(text: str) -> bool:
    """Check whether an address literal falls in a reserved block."""
    return classify_reserved(parse_address(text)) is not None


def block_label(block: IPNetwork) -> str:
    """Network/prefix form used as the domain of a reserved address."""
    return f"{block.network}/{block.prefixlen}"
