"""
Configuration management for IPOwner.

Loads registry domains, timeouts and data set locations from
environment variables or a .env file.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field

# Try to load from .env file if python-dotenv is available
try:
    from dotenv import load_dotenv
    # Check common locations for .env
    env_locations = [
        Path.home() / ".ipowner" / ".env",
        Path.home() / ".config" / "ipowner" / ".env",
        Path.cwd() / ".env",
    ]
    for env_path in env_locations:
        if env_path.exists():
            load_dotenv(env_path)
            break
except ImportError:
    pass


DEFAULT_REGISTRY_A = "routeviews.org"
DEFAULT_REGISTRY_B = "cymru.com"
DEFAULT_DNS_TIMEOUT = 30.0
DEFAULT_SCAN_DEADLINE = 60.0
DEFAULT_SUFFIX_LIST = str(Path.home() / ".ipowner" / "public_suffix_list.dat")
DEFAULT_GEOIP_DB = "/var/lib/GeoIP/GeoLite2-City.mmdb"

GEO_BACKENDS = ("mmdb", "ipinfo", "none")


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class ResolverConfig:
    """Settings shared by every lookup in a run."""

    # DNS-served ASN registries
    registry_a: str = DEFAULT_REGISTRY_A
    registry_b: str = DEFAULT_REGISTRY_B

    # DNS transport
    dns_timeout: float = DEFAULT_DNS_TIMEOUT
    nameservers: tuple[str, ...] = field(default_factory=tuple)

    # Neighbourhood PTR scan
    scan_deadline: float = DEFAULT_SCAN_DEADLINE
    scan_whole_block_above: int = 18

    # Data sets
    suffix_list_path: str = DEFAULT_SUFFIX_LIST
    geo_backend: str = "mmdb"
    geoip_db_path: str = DEFAULT_GEOIP_DB
    ipinfo_token: str = ""

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    @classmethod
    def from_env(cls) -> "ResolverConfig":
        """Load configuration from environment variables."""
        backend = os.getenv("IPOWNER_GEO_BACKEND", "mmdb").lower()
        if backend not in GEO_BACKENDS:
            raise ValueError(
                f"IPOWNER_GEO_BACKEND must be one of {', '.join(GEO_BACKENDS)}, got {backend!r}"
            )
        return cls(
            registry_a=os.getenv("IPOWNER_REGISTRY_A", DEFAULT_REGISTRY_A),
            registry_b=os.getenv("IPOWNER_REGISTRY_B", DEFAULT_REGISTRY_B),
            dns_timeout=float(os.getenv("IPOWNER_DNS_TIMEOUT", DEFAULT_DNS_TIMEOUT)),
            nameservers=tuple(_split_list(os.getenv("IPOWNER_NAMESERVERS", ""))),
            scan_deadline=float(os.getenv("IPOWNER_SCAN_DEADLINE", DEFAULT_SCAN_DEADLINE)),
            suffix_list_path=os.getenv("IPOWNER_SUFFIX_LIST", DEFAULT_SUFFIX_LIST),
            geo_backend=backend,
            geoip_db_path=os.getenv("IPOWNER_GEOIP_DB", DEFAULT_GEOIP_DB),
            ipinfo_token=os.getenv("IPINFO_TOKEN", ""),
            log_level=os.getenv("IPOWNER_LOG_LEVEL", "WARNING"),
            log_file=os.getenv("IPOWNER_LOG_FILE") or None,
        )


# Global config instance
_config: ResolverConfig | None = None


def get_config() -> ResolverConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ResolverConfig.from_env()
    return _config


def set_config(config: ResolverConfig | None) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
