"""
Name Resolution Module

Resolves display names through reverse DNS with a bounded
neighbourhood fallback.
"""

from ipowner.names.core import (
    NameResult,
    NameResolver,
    scan_range,
)

__all__ = [
    "NameResult",
    "NameResolver",
    "scan_range",
]
