"""
IP Address Module

Parses address literals and classifies them against the IANA
reserved blocks.
"""

from ipowner.ip.core import (
    Address,
    RESERVED_BLOCKS,
    parse_address,
    reverse_labels,
    classify_reserved,
    is_reserved,
    block_label,
)

__all__ = [
    "Address",
    "RESERVED_BLOCKS",
    "parse_address",
    "reverse_labels",
    "classify_reserved",
    "is_reserved",
    "block_label",
]
