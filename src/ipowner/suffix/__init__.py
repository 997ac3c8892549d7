"""
Public Suffix Module

Extracts registrable domains from host names using a public-suffix
label tree.
"""

from ipowner.suffix.core import (
    SuffixTree,
    registrable_domain,
    parse_suffix_rules,
    build_suffix_tree,
    load_suffix_tree,
)

__all__ = [
    "SuffixTree",
    "registrable_domain",
    "parse_suffix_rules",
    "build_suffix_tree",
    "load_suffix_tree",
]
