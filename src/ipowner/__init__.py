"""
IPOwner - IP Ownership and Naming Lookups

Resolves who owns an IP address and what it is called by combining
reserved-block detection, DNS-served ASN registries, reverse DNS
with a bounded neighbourhood scan, public-suffix domain extraction
and geolocation.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
__author__ = "DNS Science.io"
__copyright__ = "Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company"
