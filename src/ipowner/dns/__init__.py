"""
DNS Transport Module

Provides the TXT and PTR queries used by the ASN and name resolvers.
"""

from ipowner.dns.core import DNSClient, first_answer

__all__ = [
    "DNSClient",
    "first_answer",
]
