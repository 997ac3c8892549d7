"""
Geolocation Module

Provides the location record merged into every result and the
backends that supply it.
"""

from ipowner.geo.core import (
    GeoRecord,
    EMPTY_GEO,
    GeoLocator,
    NullLocator,
    MaxMindLocator,
    IPInfoLocator,
    open_locator,
)

__all__ = [
    "GeoRecord",
    "EMPTY_GEO",
    "GeoLocator",
    "NullLocator",
    "MaxMindLocator",
    "IPInfoLocator",
    "open_locator",
]
