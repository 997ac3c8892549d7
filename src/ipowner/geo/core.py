"""
Geolocation lookups.

The resolver only needs ``lookup(ip) -> GeoRecord``. Three backends
are provided: a local MaxMind database, the IPInfo.io API and a null
backend. A miss is always EMPTY_GEO, never an exception.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import geoip2.database
import geoip2.errors
import httpx
import maxminddb

from ipowner.config import ResolverConfig
from ipowner.errors import DataSourceError


logger = logging.getLogger(__name__)

IPINFO_API = "https://ipinfo.io"


@dataclass(frozen=True)
class GeoRecord:
    """Location of an address. Every field may be absent."""
    country_code: str | None = None
    country_name: str | None = None
    continent_code: str | None = None
    region: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    @property
    def is_empty(self) -> bool:
        return self == EMPTY_GEO


EMPTY_GEO = GeoRecord()


class GeoLocator(Protocol):
    def lookup(self, ip: str) -> GeoRecord: ...

    def close(self) -> None: ...


class NullLocator:
    """Locator used when geolocation is switched off."""

    def lookup(self, ip: str) -> GeoRecord:
        return EMPTY_GEO

    def close(self) -> None:
        pass


class MaxMindLocator:
    """Locator backed by a GeoLite2/GeoIP2 City or Country database."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path).expanduser()
        if not self.db_path.is_file():
            raise DataSourceError("geolocation database", str(self.db_path), "file not found")
        try:
            self.reader = geoip2.database.Reader(str(self.db_path))
        except (OSError, ValueError, maxminddb.InvalidDatabaseError) as e:
            raise DataSourceError("geolocation database", str(self.db_path), str(e)) from e

        database_type = self.reader.metadata().database_type
        if "City" in database_type:
            self._query = self.reader.city
        elif "Country" in database_type:
            self._query = self.reader.country
        else:
            self.reader.close()
            raise DataSourceError(
                "geolocation database", str(self.db_path),
                f"unsupported database type {database_type}",
            )

    def lookup(self, ip: str) -> GeoRecord:
        try:
            response = self._query(ip)
        except geoip2.errors.AddressNotFoundError:
            return EMPTY_GEO
        except ValueError as e:
            logger.debug("%s: geolocation lookup failed: %s", ip, e)
            return EMPTY_GEO

        # Country databases have no subdivisions, city or location
        subdivision = getattr(response, "subdivisions", None)
        city = getattr(response, "city", None)
        location = getattr(response, "location", None)
        return GeoRecord(
            country_code=response.country.iso_code,
            country_name=response.country.name,
            continent_code=response.continent.code,
            region=subdivision.most_specific.name if subdivision else None,
            city=city.name if city else None,
            latitude=location.latitude if location else None,
            longitude=location.longitude if location else None,
        )

    def close(self) -> None:
        self.reader.close()


def _parse_loc(loc: str | None) -> tuple[float | None, float | None]:
    """Split IPInfo's "lat,lon" string."""
    if not loc or "," not in loc:
        return None, None
    lat, lon = loc.split(",", 1)
    try:
        return float(lat), float(lon)
    except ValueError:
        return None, None


def _continent_code(data: dict) -> str | None:
    # Older responses nest the code in an object, newer ones send the name
    # as a string beside a flat continent_code.
    continent = data.get("continent")
    if isinstance(continent, dict):
        return continent.get("code")
    code = data.get("continent_code")
    return code if isinstance(code, str) else None


class IPInfoLocator:
    """Locator backed by the IPInfo.io API."""

    def __init__(self, token: str = "", base_url: str = IPINFO_API, transport: httpx.BaseTransport | None = None):
        self.token = token
        self.base_url = base_url
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        self._client = httpx.Client(
            timeout=httpx.Timeout(10.0, connect=5.0),
            headers=headers,
            transport=transport,
        )

    def lookup(self, ip: str) -> GeoRecord:
        try:
            resp = self._client.get(f"{self.base_url}/{ip}")
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.debug("%s: IPInfo HTTP %s", ip, e.response.status_code)
            return EMPTY_GEO
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("%s: IPInfo lookup failed: %s", ip, e)
            return EMPTY_GEO

        if not isinstance(data, dict):
            logger.debug("%s: IPInfo returned %s, expected an object", ip, type(data).__name__)
            return EMPTY_GEO
        if data.get("bogon"):
            return EMPTY_GEO

        latitude, longitude = _parse_loc(data.get("loc"))
        return GeoRecord(
            country_code=data.get("country"),
            country_name=data.get("country_name"),
            continent_code=_continent_code(data),
            region=data.get("region"),
            city=data.get("city"),
            latitude=latitude,
            longitude=longitude,
        )

    def close(self) -> None:
        self._client.close()


def open_locator(config: ResolverConfig) -> GeoLocator:
    """Open the geolocation backend named in the configuration.

    Raises:
        DataSourceError: if the MaxMind database cannot be opened
    """
    if config.geo_backend == "none":
        return NullLocator()
    if config.geo_backend == "ipinfo":
        return IPInfoLocator(token=config.ipinfo_token)
    return MaxMindLocator(config.geoip_db_path)
