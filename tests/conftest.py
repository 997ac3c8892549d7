import pytest

from ipowner.config import set_config
from ipowner.geo.core import EMPTY_GEO, GeoRecord


class FakeDNSClient:
    """In-memory stand-in for DNSClient that records every query."""

    def __init__(self, txt=None, ptr=None, timeout=30.0, on_query=None):
        self.txt_records = dict(txt or {})
        self.ptr_records = dict(ptr or {})
        self.timeout = timeout
        self.on_query = on_query
        self.queries = []

    def _record(self, record_type, name, lifetime):
        self.queries.append((record_type, name, lifetime))
        if self.on_query is not None:
            self.on_query(record_type, name, lifetime)

    def txt(self, name, lifetime=None):
        self._record("TXT", name, lifetime)
        return self.txt_records.get(name)

    def ptr(self, address, lifetime=None):
        self._record("PTR", address, lifetime)
        return self.ptr_records.get(address)

    @property
    def ptr_queries(self):
        return [name for record_type, name, _ in self.queries if record_type == "PTR"]

    @property
    def txt_queries(self):
        return [name for record_type, name, _ in self.queries if record_type == "TXT"]


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeLocator:
    def __init__(self, records=None):
        self.records = dict(records or {})
        self.lookups = []
        self.closed = False

    def lookup(self, ip):
        self.lookups.append(ip)
        return self.records.get(ip, EMPTY_GEO)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_dns():
    return FakeDNSClient()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def suffix_tree():
    return {
        "com": {"blogspot": False},
        "net": False,
        "uk": {"co": False},
        "ck": {"*": False, "www": True},
    }


@pytest.fixture
def full_geo():
    return GeoRecord(
        country_code="US",
        country_name="United States",
        continent_code="NA",
        region="California",
        city="Mountain View",
        latitude=37.386,
        longitude=-122.0838,
    )


@pytest.fixture(autouse=True)
def reset_config():
    set_config(None)
    yield
    set_config(None)
