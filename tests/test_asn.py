import pytest
from netaddr import IPNetwork

from ipowner.asn.core import (
    AsnRecord,
    AsnResolver,
    parse_country,
    parse_registry_a,
    parse_registry_b,
)
from ipowner.ip.core import parse_address

from conftest import FakeDNSClient


ADDRESS = parse_address("203.0.113.7")
REGISTRY_A_NAME = "7.113.0.203.asn.routeviews.org"
REGISTRY_B_NAME = "7.113.0.203.origin.asn.cymru.com"
COUNTRY_NAME = "as64500.asn.cymru.com"


def test_registry_a_three_fields():
    client = FakeDNSClient(txt={
        REGISTRY_A_NAME: ["64500", "203.0.113.0", "24"],
        COUNTRY_NAME: ["64500 | US | arin | 2001-01-01 | EXAMPLE-AS, US"],
    })
    record = AsnResolver(client).resolve(ADDRESS)

    assert record == AsnRecord(number="64500", cidr=IPNetwork("203.0.113.0/24"), country_code="US")
    assert client.txt_queries == [REGISTRY_A_NAME, COUNTRY_NAME]


def test_registry_a_hit_without_country():
    client = FakeDNSClient(txt={REGISTRY_A_NAME: ["64500", "203.0.113.0", "24"]})
    record = AsnResolver(client).resolve(ADDRESS)

    assert record.number == "64500"
    assert record.cidr == IPNetwork("203.0.113.0/24")
    assert record.country_code is None


def test_country_answer_for_another_as_is_ignored():
    client = FakeDNSClient(txt={
        REGISTRY_A_NAME: ["64500", "203.0.113.0", "24"],
        COUNTRY_NAME: ["64999 | DE | ripencc | 2001-01-01 | OTHER-AS, DE"],
    })
    record = AsnResolver(client).resolve(ADDRESS)

    assert record.number == "64500"
    assert record.country_code is None


def test_falls_back_to_registry_b():
    client = FakeDNSClient(txt={
        REGISTRY_A_NAME: ["64500", "203.0.113.0"],
        REGISTRY_B_NAME: ["64501 | 203.0.112.0/23 | NL | ripencc | 2010-05-04"],
        "as64501.asn.cymru.com": ["64501 | NL | ripencc | 2010-05-04 | OTHER-AS, NL"],
    })
    record = AsnResolver(client).resolve(ADDRESS)

    assert record == AsnRecord(number="64501", cidr=IPNetwork("203.0.112.0/23"), country_code="NL")
    assert client.txt_queries == [REGISTRY_A_NAME, REGISTRY_B_NAME, "as64501.asn.cymru.com"]


def test_no_data_from_either_registry():
    client = FakeDNSClient()
    record = AsnResolver(client).resolve(ADDRESS)

    assert record == AsnRecord()
    # No country query without an ASN
    assert client.txt_queries == [REGISTRY_A_NAME, REGISTRY_B_NAME]


def test_custom_registry_domains():
    client = FakeDNSClient(txt={
        "7.113.0.203.asn.mirror-a.test": ["64500", "203.0.113.0", "24"],
        "as64500.asn.mirror-b.test": ["64500 | DE | ripencc"],
    })
    record = AsnResolver(client, registry_a="mirror-a.test", registry_b="mirror-b.test").resolve(ADDRESS)
    assert record.country_code == "DE"


def test_ipv6_uses_origin6_only():
    address = parse_address("2001:db8::1")
    name = f"{address.reverse_name}.origin6.asn.cymru.com"
    client = FakeDNSClient(txt={name: ["64496 | 2001:db8::/32 | EU | ripencc | 2004-01-01"]})
    record = AsnResolver(client).resolve(address)

    assert record.number == "64496"
    assert record.cidr == IPNetwork("2001:db8::/32")
    assert client.txt_queries[0] == name


def test_parse_registry_a_normalises_prefix():
    assert parse_registry_a(["64500", "203.0.113.9", "24"]) == ("64500", IPNetwork("203.0.113.0/24"))


@pytest.mark.parametrize("fields", [
    None,
    [],
    ["64500", "203.0.113.0"],
    ["64500", "203.0.113.0", "24", "extra"],
    ["AS64500", "203.0.113.0", "24"],
    ["64500", "not-a-prefix", "24"],
    ["64500", "203.0.113.0", "99"],
])
def test_parse_registry_a_wrong_shape(fields):
    assert parse_registry_a(fields) is None


def test_parse_registry_b():
    assert parse_registry_b(["15169 | 8.8.8.0/24 | US | arin | 2023-12-28"]) == (
        "15169", IPNetwork("8.8.8.0/24")
    )


@pytest.mark.parametrize("fields", [
    None,
    ["15169 | 8.8.8.0/24 | US", "second"],
    ["15169 16509 | 8.8.8.0/24 | US | arin"],
    ["15169 | 8.8.8.0 | US | arin"],
    ["garbage"],
])
def test_parse_registry_b_wrong_shape(fields):
    assert parse_registry_b(fields) is None


def test_parse_country():
    assert parse_country(["15169 | us | arin | 2000-03-30 | GOOGLE, US"]) == "US"
    assert parse_country(["15169 |  | arin"]) is None
    assert parse_country(["15169 | US", "extra"]) is None
    assert parse_country(None) is None
    assert parse_country(["15169 | US | arin"], asn="15169") == "US"
    assert parse_country(["15169 | US | arin"], asn="13335") is None
