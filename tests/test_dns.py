from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import dns.exception
import dns.name
import dns.resolver
import pytest

from ipowner.dns.core import DNSClient, first_answer
from ipowner.errors import DataSourceError


@pytest.fixture
def client():
    return DNSClient(nameservers=["192.0.2.53"], timeout=30.0)


def test_client_applies_timeout(client):
    assert client.resolver.timeout == 30.0
    assert client.resolver.lifetime == 30.0


def test_txt_returns_strings_of_first_record(client):
    records = [
        SimpleNamespace(strings=(b"64500", b"203.0.113.0", b"24")),
        SimpleNamespace(strings=(b"ignored",)),
    ]
    client.resolver.resolve = MagicMock(return_value=records)

    assert client.txt("7.113.0.203.asn.routeviews.org") == ["64500", "203.0.113.0", "24"]
    client.resolver.resolve.assert_called_once_with(
        "7.113.0.203.asn.routeviews.org", "TXT", lifetime=30.0
    )


def test_txt_passes_explicit_lifetime(client):
    client.resolver.resolve = MagicMock(return_value=[])
    assert client.txt("example.org", lifetime=4.5) is None
    assert client.resolver.resolve.call_args.kwargs["lifetime"] == 4.5


@pytest.mark.parametrize("error", [
    dns.resolver.NXDOMAIN(),
    dns.resolver.NoAnswer(),
    dns.resolver.NoNameservers(),
    dns.exception.Timeout(),
    dns.exception.DNSException("boom"),
])
def test_failures_are_no_data(client, error):
    client.resolver.resolve = MagicMock(side_effect=error)
    assert client.txt("example.org") is None
    assert client.ptr("198.51.100.1") is None


def test_ptr_returns_first_target_without_final_dot(client):
    records = [SimpleNamespace(target=dns.name.from_text("host.example.com."))]
    client.resolver.resolve = MagicMock(return_value=records)

    assert client.ptr("198.51.100.1") == "host.example.com"
    name, record_type = client.resolver.resolve.call_args.args
    assert str(name) == "1.100.51.198.in-addr.arpa."
    assert record_type == "PTR"


def test_ptr_rejects_non_address(client):
    client.resolver.resolve = MagicMock()
    assert client.ptr("not-an-address") is None
    client.resolver.resolve.assert_not_called()


def test_first_answer_stops_at_first_hit():
    calls = []

    def attempt(value):
        def run():
            calls.append(value)
            return value
        return run

    assert first_answer([attempt(None), attempt("b"), attempt("c")]) == "b"
    assert calls == [None, "b"]


def test_first_answer_all_missing():
    assert first_answer([lambda: None, lambda: None]) is None
    assert first_answer([]) is None


def test_client_without_system_configuration():
    with patch("dns.resolver.Resolver", side_effect=dns.resolver.NoResolverConfiguration("no nameservers")):
        with pytest.raises(DataSourceError, match="resolver configuration"):
            DNSClient()


def test_client_rejects_bad_nameserver():
    with pytest.raises(DataSourceError, match="not-an-ip"):
        DNSClient(nameservers=["not-an-ip"])
