import ipaddress
from datetime import timedelta

import pytest

from libdns.core import Zone
from libdns.dummy import DummyProvider, ZoneNotFoundError
from libdns.rrtypes import CNAME, RR, TXT, Address

ZONE = "example.com."
TTL = timedelta(seconds=300)


def test_default_zone():
    assert DummyProvider().list_zones() == [Zone(name="example.com.")]


def test_list_zones_keeps_order():
    provider = DummyProvider("zone1.com.", "zone2.net.", "zone3.org.")
    assert [z.name for z in provider.list_zones()] == [
        "zone1.com.",
        "zone2.net.",
        "zone3.org.",
    ]


def test_new_zone_is_empty():
    assert DummyProvider().get_records(ZONE) == []


@pytest.mark.parametrize(
    "call",
    [
        lambda p: p.get_records("missing."),
        lambda p: p.append_records("missing.", []),
        lambda p: p.set_records("missing.", []),
        lambda p: p.delete_records("missing.", []),
    ],
)
def test_unknown_zone(call):
    with pytest.raises(ZoneNotFoundError, match="zone missing. not found"):
        call(DummyProvider())


def test_append_converts_rr_to_concrete():
    provider = DummyProvider()
    out = provider.append_records(ZONE, [RR("www", TTL, "A", "192.0.2.1")])
    expected = Address(name="www", ttl=TTL, ip=ipaddress.ip_address("192.0.2.1"))
    assert out == [expected]
    assert provider.get_records(ZONE) == [expected]


def test_append_keeps_unparseable_rr():
    provider = DummyProvider()
    bad = RR("www", TTL, "A", "not-an-ip")
    assert provider.append_records(ZONE, [bad]) == [bad]


def test_append_keeps_structured_records():
    provider = DummyProvider()
    rec = TXT(name="t", ttl=TTL, text="hello")
    assert provider.append_records(ZONE, [rec]) == [rec]


def test_get_records_returns_copy():
    provider = DummyProvider()
    provider.append_records(ZONE, [TXT(name="t", text="x")])
    records = provider.get_records(ZONE)
    records.clear()
    assert len(provider.get_records(ZONE)) == 1


def test_set_replaces_only_matching_sets():
    provider = DummyProvider()
    provider.append_records(
        ZONE,
        [
            RR("@", TTL, "A", "192.0.2.1"),
            RR("@", TTL, "A", "192.0.2.2"),
            RR("@", TTL, "TXT", "hello world"),
        ],
    )
    out = provider.set_records(ZONE, [RR("@", TTL, "A", "192.0.2.3")])
    assert out == [Address(name="@", ttl=TTL, ip=ipaddress.ip_address("192.0.2.3"))]
    datas = sorted((r.rr().type, r.rr().data) for r in provider.get_records(ZONE))
    assert datas == [("A", "192.0.2.3"), ("TXT", "hello world")]


def test_delete_exact_match():
    provider = DummyProvider()
    provider.append_records(ZONE, [CNAME(name="c", ttl=TTL, target="a.example.")])
    assert provider.delete_records(ZONE, [CNAME(name="c", ttl=TTL, target="b.example.")]) == []
    deleted = provider.delete_records(ZONE, [CNAME(name="c", ttl=TTL, target="a.example.")])
    assert deleted == [CNAME(name="c", ttl=TTL, target="a.example.")]
    assert provider.get_records(ZONE) == []


def test_delete_wildcard_fields():
    provider = DummyProvider()
    provider.append_records(
        ZONE,
        [
            RR("www", TTL, "A", "192.0.2.1"),
            RR("www", TTL, "TXT", "x"),
            RR("other", TTL, "TXT", "y"),
        ],
    )
    deleted = provider.delete_records(ZONE, [RR(name="www")])
    assert sorted(r.rr().type for r in deleted) == ["A", "TXT"]
    assert [r.rr().name for r in provider.get_records(ZONE)] == ["other"]


def test_delete_address_without_ip_matches_type():
    provider = DummyProvider()
    provider.append_records(
        ZONE, [RR("www", TTL, "A", "192.0.2.1"), RR("www", TTL, "TXT", "x")]
    )
    deleted = provider.delete_records(ZONE, [Address(name="www")])
    assert [r.rr().type for r in deleted] == ["A"]
    assert [r.rr().type for r in provider.get_records(ZONE)] == ["TXT"]


def test_delete_ttl_must_match_when_given():
    provider = DummyProvider()
    provider.append_records(ZONE, [TXT(name="t", ttl=TTL, text="x")])
    assert provider.delete_records(ZONE, [TXT(name="t", ttl=timedelta(seconds=1), text="x")]) == []
    assert len(provider.get_records(ZONE)) == 1