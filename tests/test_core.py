import pytest

from libdns.core import (
    AtomicError,
    RecordAppender,
    RecordDeleter,
    RecordGetter,
    RecordSetter,
    Zone,
    ZoneLister,
    absolute_name,
    relative_name,
)


def test_relative_name_example():
    assert relative_name("sub.example.com.", "example.com.") == "sub"


def test_absolute_name_example():
    assert absolute_name("sub", "example.com.") == "sub.example.com."


@pytest.mark.parametrize(
    "fqdn, zone, expected",
    [
        ("", "", ""),
        ("", "example.com", ""),
        ("example.com.", "example.com.", "@"),
        ("example.com", "example.com.", "@"),
        ("example.com.", "example.com", "@"),
        ("example.com", "", "example.com"),
        ("example.com.", "", "example.com"),
        ("sub.example.com", "example.com", "sub"),
        ("foo.bar.example.com", "bar.example.com", "foo"),
        ("foo.bar.example.com", "example.com", "foo.bar"),
        ("foo.bar.example.com.", "example.com.", "foo.bar"),
        ("foo.bar.example.com", "example.com.", "foo.bar"),
        ("foo.bar.example.com.", "example.com", "foo.bar"),
        ("example.com", "example.net", "example.com"),
    ],
)
def test_relative_name(fqdn, zone, expected):
    assert relative_name(fqdn, zone) == expected


@pytest.mark.parametrize(
    "name, zone, expected",
    [
        ("", "example.com", "example.com"),
        ("@", "example.com.", "example.com."),
        ("www", "example.com.", "www.example.com."),
        ("www.", "example.com.", "www."),
        ("foo.bar.", "example.com.", "foo.bar."),
        ("foo.bar", "example.com.", "foo.bar.example.com."),
        ("foo", "", "foo"),
    ],
)
def test_absolute_name(name, zone, expected):
    assert absolute_name(name, zone) == expected


def test_absolute_name_empty_zone_strips_dots():
    assert absolute_name("..foo.bar..", "") == "foo.bar"


def test_absolute_name_is_idempotent():
    once = absolute_name("www", "example.com.")
    assert absolute_name(once, "example.com.") == once


def test_zone_equality_and_immutability():
    zone = Zone("example.com.")
    assert zone == Zone(name="example.com.")
    assert zone.name == "example.com."
    with pytest.raises(AttributeError):
        zone.name = "other."


def test_atomic_error_carries_message():
    err = AtomicError("rolled back")
    assert str(err) == "rolled back"
    with pytest.raises(AtomicError, match="rolled back"):
        raise err


class _FullProvider:
    def get_records(self, zone):
        return []

    def append_records(self, zone, recs):
        return list(recs)

    def set_records(self, zone, recs):
        return list(recs)

    def delete_records(self, zone, recs):
        return []

    def list_zones(self):
        return [Zone("example.com.")]


class _ReadOnly:
    def get_records(self, zone):
        return []


def _matching(protocol):
    return [p for p in (_FullProvider(), _ReadOnly()) if isinstance(p, protocol)]


@pytest.mark.parametrize(
    "protocol, count",
    [
        (RecordGetter, 2),
        (RecordAppender, 1),
        (RecordSetter, 1),
        (RecordDeleter, 1),
        (ZoneLister, 1),
    ],
)
def test_providers_matching_protocol(protocol, count):
    assert len(_matching(protocol)) == count


def test_zone_lister_filter_yields_zones():
    listers = _matching(ZoneLister)
    assert [zone for p in listers for zone in p.list_zones()] == [Zone("example.com.")]