import pytest

from libdns.core import Zone
from libdns.dummy import DummyProvider
from libdns.e2e import (
    CheckFailed,
    CheckSkipped,
    CheckStatus,
    FullProvider,
    RecordProvider,
    full_suite,
    record_suite,
)
from libdns.rrtypes import Address


class _NoDeleteProvider:
    """Reports nothing deleted and keeps everything."""

    def __init__(self):
        self._inner = DummyProvider()

    def get_records(self, zone):
        return self._inner.get_records(zone)

    def append_records(self, zone, recs):
        return self._inner.append_records(zone, recs)

    def set_records(self, zone, recs):
        return self._inner.set_records(zone, recs)

    def delete_records(self, zone, recs):
        return []


class _AppendingSetProvider(_NoDeleteProvider):
    """Appends on set instead of replacing."""

    def set_records(self, zone, recs):
        return self._inner.append_records(zone, recs)

    def delete_records(self, zone, recs):
        return self._inner.delete_records(zone, recs)


def test_dummy_provider_passes_all_checks():
    provider = DummyProvider("example.com.")
    results = full_suite(provider, "example.com.").run_full_tests()
    assert [r.name for r in results] == [
        "ListZones",
        "GetRecords",
        "AppendRecords",
        "SetRecords",
        "DeleteRecords",
    ]
    assert all(r.status is CheckStatus.PASSED for r in results), results
    assert provider.get_records("example.com.") == []


@pytest.mark.parametrize("zone", ["zone1.com.", "zone2.net.", "zone3.org."])
def test_dummy_provider_multiple_zones(zone):
    provider = DummyProvider("zone1.com.", "zone2.net.", "zone3.org.")
    results = full_suite(provider, zone).run_full_tests()
    assert {r.status for r in results} == {CheckStatus.PASSED}


def test_record_suite_skips_list_zones():
    suite = record_suite(DummyProvider(), "example.com.")
    with pytest.raises(CheckSkipped):
        suite.check_list_zones()
    results = suite.run_full_tests()
    assert results[0].status is CheckStatus.SKIPPED
    assert [r.status for r in results[1:]] == [CheckStatus.PASSED] * 4


def test_list_zones_fails_for_missing_zone():
    provider = DummyProvider("other.com.")
    suite = full_suite(provider, "example.com.")
    with pytest.raises(CheckFailed) as info:
        suite.check_list_zones()
    assert info.value.errors == ["Test zone example.com. not found in ListZones result"]


def test_get_records_fails_for_unknown_zone():
    suite = record_suite(DummyProvider("other.com."), "example.com.")
    with pytest.raises(CheckFailed) as info:
        suite.check_get_records()
    assert info.value.errors[-1].startswith("GetRecords failed:")


def test_delete_check_detects_missing_deletion():
    suite = record_suite(_NoDeleteProvider(), "example.com.")
    with pytest.raises(CheckFailed) as info:
        suite.check_delete_records()
    assert "Expected 3 deleted records, got 0" in info.value.errors


def test_set_check_detects_old_records():
    suite = record_suite(_AppendingSetProvider(), "example.com.")
    with pytest.raises(CheckFailed) as info:
        suite.check_set_records()
    assert "Old record data still exists: 192.0.2.1" in info.value.errors


def test_append_record_func_is_used():
    seen = []

    def factory(rr):
        seen.append(rr.name)
        return rr.parse()

    provider = DummyProvider()
    suite = record_suite(provider, "example.com.")
    suite.append_record_func = factory
    suite.check_append_records()
    assert seen == ["test-append", "test-append-txt", "test-append-cname"]
    assert provider.get_records("example.com.") == []


def test_provider_protocols():
    candidates = [DummyProvider(), _NoDeleteProvider(), Address()]
    full = [p for p in candidates if isinstance(p, FullProvider)]
    records = [p for p in candidates if isinstance(p, RecordProvider)]
    assert len(full) == 1
    assert full[0].list_zones() == [Zone("example.com.")]
    assert len(records) == 2
    assert [p.get_records("example.com.") for p in records] == [[], []]