"""End-to-end checks of provider implementations.

The checks create, change and delete records named ``test-append``,
``test-set``, ``test-delete`` and the like, so real providers should be run
against a dedicated test zone. Checks run one after another.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Protocol, runtime_checkable

from .core import RecordAppender, RecordDeleter, RecordGetter, RecordSetter, ZoneLister
from .rrtypes import RR, Record

__all__ = [
    "CheckFailed",
    "CheckResult",
    "CheckSkipped",
    "CheckStatus",
    "FullProvider",
    "ProviderSuite",
    "RecordProvider",
    "full_suite",
    "record_suite",
]

log = logging.getLogger(__name__)

_TTL = timedelta(seconds=300)
_TTL_UPDATED = timedelta(seconds=600)


@runtime_checkable
class RecordProvider(RecordGetter, RecordAppender, RecordSetter, RecordDeleter, Protocol):
    """A provider that reads and changes records."""


@runtime_checkable
class FullProvider(RecordProvider, ZoneLister, Protocol):
    """A record provider that can also list its zones."""


class CheckFailed(AssertionError):
    """Raised when a check finds one or more problems."""

    def __init__(self, name: str, errors: Sequence[str]) -> None:
        self.name = name
        self.errors = list(errors)
        super().__init__(f"{name}: " + "; ".join(self.errors))


class CheckSkipped(Exception):
    """Raised when a check does not apply to the provider."""


class CheckStatus(enum.Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class CheckResult:
    """The outcome of one check."""

    name: str
    status: CheckStatus
    errors: list[str] = field(default_factory=list)


class _Report:
    """Collects errors of one check."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.errors: list[str] = []

    def error(self, message: str) -> None:
        log.error("%s: %s", self.name, message)
        self.errors.append(message)

    def fatal(self, message: str) -> CheckFailed:
        log.error("%s: %s", self.name, message)
        return CheckFailed(self.name, [*self.errors, message])

    def finish(self) -> None:
        if self.errors:
            raise CheckFailed(self.name, self.errors)


@dataclass
class ProviderSuite:
    """Configuration for running the checks against one provider and zone.

    ``append_record_func`` builds the records handed to the provider from
    plain RRs; by default the RRs themselves are used.
    """

    provider: RecordProvider
    zone: str
    full_provider: FullProvider | None = None
    append_record_func: Callable[[RR], Record] | None = None

    def run_record_tests(self) -> list[CheckResult]:
        """Run the record checks in order and return their results."""
        return [
            self._run("GetRecords", self.check_get_records),
            self._run("AppendRecords", self.check_append_records),
            self._run("SetRecords", self.check_set_records),
            self._run("DeleteRecords", self.check_delete_records),
        ]

    def run_full_tests(self) -> list[CheckResult]:
        """Run the zone-listing check and then all record checks."""
        return [self._run("ListZones", self.check_list_zones), *self.run_record_tests()]

    @staticmethod
    def _run(name: str, check: Callable[[], None]) -> CheckResult:
        try:
            check()
        except CheckSkipped as exc:
            log.info("%s skipped: %s", name, exc)
            return CheckResult(name, CheckStatus.SKIPPED)
        except CheckFailed as exc:
            return CheckResult(name, CheckStatus.FAILED, exc.errors)
        return CheckResult(name, CheckStatus.PASSED)

    def _create_record(self, rr: RR) -> Record:
        if self.append_record_func is not None:
            return self.append_record_func(rr)
        return RR(name=rr.name, ttl=rr.ttl, type=rr.type, data=rr.data)

    def _all_records(self, report: _Report, what: str) -> list[Record]:
        try:
            return self.provider.get_records(self.zone)
        except Exception as exc:
            raise report.fatal(f"GetRecords ({what}) failed: {exc}") from exc

    def check_list_zones(self) -> None:
        """Check that the provider lists the test zone among named zones."""
        if self.full_provider is None:
            raise CheckSkipped("ZoneLister not supported by this provider")
        report = _Report("ListZones")
        try:
            zones = self.full_provider.list_zones()
        except Exception as exc:
            raise report.fatal(f"ListZones failed: {exc}") from exc

        log.info("Found %d zones", len(zones))
        found = False
        for zone in zones:
            if not zone.name:
                report.error("Zone name should not be empty")
            log.info("Zone: %s", zone.name)
            if zone.name == self.zone:
                found = True
        if not found:
            report.error(f"Test zone {self.zone} not found in ListZones result")
        report.finish()

    def check_get_records(self) -> None:
        """Check that every record returned has a name and a type."""
        report = _Report("GetRecords")
        try:
            records = self.provider.get_records(self.zone)
        except Exception as exc:
            raise report.fatal(f"GetRecords failed: {exc}") from exc

        log.info("Found %d records in zone %s", len(records), self.zone)
        for record in records:
            rr = record.rr()
            if not rr.name:
                report.error("Record name should not be empty")
            if not rr.type:
                report.error("Record type should not be empty")
            log.info("Record: %s %s %s %s", rr.name, rr.ttl, rr.type, rr.data)
        report.finish()

    def check_append_records(self) -> None:
        """Check that appended records are returned and then present."""
        report = _Report("AppendRecords")
        records = [
            self._create_record(rr)
            for rr in (
                RR("test-append", _TTL, "A", "192.0.2.1"),
                RR("test-append-txt", _TTL, "TXT", "test-append-value"),
                RR("test-append-cname", _TTL, "CNAME", "target.example.com."),
            )
        ]
        try:
            appended = self.provider.append_records(self.zone, records)
        except Exception as exc:
            raise report.fatal(f"AppendRecords failed: {exc}") from exc

        if len(appended) != len(records):
            report.error(f"Expected {len(records)} appended records, got {len(appended)}")
        self._verify_exist(report, records)
        self._cleanup(appended)
        report.finish()

    def check_set_records(self) -> None:
        """Check that setting records replaces only matching (name, type) sets."""
        report = _Report("SetRecords")
        preserved = self._create_record(RR("test-set-preserve", _TTL, "TXT", "should-not-change"))
        try:
            preserved_records = self.provider.append_records(self.zone, [preserved])
        except Exception as exc:
            raise report.fatal(f"Failed to create preserved record: {exc}") from exc

        initial = [
            self._create_record(rr)
            for rr in (
                RR("test-set", _TTL, "A", "192.0.2.1"),
                RR("test-set", _TTL, "A", "192.0.2.2"),
                RR("test-set-cname", _TTL, "CNAME", "initial.example.com."),
            )
        ]
        try:
            set_records = self.provider.set_records(self.zone, initial)
        except Exception as exc:
            raise report.fatal(f"SetRecords (initial) failed: {exc}") from exc
        if len(set_records) != len(initial):
            report.error(f"Expected {len(initial)} set records, got {len(set_records)}")
        self._verify_exist(report, [preserved])

        updated = [
            self._create_record(rr)
            for rr in (
                RR("test-set", _TTL_UPDATED, "A", "192.0.2.3"),
                RR("test-set-cname", _TTL_UPDATED, "CNAME", "updated.example.com."),
            )
        ]
        try:
            set_records = self.provider.set_records(self.zone, updated)
        except Exception as exc:
            raise report.fatal(f"SetRecords (update) failed: {exc}") from exc
        if len(set_records) != len(updated):
            report.error(f"Expected {len(updated)} updated records, got {len(set_records)}")
        self._verify_exist(report, updated)

        current = [
            rec.rr()
            for rec in self._all_records(report, "find test-set A records")
            if rec.rr().name == "test-set" and rec.rr().type == "A"
        ]
        for rr in current:
            if rr.data in ("192.0.2.1", "192.0.2.2"):
                report.error(f"Old record data still exists: {rr.data}")
            if rr.data != "192.0.2.3":
                report.error(f"Expected updated record data 192.0.2.3, got {rr.data}")

        self._verify_exist(report, [preserved])
        self._cleanup(set_records)
        self._cleanup(preserved_records)
        report.finish()

    def check_delete_records(self) -> None:
        """Check that created records can be deleted and are then gone."""
        report = _Report("DeleteRecords")
        records = [
            self._create_record(rr)
            for rr in (
                RR("test-delete", _TTL, "A", "192.0.2.1"),
                RR("test-delete-txt", _TTL, "TXT", "test-delete-value"),
                RR("test-delete-cname", _TTL, "CNAME", "target.example.com."),
            )
        ]
        try:
            created = self.provider.append_records(self.zone, records)
        except Exception as exc:
            raise report.fatal(f"AppendRecords (for delete test) failed: {exc}") from exc
        try:
            deleted = self.provider.delete_records(self.zone, created)
        except Exception as exc:
            raise report.fatal(f"DeleteRecords failed: {exc}") from exc

        if len(deleted) != len(created):
            report.error(f"Expected {len(created)} deleted records, got {len(deleted)}")
        self._verify_not_exist(report, deleted)
        report.finish()

    def _verify_exist(self, report: _Report, expected: Sequence[Record]) -> None:
        actual = [rec.rr() for rec in self._all_records(report, "verify exist")]
        for rec in expected:
            want = rec.rr()
            if not any(_records_match(want, have) for have in actual):
                report.error(f"Expected record not found: {want.name} {want.type} {want.data}")
                _log_all(actual)

    def _verify_not_exist(self, report: _Report, unexpected: Sequence[Record]) -> None:
        actual = [rec.rr() for rec in self._all_records(report, "verify not exist")]
        found_any = False
        for rec in unexpected:
            want = rec.rr()
            for have in actual:
                if _records_match(want, have):
                    report.error(f"Unexpected record found: {have.name} {have.type} {have.data}")
                    found_any = True
        if found_any:
            _log_all(actual)

    def _cleanup(self, records: Sequence[Record]) -> None:
        if not records:
            return
        try:
            self.provider.delete_records(self.zone, records)
        except Exception as exc:
            log.warning("cleanup failed: %s", exc)


def _records_match(a: RR, b: RR) -> bool:
    return a.name == b.name and a.type == b.type and a.data == b.data


def _log_all(records: Sequence[RR]) -> None:
    log.info("Records present in zone:")
    for rr in records:
        log.info("  - %s %s %s %s", rr.name, rr.ttl, rr.type, rr.data)


def record_suite(provider: RecordProvider, zone: str) -> ProviderSuite:
    """Create a suite for a provider without zone listing."""
    return ProviderSuite(provider=provider, zone=zone)


def full_suite(provider: FullProvider, zone: str) -> ProviderSuite:
    """Create a suite for a provider that can also list zones."""
    return ProviderSuite(provider=provider, zone=zone, full_provider=provider)