"""An in-memory provider implementing every provider interface, for testing."""

from __future__ import annotations

import threading
from collections.abc import Sequence

from .core import Zone
from .rrtypes import RR, Record

__all__ = ["DummyProvider", "ZoneNotFoundError"]

_DEFAULT_ZONE = "example.com."


class ZoneNotFoundError(LookupError):
    """Raised when an operation names a zone the provider does not serve."""

    def __init__(self, zone: str) -> None:
        super().__init__(f"zone {zone} not found")
        self.zone = zone


class DummyProvider:
    """Keeps records per zone in memory.

    With no zones given, the provider serves ``example.com.``.
    """

    def __init__(self, *args: str) -> None:
        zones = list(args) or [_DEFAULT_ZONE]
        self._available_zones = zones
        self._zones: dict[str, list[Record]] = {zone: [] for zone in zones}
        self._lock = threading.Lock()

    def _records(self, zone: str) -> list[Record]:
        try:
            return self._zones[zone]
        except KeyError:
            raise ZoneNotFoundError(zone) from None

    def list_zones(self) -> list[Zone]:
        """Return the zones this provider was created with."""
        return [Zone(name=name) for name in self._available_zones]

    def get_records(self, zone: str) -> list[Record]:
        """Return a copy of all records in the zone."""
        with self._lock:
            return list(self._records(zone))

    def append_records(self, zone: str, recs: Sequence[Record]) -> list[Record]:
        """Add the records to the zone and return them as concrete types."""
        with self._lock:
            records = self._records(zone)
            appended = [_to_concrete(rec) for rec in recs]
            records.extend(appended)
            return appended

    def set_records(self, zone: str, recs: Sequence[Record]) -> list[Record]:
        """Replace every (name, type) set named in the input with the input."""
        with self._lock:
            existing = self._records(zone)
            replaced = {(rr.name, rr.type) for rr in (rec.rr() for rec in recs)}
            kept = [
                rec for rec in existing if (rec.rr().name, rec.rr().type) not in replaced
            ]
            set_recs = [_to_concrete(rec) for rec in recs]
            self._zones[zone] = kept + set_recs
            return set_recs

    def delete_records(self, zone: str, recs: Sequence[Record]) -> list[Record]:
        """Delete records matching any input record and return those deleted."""
        with self._lock:
            existing = self._records(zone)
            remaining: list[Record] = []
            deleted: list[Record] = []
            for rec in existing:
                if any(_records_match(rec, target) for target in recs):
                    deleted.append(rec)
                else:
                    remaining.append(rec)
            self._zones[zone] = remaining
            return deleted


def _to_concrete(rec: Record) -> Record:
    """Parse plain RRs into their structured types; leave others alone."""
    if not isinstance(rec, RR):
        return rec
    try:
        return rec.parse()
    except ValueError:
        return rec


def _records_match(existing: Record, target: Record) -> bool:
    have = existing.rr()
    want = target.rr()
    return (
        have.name == want.name
        and (not want.type or have.type == want.type)
        and (not want.ttl or have.ttl == want.ttl)
        and (not want.data or have.data == want.data)
    )