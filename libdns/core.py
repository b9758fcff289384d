"""Provider interfaces, zones and helpers for relative and absolute names.

Records are described relative to their zone: a record called ``sub`` in
zone ``example.com.`` stands for ``sub.example.com.``, and ``@`` stands for
the zone's root. Providers take any record as input and return the concrete
record types of this package.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .rrtypes import Record

__all__ = [
    "AtomicError",
    "RecordAppender",
    "RecordDeleter",
    "RecordGetter",
    "RecordSetter",
    "Zone",
    "ZoneLister",
    "absolute_name",
    "relative_name",
]


@dataclass(frozen=True)
class Zone:
    """A DNS zone, identified by its name."""

    name: str


class AtomicError(Exception):
    """Raised when an operation failed but left the zone unchanged."""


@runtime_checkable
class RecordGetter(Protocol):
    """Something that can read all records of a zone."""

    def get_records(self, zone: str) -> list[Record]:
        """Return all the records in the zone."""


@runtime_checkable
class RecordAppender(Protocol):
    """Something that can add records to a zone without touching others."""

    def append_records(self, zone: str, recs: Sequence[Record]) -> list[Record]:
        """Create the given records in the zone and return those created."""


@runtime_checkable
class RecordSetter(Protocol):
    """Something that can replace the record sets of a zone.

    For every (name, type) pair in the input, the records given become the
    only records with that pair in the zone; other records are untouched.
    """

    def set_records(self, zone: str, recs: Sequence[Record]) -> list[Record]:
        """Make the given records the only members of their sets; return them."""


@runtime_checkable
class RecordDeleter(Protocol):
    """Something that can delete records from a zone.

    A record to delete matches on name; an empty type, a zero TTL or empty
    data match any value of that field.
    """

    def delete_records(self, zone: str, recs: Sequence[Record]) -> list[Record]:
        """Delete matching records and return those actually deleted."""


@runtime_checkable
class ZoneLister(Protocol):
    """Something that can list the zones it serves."""

    def list_zones(self) -> list[Zone]:
        """Return the available zones."""


def relative_name(fqdn: str, zone: str) -> str:
    """Make ``fqdn`` relative to ``zone``.

    Trailing dots on either argument are ignored. If ``fqdn`` names the zone
    itself (and both are non-empty), ``@`` is returned. If ``fqdn`` cannot be
    expressed relative to ``zone`` it is returned without its trailing dot.
    """
    rel = fqdn.removesuffix(".").removesuffix(zone.removesuffix(".")).removesuffix(".")
    if not rel and fqdn and zone:
        return "@"
    return rel


def absolute_name(name: str, zone: str) -> str:
    """Make ``name`` a fully-qualified name within ``zone``.

    ``@`` and the empty string both stand for the zone itself. A name that
    already ends with a dot is returned as it is, so the function is
    idempotent.
    """
    if not zone:
        return name.strip(".")
    if name in ("", "@"):
        return zone
    if name.endswith("."):
        return name
    return f"{name}.{zone}"