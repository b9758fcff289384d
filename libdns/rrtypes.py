"""Record types: the opaque RR and the structured per-type records.

Every record can reduce itself to an :class:`RR` through its ``rr()`` method.
The ``provider_data`` field of the structured types is never carried over to
the :class:`RR`, so that RRs stay portable between providers and comparable.
"""

from __future__ import annotations

import ipaddress
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Union

from .svcparams import SvcParams

__all__ = [
    "Address",
    "CAA",
    "CNAME",
    "MX",
    "NS",
    "RR",
    "Record",
    "SRV",
    "ServiceBinding",
    "TXT",
]

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_HTTPS_SCHEMES = frozenset({"https", "http", "wss", "ws"})
_DEFAULT_PORTS = frozenset({443, 80})

_CONTROL_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _quote(text: str) -> str:
    """Wrap ``text`` in double quotes, escaping as a quoted string literal."""
    parts = ['"']
    for ch in text:
        code = ord(ch)
        if ch in '"\\':
            parts.append("\\" + ch)
        elif ch in _CONTROL_ESCAPES:
            parts.append(_CONTROL_ESCAPES[ch])
        elif ch.isprintable():
            parts.append(ch)
        elif code < 0x20 or code == 0x7F:
            parts.append(f"\\x{code:02x}")
        elif code < 0x10000:
            parts.append(f"\\u{code:04x}")
        else:
            parts.append(f"\\U{code:08x}")
    parts.append('"')
    return "".join(parts)


class Record(ABC):
    """Anything that can reduce itself to an :class:`RR`."""

    @abstractmethod
    def rr(self) -> RR:
        """Return the generic resource record for this record."""


@dataclass(frozen=True)
class RR(Record):
    """A resource record with opaque, unescaped zone-file data.

    ``name`` is relative to the zone, with ``@`` for the zone's root.
    """

    name: str = ""
    ttl: timedelta = timedelta(0)
    type: str = ""
    data: str = ""

    def rr(self) -> RR:
        """Return the record itself."""
        return self

    def parse(self) -> Record:
        """Return the structured record for a known type, else the RR itself.

        Raises ValueError when the data is malformed for its type.
        """
        from .parsing import parse_rr

        return parse_rr(self)


@dataclass(frozen=True)
class Address(Record):
    """An A or AAAA record, depending on the IP version."""

    name: str = ""
    ttl: timedelta = timedelta(0)
    ip: IPAddress | None = None
    provider_data: Any = field(default=None, compare=False, repr=False)

    def rr(self) -> RR:
        rec_type = "AAAA" if isinstance(self.ip, ipaddress.IPv6Address) else "A"
        data = "" if self.ip is None else str(self.ip)
        return RR(name=self.name, ttl=self.ttl, type=rec_type, data=data)


@dataclass(frozen=True)
class CAA(Record):
    """A CAA record naming the certificate authorities allowed for a domain."""

    name: str = ""
    ttl: timedelta = timedelta(0)
    flags: int = 0
    tag: str = ""
    value: str = ""
    provider_data: Any = field(default=None, compare=False, repr=False)

    def rr(self) -> RR:
        if self.flags == 0 and not self.tag and not self.value:
            data = ""
        else:
            data = f"{self.flags} {self.tag} {_quote(self.value)}"
        return RR(name=self.name, ttl=self.ttl, type="CAA", data=data)


@dataclass(frozen=True)
class CNAME(Record):
    """A CNAME record delegating a name to another."""

    name: str = ""
    ttl: timedelta = timedelta(0)
    target: str = ""
    provider_data: Any = field(default=None, compare=False, repr=False)

    def rr(self) -> RR:
        return RR(name=self.name, ttl=self.ttl, type="CNAME", data=self.target)


@dataclass(frozen=True)
class MX(Record):
    """An MX record naming a mail server; lower preference is preferred."""

    name: str = ""
    ttl: timedelta = timedelta(0)
    preference: int = 0
    target: str = ""
    provider_data: Any = field(default=None, compare=False, repr=False)

    def rr(self) -> RR:
        if self.preference == 0 and not self.target:
            data = ""
        else:
            data = f"{self.preference} {self.target}"
        return RR(name=self.name, ttl=self.ttl, type="MX", data=data)


@dataclass(frozen=True)
class NS(Record):
    """An NS record naming an authoritative nameserver."""

    name: str = ""
    ttl: timedelta = timedelta(0)
    target: str = ""
    provider_data: Any = field(default=None, compare=False, repr=False)

    def rr(self) -> RR:
        return RR(name=self.name, ttl=self.ttl, type="NS", data=self.target)


@dataclass(frozen=True)
class SRV(Record):
    """An SRV record: ``_service._transport.name priority weight port target``."""

    service: str = ""
    transport: str = ""
    name: str = ""
    ttl: timedelta = timedelta(0)
    priority: int = 0
    weight: int = 0
    port: int = 0
    target: str = ""
    provider_data: Any = field(default=None, compare=False, repr=False)

    def rr(self) -> RR:
        if not self.service and not self.transport:
            # Without service and transport the name is taken as complete.
            name = self.name
        else:
            name = f"_{self.service}._{self.transport}.{self.name}"
        name = name.removesuffix(".@")

        if self.priority == 0 and self.weight == 0 and self.port == 0 and not self.target:
            data = ""
        else:
            data = f"{self.priority} {self.weight} {self.port} {self.target}"
        return RR(name=name, ttl=self.ttl, type="SRV", data=data)


@dataclass(frozen=True)
class ServiceBinding(Record):
    """An SVCB or HTTPS record.

    Schemes ``https``, ``http``, ``wss`` and ``ws`` produce HTTPS records;
    any other scheme produces an SVCB record. ``url_scheme_port`` is the port
    written explicitly in a URL, not the port the client connects to. A
    priority of 0 is alias mode, in which the parameters are dropped.
    """

    scheme: str = ""
    url_scheme_port: int = 0
    name: str = ""
    ttl: timedelta = timedelta(0)
    priority: int = 0
    target: str = ""
    params: SvcParams = field(default_factory=SvcParams)
    provider_data: Any = field(default=None, compare=False, repr=False)

    def rr(self) -> RR:
        port = self.url_scheme_port
        if self.scheme in _HTTPS_SCHEMES:
            rec_type = "HTTPS"
            name = self.name
            if port in _DEFAULT_PORTS:
                port = 0
        else:
            rec_type = "SVCB"
            name = f"_{self.scheme}.{self.name}"

        if port:
            name = f"_{port}.{name}"

        if self.priority == 0 and self.params:
            params = ""
        else:
            params = str(SvcParams(self.params or {}))

        name = name.removesuffix(".@")

        if self.priority == 0 and not self.target and not params:
            data = ""
        else:
            data = f"{self.priority} {self.target} {params}"
        return RR(name=name, ttl=self.ttl, type=rec_type, data=data)


@dataclass(frozen=True)
class TXT(Record):
    """A TXT record holding one arbitrary-length, unescaped, unquoted text."""

    name: str = ""
    ttl: timedelta = timedelta(0)
    text: str = ""
    provider_data: Any = field(default=None, compare=False, repr=False)

    def rr(self) -> RR:
        return RR(name=self.name, ttl=self.ttl, type="TXT", data=self.text)