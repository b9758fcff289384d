"""Parsing of opaque :class:`RR` data into the structured record types."""

from __future__ import annotations

import ipaddress

from .rrtypes import CAA, CNAME, MX, NS, RR, SRV, TXT, Address, Record, ServiceBinding
from .svcparams import SvcParams, parse_svc_params

__all__ = [
    "parse_rr",
    "to_address",
    "to_caa",
    "to_cname",
    "to_mx",
    "to_ns",
    "to_service_binding",
    "to_srv",
    "to_txt",
]

_SIMPLE_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "f": 0x0C,
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "v": 0x0B,
    "\\": 0x5C,
}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_OCT_DIGITS = frozenset("01234567")


def _check_type(rr: RR, *expected: str) -> None:
    if rr.type not in expected:
        raise ValueError(f"record type not {' or '.join(expected)}: {rr.type}")


def _parse_uint(text: str, bits: int, what: str) -> int:
    """Parse an unsigned decimal integer that must fit in ``bits`` bits."""
    if not (text and text.isascii() and text.isdigit()):
        raise ValueError(f"invalid {what} {text}: not an unsigned decimal integer")
    value = int(text)
    if value >= 1 << bits:
        raise ValueError(f"invalid {what} {text}: value out of range")
    return value


def _unquote(text: str) -> str | None:
    """Interpret ``text`` as a quoted string literal; None if it is not one."""
    if len(text) < 2 or text[0] != text[-1] or text[0] not in "\"'`":
        return None
    quote, body = text[0], text[1:-1]
    if quote == "`":
        if "`" in body:
            return None
        return body.replace("\r", "")
    if quote == '"' and "\n" in body:
        return None

    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == quote:
            return None
        if ch != "\\":
            out += ch.encode("utf-8", "surrogatepass")
            i += 1
            continue
        i += 1
        if i >= len(body):
            return None
        esc = body[i]
        i += 1
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
        elif esc in "'\"":
            if esc != quote:
                return None
            out.append(ord(esc))
        elif esc in "xuU":
            width = {"x": 2, "u": 4, "U": 8}[esc]
            digits = body[i : i + width]
            if len(digits) != width or not set(digits) <= _HEX_DIGITS:
                return None
            i += width
            value = int(digits, 16)
            if esc == "x":
                out.append(value)
            else:
                if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
                    return None
                out += chr(value).encode("utf-8")
        elif esc in _OCT_DIGITS:
            digits = body[i - 1 : i + 2]
            if len(digits) != 3 or not set(digits) <= _OCT_DIGITS:
                return None
            i += 2
            value = int(digits, 8)
            if value > 255:
                return None
            out.append(value)
        else:
            return None

    result = out.decode("utf-8", "replace")
    if quote == "'" and len(result) != 1:
        return None
    return result


def to_address(rr: RR) -> Address:
    """Convert an A or AAAA RR into an :class:`Address`."""
    _check_type(rr, "A", "AAAA")
    try:
        ip = ipaddress.ip_address(rr.data)
    except ValueError as exc:
        raise ValueError(f"invalid IP address {rr.data!r}: {exc}") from exc
    return Address(name=rr.name, ttl=rr.ttl, ip=ip)


def to_caa(rr: RR) -> CAA:
    """Convert a CAA RR of the form ``flags tag "value"`` into a :class:`CAA`."""
    _check_type(rr, "CAA")
    fields = rr.data.split(" ", 2)
    if len(fields) != 3:
        raise ValueError(
            "malformed CAA value; expected 3 fields in the form 'flags tag \"value\"'"
        )
    flags = _parse_uint(fields[0], 8, "flags")
    value = _unquote(fields[2])
    if value is None:
        value = fields[2]
    return CAA(name=rr.name, ttl=rr.ttl, flags=flags, tag=fields[1], value=value)


def to_cname(rr: RR) -> CNAME:
    """Convert a CNAME RR into a :class:`CNAME`."""
    _check_type(rr, "CNAME")
    return CNAME(name=rr.name, ttl=rr.ttl, target=rr.data)


def to_mx(rr: RR) -> MX:
    """Convert an MX RR of the form ``preference target`` into an :class:`MX`."""
    _check_type(rr, "MX")
    fields = rr.data.split()
    if len(fields) != 2:
        raise ValueError(
            "malformed MX value; expected 2 fields in the form 'preference target'"
        )
    preference = _parse_uint(fields[0], 16, "priority")
    return MX(name=rr.name, ttl=rr.ttl, preference=preference, target=fields[1])


def to_ns(rr: RR) -> NS:
    """Convert an NS RR into an :class:`NS`."""
    _check_type(rr, "NS")
    return NS(name=rr.name, ttl=rr.ttl, target=rr.data)


def to_srv(rr: RR) -> SRV:
    """Convert an SRV RR named ``_service._proto[.name]`` into an :class:`SRV`."""
    _check_type(rr, "SRV")
    fields = rr.data.split()
    if len(fields) != 4:
        raise ValueError(
            "malformed SRV value; expected 4 fields in the form "
            "'priority weight port target'"
        )
    priority = _parse_uint(fields[0], 16, "priority")
    weight = _parse_uint(fields[1], 16, "weight")
    port = _parse_uint(fields[2], 16, "port")

    parts = rr.name.split(".", 2)
    if len(parts) < 2:
        raise ValueError(
            f"name {rr.name} does not contain enough fields; expected format: "
            "'_service._proto.name' or '_service._proto'"
        )
    name = parts[2] if len(parts) == 3 else "@"

    return SRV(
        service=parts[0].removeprefix("_"),
        transport=parts[1].removeprefix("_"),
        name=name,
        ttl=rr.ttl,
        priority=priority,
        weight=weight,
        port=port,
        target=fields[3],
    )


def to_service_binding(rr: RR) -> ServiceBinding:
    """Convert an SVCB or HTTPS RR into a :class:`ServiceBinding`."""
    rec_type = rr.type
    if rec_type not in ("HTTPS", "SVCB"):
        raise ValueError(f"record type not SVCB or HTTPS: {rec_type}")

    data_parts = rr.data.split(" ", 2)
    if len(data_parts) < 2:
        raise ValueError(
            "malformed HTTPS value; expected at least 2 fields in the form "
            "'priority target [SvcParams]'"
        )
    priority = _parse_uint(data_parts[0].strip(), 16, "priority")
    target = data_parts[1]

    params = SvcParams()
    if len(data_parts) > 2:
        try:
            params = parse_svc_params(data_parts[2])
        except ValueError as exc:
            raise ValueError(f"invalid SvcParams: {exc}") from exc

    scheme = ""
    port = 0
    name_parts = rr.name.split(".", 2)
    # A name made only of underscore-prefixed labels refers to the zone root.
    if len(name_parts) == 1 and name_parts[0].startswith("_"):
        name_parts.append("@")
    elif len(name_parts) == 2 and name_parts[1].startswith("_"):
        name_parts.append("@")

    if (
        len(name_parts) > 1
        and name_parts[0].startswith("_")
        and name_parts[1].startswith("_")
    ):
        port_text = name_parts[0].removeprefix("_")
        scheme = name_parts[1].removeprefix("_")
        port = _parse_uint(port_text, 16, "port")
        name_parts = name_parts[2:]
    elif name_parts[0].startswith("_"):
        scheme = name_parts[0].removeprefix("_")
        name_parts = name_parts[1:]

    if not scheme and rec_type == "HTTPS":
        scheme = "https"
    elif port > 0 and scheme == "https" and rec_type == "HTTPS":
        pass
    elif scheme and rec_type == "SVCB":
        pass
    else:
        raise ValueError(
            f"invalid name {rr.name!r}; expected format: "
            "'_port._proto.name' or '_proto.name'"
        )

    return ServiceBinding(
        scheme=scheme,
        url_scheme_port=port,
        name=".".join(name_parts),
        ttl=rr.ttl,
        priority=priority,
        target=target,
        params=params,
    )


def to_txt(rr: RR) -> TXT:
    """Convert a TXT RR into a :class:`TXT`."""
    _check_type(rr, "TXT")
    return TXT(name=rr.name, ttl=rr.ttl, text=rr.data)


_PARSERS = {
    "A": to_address,
    "AAAA": to_address,
    "CAA": to_caa,
    "CNAME": to_cname,
    "HTTPS": to_service_binding,
    "SVCB": to_service_binding,
    "MX": to_mx,
    "NS": to_ns,
    "SRV": to_srv,
    "TXT": to_txt,
}


def parse_rr(rr: RR) -> Record:
    """Return the structured record for a known type, else ``rr`` itself.

    Raises ValueError when the data is malformed for its type.
    """
    parser = _PARSERS.get(rr.type)
    if parser is None:
        return rr
    return parser(rr)