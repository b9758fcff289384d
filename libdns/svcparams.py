"""Service binding parameters (SvcParams) in zone presentation format."""

from __future__ import annotations

__all__ = ["SvcParams", "parse_svc_params"]

_MAX_INPUT = 4096
_WHITESPACE = " \t\n\r"
_SPECIAL = ";()"


class SvcParams(dict):
    """Mapping of SvcParamKey to its list of values.

    A key with an empty list is a flag with no value.
    """

    def __str__(self) -> str:
        """Serialize into zone presentation format."""
        return " ".join(self._format_pair(key, vals) for key, vals in self.items())

    @staticmethod
    def _format_pair(key: str, vals: list[str]) -> str:
        has_val = any(vals)
        needs_quotes = any('"' in val or " " in val for val in vals)
        body = ",".join(val.replace('"', '\\"').replace(",", "\\,") for val in vals)
        if needs_quotes:
            body = f'"{body}"'
        return f"{key}={body}" if has_val else f"{key}{body}"


def parse_svc_params(text: str) -> SvcParams:
    """Parse a presentation-format SvcParams string.

    Raises ValueError when the input is malformed.
    """
    text = text.strip()
    if len(text.encode("utf-8")) > _MAX_INPUT:
        raise ValueError(f"input too long: {len(text.encode('utf-8'))}")
    params = SvcParams()
    if not text:
        return params

    # A trailing space makes the end of the last pair easy to find.
    text += " "
    size = len(text)
    cursor = 0
    while cursor < size:
        key, raw, cursor = _scan_pair(text, cursor, params)
        if raw:
            params[key] = _decode_value(raw).split(",")
        cursor += 1
    return params


def _scan_pair(text: str, cursor: int, params: SvcParams) -> tuple[str, str, int]:
    """Scan one key or key=value pair starting at ``cursor``.

    Flags are stored in ``params`` directly. Returns the key, the raw value
    and the new cursor.
    """
    size = len(text)
    i = cursor
    while i < size:
        ch = text[i]
        if ch == "=":
            key = text[cursor:i].strip().lower()
            i += 1
            cursor = i
            quoted = text[cursor] == '"'
            if quoted:
                i += 1
                cursor = i
            escaped = False
            for j in range(cursor, size):
                c = text[j]
                if c == '"':
                    if not quoted:
                        raise ValueError(f"illegal DQUOTE at position {j}")
                    if not escaped:
                        return key, text[cursor:j], j + 1
                elif c == "\\":
                    escaped = True
                elif c in _WHITESPACE:
                    if not quoted:
                        return key, text[cursor:j], j
                else:
                    escaped = False
        elif ch in _WHITESPACE:
            key = text[cursor:i]
            params[key] = []
            return key, "", i
        i += 1
    return "", "", cursor


def _decode_value(raw: str) -> str:
    """Resolve escape sequences in a raw value and reject special characters."""
    out: list[str] = []
    escape = 0  # index just after a backslash; 0 means no escape pending
    i = 0
    while i < len(raw):
        ch = raw[i]
        if escape > 0 and "0" <= ch <= "9":
            i += 2
            if i >= len(raw):
                raise ValueError(
                    f"value ends with incomplete escape sequence: {raw[escape:]}"
                )
            digits = raw[escape : i + 1]
            if not all("0" <= d <= "9" for d in digits):
                raise ValueError(f"invalid decimal octet in escape sequence: {digits}")
            octet = int(digits)
            if octet > 255:
                raise ValueError(
                    f"invalid decimal octet in escape sequence: {raw[escape:i]} ({octet})"
                )
            out.append(chr(octet))
            escape = 0
            i += 1
            continue
        if ch in _SPECIAL:
            raise ValueError(
                f"illegal character in value {raw!r} at position {i}: {ch}"
            )
        if ch == "\\":
            escape = i + 1
        else:
            out.append(ch)
            escape = 0
        i += 1
    return "".join(out)