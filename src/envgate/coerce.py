"""Per-kind coercion of raw strings into tagged values."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
import json
import math
import re
from urllib.parse import urlsplit

from envgate.duration import parse_duration
from envgate.fields import Kind

PyValue = str | int | float | bool | timedelta

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(1 << 63)
_INT_MAX = (1 << 63) - 1
# Longest in-range magnitude, without sign or leading zeros.
_INT_MAX_DIGITS = len(str(_INT_MAX))

_TRUE_TOKENS = frozenset({"true", "1", "yes"})
_FALSE_TOKENS = frozenset({"false", "0", "no"})
_INF_TOKENS = frozenset({"inf", "+inf", "-inf", "infinity", "+infinity", "-infinity"})


@dataclass(frozen=True, slots=True)
class Value:
    """A coerced value tagged with the kind that produced it."""

    kind: Kind
    value: PyValue


class CoercionError(ValueError):
    """Raised when a raw string does not fit its declared kind."""


def coerce(kind: Kind | str, raw: str) -> Value:
    """Convert *raw* into a ``Value`` of the given kind.

    Raises:
        CoercionError: With the per-field reason as its message.
    """
    match kind:
        case Kind.STRING:
            return Value(Kind.STRING, raw)
        case Kind.INTEGER:
            return Value(Kind.INTEGER, _to_int(raw))
        case Kind.FLOAT:
            return Value(Kind.FLOAT, _to_float(raw))
        case Kind.BOOLEAN:
            return Value(Kind.BOOLEAN, _to_bool(raw))
        case Kind.URL:
            return Value(Kind.URL, _to_url(raw))
        case Kind.DURATION:
            return Value(Kind.DURATION, _to_duration(raw))
        case _:
            raise CoercionError(f"unknown kind {quote(str(kind))}")


def quote(raw: str) -> str:
    return json.dumps(raw, ensure_ascii=False)


def _to_int(raw: str) -> int:
    text = raw.strip()
    if (
        _INT_RE.fullmatch(text)
        and len(text.lstrip("+-").lstrip("0")) <= _INT_MAX_DIGITS
    ):
        n = int(text)
        if _INT_MIN <= n <= _INT_MAX:
            return n
    raise CoercionError(f"cannot parse {quote(raw)} as an integer")


def _to_float(raw: str) -> float:
    text = raw.strip()
    if text and text.isascii() and "_" not in text:
        try:
            f = float(text)
        except ValueError:
            pass
        else:
            # Finite decimals that overflow are errors, explicit infinities are not.
            if not math.isinf(f) or text.lower() in _INF_TOKENS:
                return f
    raise CoercionError(f"cannot parse {quote(raw)} as a float")


def _to_bool(raw: str) -> bool:
    token = raw.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise CoercionError(
        f"cannot parse {quote(raw)} as a boolean; "
        "accepted values are true, false, 1, 0, yes, no"
    )


def _to_url(raw: str) -> str:
    text = raw.strip()
    if text and not any(c.isspace() for c in text):
        try:
            parts = urlsplit(text)
        except ValueError:
            parts = None
        if parts is not None and parts.scheme and _valid_host_port(parts.netloc):
            return text
    raise CoercionError(
        f"cannot parse {quote(raw)} as an absolute URL with scheme and host"
    )


def _valid_host_port(netloc: str) -> bool:
    """Require a non-empty host and, when present, an all-digit port."""
    hostport = netloc.rpartition("@")[2]
    if not hostport:
        return False
    if hostport.startswith("[") and "]" in hostport:
        tail = hostport[hostport.index("]") + 1 :]
        if tail and not tail.startswith(":"):
            return False
        port = tail[1:]
    else:
        port = hostport.rpartition(":")[2] if ":" in hostport else ""
    return port == "" or (port.isascii() and port.isdigit())


def _to_duration(raw: str) -> timedelta:
    try:
        return parse_duration(raw.strip())
    except ValueError:
        raise CoercionError(
            f"cannot parse {quote(raw)} as a duration; "
            "use duration syntax such as 5s, 1m30s, or 2h"
        ) from None
