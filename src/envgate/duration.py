"""Compound duration tokens such as ``5s``, ``1m30s`` or ``-1.5h``."""

from __future__ import annotations

from datetime import timedelta
import re

_UNITS_NS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC Greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_NUMBER = r"(?:\d+\.?\d*|\.\d+)"
_UNIT = "|".join(sorted(map(re.escape, _UNITS_NS), key=len, reverse=True))
_TOKEN_RE = re.compile(rf"[+-]?(?:{_NUMBER}(?:{_UNIT}))+")
_COMPONENT_RE = re.compile(rf"(\d*)(?:\.(\d*))?({_UNIT})")

# Durations are bounded by a signed 64-bit nanosecond count.
_MAX_NS = (1 << 63) - 1
_MAX_WHOLE_DIGITS = len(str(_MAX_NS))
# Fraction digits past this cannot change a nanosecond count, even for hours.
_MAX_FRAC_DIGITS = 18


def parse_duration(text: str) -> timedelta:
    """Parse a duration token into a ``timedelta``.

    A token is an optional sign followed by one or more ``<number><unit>``
    components; ``0`` is also accepted on its own. Sub-microsecond precision
    is truncated toward zero.

    Raises:
        ValueError: If the token is malformed or out of range.
    """
    if text in {"0", "+0", "-0"}:
        return timedelta(0)
    if not _TOKEN_RE.fullmatch(text):
        raise ValueError(f"invalid duration {text!r}")

    negative = text.startswith("-")
    body = text.lstrip("+-")
    total_ns = 0
    for whole, frac, unit in _COMPONENT_RE.findall(body):
        scale = _UNITS_NS[unit]
        whole = whole.lstrip("0")
        if len(whole) > _MAX_WHOLE_DIGITS:
            raise ValueError(f"duration {text!r} is out of range")
        total_ns += int(whole or "0") * scale
        frac = frac[:_MAX_FRAC_DIGITS]
        if frac:
            total_ns += int(frac) * scale // 10 ** len(frac)

    limit = _MAX_NS + 1 if negative else _MAX_NS
    if total_ns > limit:
        raise ValueError(f"duration {text!r} is out of range")

    micros = total_ns // 1_000
    return timedelta(microseconds=-micros if negative else micros)
