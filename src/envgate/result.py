"""Result: the typed output of a successful validation pass."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from envgate.errors import UndeclaredKeyError, WrongKindError
from envgate.fields import Kind

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from datetime import timedelta

    from envgate.coerce import PyValue, Value

# Key fragments that mark a variable as sensitive in redacted views.
SENSITIVE_KEYS = {
    "api_key",
    "apikey",
    "token",
    "secret",
    "password",
    "passwd",
    "access_key",
    "client_secret",
    "private_key",
    "credential",
}

REDACTED = "[REDACTED]"


def is_sensitive_key(name: str) -> bool:
    """Return True if a variable name is considered sensitive for logging."""
    lower = name.lower()
    return any(token in lower for token in SENSITIVE_KEYS)


class Result:
    """Coerced values keyed by declared variable name.

    Typed accessors raise ``UndeclaredKeyError`` for keys that were never
    declared and ``WrongKindError`` when the field has a different kind.
    Both indicate a bug in the caller, not bad input.

    Example:
        result = validator.validate()
        port = result.integer("PORT")
        timeout = result.duration("TIMEOUT")
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Value]) -> None:
        self._values: Mapping[str, Value] = MappingProxyType(dict(values))

    def _get(self, key: str, *kinds: Kind) -> PyValue:
        try:
            entry = self._values[key]
        except KeyError:
            raise UndeclaredKeyError(
                f"key {key!r} was not declared in the validator"
            ) from None
        if entry.kind not in kinds:
            wanted = " or ".join(k.value for k in kinds)
            raise WrongKindError(
                f"key {key!r} is a {entry.kind.value} field, not {wanted}"
            )
        return entry.value

    def string(self, key: str) -> str:
        """Return a string or url field."""
        return self._get(key, Kind.STRING, Kind.URL)  # type: ignore[return-value]

    def integer(self, key: str) -> int:
        return self._get(key, Kind.INTEGER)  # type: ignore[return-value]

    def float(self, key: str) -> float:
        return self._get(key, Kind.FLOAT)  # type: ignore[return-value]

    def boolean(self, key: str) -> bool:
        return self._get(key, Kind.BOOLEAN)  # type: ignore[return-value]

    def url(self, key: str) -> str:
        """Return a url field as the trimmed original string."""
        return self._get(key, Kind.URL)  # type: ignore[return-value]

    def duration(self, key: str) -> timedelta:
        return self._get(key, Kind.DURATION)  # type: ignore[return-value]

    def raw(self, key: str) -> tuple[PyValue | None, bool]:
        """Return ``(value, present)`` without declaration or kind checks."""
        entry = self._values.get(key)
        if entry is None:
            return None, False
        return entry.value, True

    def kind_of(self, key: str) -> Kind | None:
        """Return the kind stored for *key*, or None when it is absent."""
        entry = self._values.get(key)
        return entry.kind if entry is not None else None

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def as_dict(self) -> dict[str, PyValue]:
        """Return a plain ``{key: value}`` copy."""
        return {k: v.value for k, v in self._values.items()}

    def to_redacted_dict(self) -> dict[str, Any]:
        """Return ``as_dict()`` with sensitive values replaced."""
        return {
            k: REDACTED if is_sensitive_key(k) else v.value
            for k, v in self._values.items()
        }

    def __repr__(self) -> str:
        return f"Result({self.to_redacted_dict()!r})"

    __str__ = __repr__
