"""Exception hierarchy for envgate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class EnvGateError(Exception):
    """Base exception for all envgate errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class DeclarationError(EnvGateError):
    """A field declaration is malformed."""


@dataclass(frozen=True, slots=True)
class FieldError:
    """A single field that failed validation."""

    key: str
    reason: str

    def __str__(self) -> str:
        return f'field "{self.key}": {self.reason}'


class ValidationErrors(EnvGateError):
    """One or more declared fields failed validation.

    Raised once per evaluation pass and carries every failure, in declaration
    order. Callers usually let it abort startup; ``errors`` is there for
    callers that want to inspect individual entries.
    """

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors: tuple[FieldError, ...] = tuple(errors)
        keys = ", ".join(e.key for e in self.errors)
        super().__init__(
            _render(self.errors),
            hint=f"Set or correct: {keys}." if keys else None,
        )

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[FieldError]:
        return iter(self.errors)

    def keys(self) -> list[str]:
        """Return the failing keys in declaration order."""
        return [e.key for e in self.errors]


def _render(errors: tuple[FieldError, ...]) -> str:
    if not errors:
        return ""
    lines = [f"{len(errors)} environment variable validation error(s):"]
    lines.extend(f"  - {e}" for e in errors)
    return "\n".join(lines)


class ValidationCancelledError(EnvGateError):
    """The evaluation pass was cancelled before it finished."""


class UsageError(EnvGateError):
    """The caller misused a ``Result`` (a bug, not bad input)."""


class UndeclaredKeyError(UsageError, KeyError):
    """A key that was never declared was requested from a ``Result``."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0]) if self.args else ""


class WrongKindError(UsageError, TypeError):
    """A typed accessor was used on a field of a different kind."""
