"""Field declarations: the static description of expected variables."""

from __future__ import annotations

from collections.abc import Iterable  # noqa: TC003 - used at runtime in dataclass
from dataclasses import dataclass
from enum import Enum

from envgate.errors import DeclarationError


class Kind(str, Enum):
    """Expected data type of a variable."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    URL = "url"
    DURATION = "duration"

    def __str__(self) -> str:
        return self.value


def resolve_kind(kind: Kind | str | None) -> Kind | str:
    """Return the effective kind for a declaration.

    Empty kinds mean string. Unrecognized strings are returned unchanged so
    the engine can report them per field instead of failing construction.
    """
    if not kind:
        return Kind.STRING
    if isinstance(kind, Kind):
        return kind
    try:
        return Kind(kind)
    except ValueError:
        return kind


@dataclass(frozen=True, slots=True)
class Field:
    """A single expected variable.

    Example:
        Field("PORT", Kind.INTEGER, default="8080", description="HTTP listen port")
    """

    #: Exact variable name, e.g. ``DATABASE_URL``.
    key: str
    #: Defaults to string when empty.
    kind: Kind | str = Kind.STRING
    #: Validation fails when the value is missing and no default is set.
    required: bool = False
    #: Used when the value is absent or empty; written in the kind's syntax.
    default: str = ""
    #: Free text for schema output only.
    description: str = ""
    #: Case-sensitive whitelist of raw values; empty means unrestricted.
    allowed_values: Iterable[str] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key:
            raise DeclarationError(
                f"Field key must be a non-empty string, got {self.key!r}",
                hint='Declare fields like Field("PORT", Kind.INTEGER).',
            )
        if self.default is None:
            object.__setattr__(self, "default", "")
        if not isinstance(self.default, str):
            raise DeclarationError(
                f"default for {self.key} must be a string, "
                f"got {type(self.default).__name__}",
                hint='Write defaults in the kind\'s syntax, e.g. default="8080".',
            )
        if isinstance(self.allowed_values, str):
            raise DeclarationError(
                f"allowed_values for {self.key} must be a collection of strings, "
                f"got the string {self.allowed_values!r}",
                hint=f'Wrap single values, e.g. allowed_values=("{self.allowed_values}",).',
            )
        object.__setattr__(self, "allowed_values", tuple(self.allowed_values or ()))

    @property
    def effective_kind(self) -> Kind | str:
        return resolve_kind(self.kind)
