"""Machine-readable description of declared fields.

The schema is derived from declarations alone and never looks at input
values, so it is safe to publish for documentation generators and
config-contract tooling.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field as PydanticField

from envgate.fields import resolve_kind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from envgate.fields import Field


class FieldSchema(BaseModel):
    """Serializable descriptor for one declared field."""

    model_config = ConfigDict(frozen=True)

    key: str
    kind: str
    required: bool = False
    default: str = ""
    description: str = ""
    #: Always a list; empty when the field is unrestricted.
    allowed_values: list[str] = PydanticField(default_factory=list)

    def to_json_dict(self) -> dict[str, object]:
        """Dump for JSON, omitting an empty default and description."""
        return self.model_dump(
            exclude={k for k in ("default", "description") if not getattr(self, k)}
        )


def build_schema(fields: Iterable[Field]) -> list[FieldSchema]:
    """Return one descriptor per declaration, in declaration order."""
    return [
        FieldSchema(
            key=f.key,
            kind=str(resolve_kind(f.kind)),
            required=f.required,
            default=f.default,
            description=f.description,
            allowed_values=list(f.allowed_values),
        )
        for f in fields
    ]


def dump_schema_json(schema: Iterable[FieldSchema], *, indent: int | None = None) -> str:
    """Serialize descriptors as a JSON array."""
    return json.dumps(
        [s.to_json_dict() for s in schema], indent=indent, ensure_ascii=False
    )
