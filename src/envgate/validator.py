"""Validator: evaluates declared fields against a string map."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Protocol

from dotenv import dotenv_values

from envgate.coerce import CoercionError, coerce, quote
from envgate.errors import FieldError, ValidationCancelledError, ValidationErrors
from envgate.result import Result
from envgate.schema import build_schema, dump_schema_json

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

    from envgate.coerce import Value
    from envgate.fields import Field
    from envgate.schema import FieldSchema

logger = logging.getLogger(__name__)

MISSING_REASON = "required variable is missing or empty"


class CancelSignal(Protocol):
    """Anything with ``is_set()``: ``threading.Event``, ``asyncio.Event``, ..."""

    def is_set(self) -> bool: ...


class Validator:
    """A fixed set of field declarations.

    Declarations are read-only after construction, so one validator can be
    shared by any number of concurrent passes over different inputs.

    Example:
        validator = Validator(
            Field("PORT", Kind.INTEGER, default="8080", description="HTTP listen port"),
            Field("DATABASE_URL", Kind.URL, required=True),
        )
        result = validator.validate()
    """

    def __init__(self, *fields: Field) -> None:
        self._fields: tuple[Field, ...] = tuple(fields)
        seen: set[str] = set()
        for f in self._fields:
            if f.key in seen:
                logger.warning(
                    "Duplicate declaration for %s; the first one is used", f.key
                )
            seen.add(f.key)

    @classmethod
    def from_fields(cls, fields: Iterable[Field]) -> Validator:
        return cls(*fields)

    @property
    def fields(self) -> tuple[Field, ...]:
        return self._fields

    def validate_map(
        self, env: Mapping[str, str], *, cancel: CancelSignal | None = None
    ) -> Result:
        """Validate *env* against every declared field.

        All fields are evaluated before anything is raised, so the error
        lists every problem at once.

        Args:
            env: Raw values by key. Missing keys and empty strings are treated
                the same.
            cancel: Checked before each field; when set, the pass stops.

        Returns:
            A ``Result`` holding one coerced value per declared key.

        Raises:
            ValidationErrors: One or more fields failed.
            ValidationCancelledError: *cancel* was set during the pass.
        """
        errors: list[FieldError] = []
        values: dict[str, Value] = {}
        evaluated: set[str] = set()

        if cancel is not None and cancel.is_set():
            raise ValidationCancelledError("validation cancelled before it started")
        for f in self._fields:
            if cancel is not None and cancel.is_set():
                raise ValidationCancelledError(
                    f"validation cancelled before field {f.key!r}"
                )
            if f.key in evaluated:
                continue
            evaluated.add(f.key)

            raw = env.get(f.key) or ""
            if not raw:
                if f.required and not f.default:
                    errors.append(FieldError(f.key, MISSING_REASON))
                    continue
                raw = f.default

            if f.allowed_values and raw not in f.allowed_values:
                allowed = ", ".join(f.allowed_values)
                errors.append(
                    FieldError(
                        f.key,
                        f"value {quote(raw)} is not one of the allowed values: {allowed}",
                    )
                )
                continue

            try:
                values[f.key] = coerce(f.effective_kind, raw)
            except CoercionError as exc:
                errors.append(FieldError(f.key, str(exc)))

        logger.debug("Validated %d fields, %d failed", len(evaluated), len(errors))
        if errors:
            for err in errors:
                logger.debug("Field %s failed validation", err.key)
            raise ValidationErrors(errors)
        return Result(values)

    def validate(
        self,
        *,
        environ: Mapping[str, str] | None = None,
        dotenv_path: str | Path | None = None,
        cancel: CancelSignal | None = None,
    ) -> Result:
        """Validate the process environment.

        Only declared keys are read. Empty values are dropped before
        validation so "unset" and "empty" look the same. When *dotenv_path*
        is given, its values fill in keys the live environment leaves unset.
        """
        live = os.environ if environ is None else environ
        fallback: Mapping[str, str | None] = (
            dotenv_values(dotenv_path) if dotenv_path is not None else {}
        )
        env: dict[str, str] = {}
        for f in self._fields:
            value = live.get(f.key) or fallback.get(f.key)
            if value:
                env[f.key] = value
        return self.validate_map(env, cancel=cancel)

    def schema(self) -> list[FieldSchema]:
        """Describe every declaration in order; never consults input."""
        return build_schema(self._fields)

    def schema_json(self, *, indent: int | None = None) -> str:
        return dump_schema_json(self.schema(), indent=indent)
