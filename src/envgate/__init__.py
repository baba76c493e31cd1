"""envgate: declarative validation and coercion of environment variables.

Public API:
    - Field / Kind: declare expected variables
    - Validator: validate a map or the process environment, export a schema
    - Result: typed access to validated values
    - ValidationErrors: every failing field from one pass

Example:
    validator = Validator(
        Field("PORT", Kind.INTEGER, default="8080", description="HTTP listen port"),
        Field("LOG_LEVEL", allowed_values=("debug", "info", "warn", "error"), default="info"),
        Field("DATABASE_URL", Kind.URL, required=True),
    )
    result = validator.validate()
    port = result.integer("PORT")
"""

from __future__ import annotations

import logging

from envgate.coerce import Value
from envgate.duration import parse_duration
from envgate.errors import (
    DeclarationError,
    EnvGateError,
    FieldError,
    UndeclaredKeyError,
    UsageError,
    ValidationCancelledError,
    ValidationErrors,
    WrongKindError,
)
from envgate.fields import Field, Kind
from envgate.result import Result
from envgate.schema import FieldSchema
from envgate.validator import CancelSignal, Validator

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("envgate")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("envgate").addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Declarations
    "Field",
    "Kind",
    # Evaluation
    "Validator",
    "CancelSignal",
    "Result",
    "Value",
    "FieldSchema",
    "parse_duration",
    # Errors
    "EnvGateError",
    "DeclarationError",
    "FieldError",
    "ValidationErrors",
    "ValidationCancelledError",
    "UsageError",
    "UndeclaredKeyError",
    "WrongKindError",
]
