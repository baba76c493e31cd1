"""Result accessor contract: typed getters, raw access and redaction."""

from __future__ import annotations

from datetime import timedelta

import pytest

from envgate import (
    Field,
    Kind,
    Result,
    UndeclaredKeyError,
    UsageError,
    ValidationErrors,
    Validator,
    WrongKindError,
)
from envgate.coerce import Value

pytestmark = pytest.mark.unit


@pytest.fixture
def result() -> Result:
    return Validator(
        Field("NAME", default="svc"),
        Field("PORT", Kind.INTEGER, default="8080"),
        Field("RATIO", Kind.FLOAT, default="0.5"),
        Field("DEBUG", Kind.BOOLEAN, default="yes"),
        Field("API_URL", Kind.URL, default="https://api.example.com"),
        Field("TIMEOUT", Kind.DURATION, default="1m30s"),
        Field("API_TOKEN", default="s3cr3t"),
    ).validate_map({})


def test_typed_accessors(result: Result) -> None:
    assert result.string("NAME") == "svc"
    assert result.integer("PORT") == 8080
    assert result.float("RATIO") == 0.5
    assert result.boolean("DEBUG") is True
    assert result.url("API_URL") == "https://api.example.com"
    assert result.duration("TIMEOUT") == timedelta(seconds=90)


def test_string_accessor_reads_url_fields(result: Result) -> None:
    assert result.string("API_URL") == "https://api.example.com"


@pytest.mark.parametrize(
    "accessor", ["string", "integer", "float", "boolean", "url", "duration"]
)
def test_undeclared_key_is_a_usage_error(result: Result, accessor: str) -> None:
    with pytest.raises(UndeclaredKeyError, match="'MISSING' was not declared"):
        getattr(result, accessor)("MISSING")


@pytest.mark.parametrize(
    ("accessor", "key"),
    [
        ("integer", "DEBUG"),
        ("integer", "RATIO"),
        ("float", "PORT"),
        ("boolean", "NAME"),
        ("url", "NAME"),
        ("duration", "PORT"),
        ("string", "TIMEOUT"),
    ],
)
def test_wrong_kind_is_a_usage_error(result: Result, accessor: str, key: str) -> None:
    with pytest.raises(WrongKindError, match=f"'{key}' is a"):
        getattr(result, accessor)(key)


def test_usage_errors_behave_like_builtin_bugs() -> None:
    """They are not validation errors and match Python's own lookup/type errors."""
    r = Result({"PORT": Value(Kind.INTEGER, 1)})

    with pytest.raises(KeyError):
        r.string("NOPE")
    with pytest.raises(TypeError):
        r.boolean("PORT")

    assert issubclass(UndeclaredKeyError, UsageError)
    assert not issubclass(UndeclaredKeyError, ValidationErrors)
    assert not issubclass(WrongKindError, ValidationErrors)


def test_undeclared_key_message_is_not_repr_wrapped() -> None:
    err = UndeclaredKeyError("key 'X' was not declared in the validator")
    assert str(err) == "key 'X' was not declared in the validator"


def test_raw_returns_value_and_presence(result: Result) -> None:
    assert result.raw("PORT") == (8080, True)
    assert result.raw("TIMEOUT") == (timedelta(seconds=90), True)
    assert result.raw("MISSING") == (None, False)


def test_kind_of(result: Result) -> None:
    assert result.kind_of("API_URL") is Kind.URL
    assert result.kind_of("MISSING") is None


def test_container_protocol(result: Result) -> None:
    assert len(result) == 7
    assert "PORT" in result
    assert "MISSING" not in result
    assert list(result)[:2] == ["NAME", "PORT"]


def test_result_is_immutable(result: Result) -> None:
    with pytest.raises(AttributeError):
        result.extra = 1  # type: ignore[attr-defined]
    with pytest.raises(TypeError):
        result._values["PORT"] = Value(Kind.INTEGER, 1)  # type: ignore[index]


def test_result_is_detached_from_input_mapping() -> None:
    values = {"A": Value(Kind.STRING, "a")}
    r = Result(values)

    values["B"] = Value(Kind.STRING, "b")

    assert "B" not in r


def test_as_dict(result: Result) -> None:
    data = result.as_dict()

    assert data["PORT"] == 8080
    assert data["API_TOKEN"] == "s3cr3t"


def test_repr_and_redacted_dict_hide_secrets(result: Result) -> None:
    redacted = result.to_redacted_dict()

    assert redacted["API_TOKEN"] == "[REDACTED]"
    assert redacted["PORT"] == 8080
    assert "s3cr3t" not in repr(result)
    assert "s3cr3t" not in str(result)
