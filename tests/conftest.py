"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration and marker
registration. Fixtures here are autouse unless noted.
"""

from __future__ import annotations

import logging
import os

import pytest

from envgate import Field, Kind, Validator

# Every key the suite reads from the process environment uses this prefix.
TEST_ENV_PREFIX = "ENVGATE_TEST_"

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_test_env(request, monkeypatch):
    """Clear ENVGATE_TEST_* variables so tests never see each other's values.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith(TEST_ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("dotenv").setLevel(logging.WARNING)


# =============================================================================
# Pytest Hooks
# =============================================================================


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "integration: Tests that read the process environment or .env files",
        "allow_env_pollution: Keep ENVGATE_TEST_* variables from the outer environment",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# =============================================================================
# Shared Declarations
# =============================================================================


@pytest.fixture
def service_validator() -> Validator:
    """A typical web-service declaration set (not autouse)."""
    return Validator(
        Field("PORT", Kind.INTEGER, default="8080", description="HTTP listen port"),
        Field("DATABASE_URL", Kind.URL, required=True, description="Postgres URL"),
        Field(
            "LOG_LEVEL",
            default="info",
            allowed_values=("debug", "info", "warn", "error"),
        ),
        Field("DEBUG", Kind.BOOLEAN, default="false"),
        Field("REQUEST_TIMEOUT", Kind.DURATION, default="30s"),
        Field("SAMPLE_RATE", Kind.FLOAT, default="0.25"),
    )
