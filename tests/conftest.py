"""
Pytest Configuration and Fixtures for inputguard Tests
======================================================

Purpose
-------
Centralized test fixtures and configuration for the inputguard test suite.

Responsibilities
----------------
- Put the configuration layer into testing mode before any test runs
- Provide reusable validator fixtures and a mock formatter collaborator

Architecture Notes
------------------
- All tests are unit tests: no I/O apart from pytest's tmp_path
- Fixtures are function-scoped; validators are mutable and never shared
"""

from __future__ import annotations

import os

import pytest


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest environment."""
    os.environ["INPUTGUARD_ENV"] = "testing"
    os.environ["INPUTGUARD_LOG_LEVEL"] = "DEBUG"
    os.environ["INPUTGUARD_DEFAULT_ENCODING"] = "UTF-8"
    os.environ.pop("INPUTGUARD_MESSAGE_LENGTH", None)

    from inputguard.core.config import Config

    Config.load()


# ============================================================================
# VALIDATOR FIXTURES
# ============================================================================


@pytest.fixture
def membership_validator():
    """MembershipValidator over [1, 2, 3] with default options."""
    from inputguard import MembershipValidator

    return MembershipValidator({"haystack": [1, 2, 3]})


@pytest.fixture
def mixed_haystack():
    """Haystack mixing strings, ints and a float zero."""
    return ["test", 0, "A", 1, 0.0]


@pytest.fixture
def nested_haystack():
    """Two-level haystack used by recursive search tests."""
    return [
        ["test", 0, "A", 0.0],
        ["foo", 1, "a", "c"],
    ]


@pytest.fixture
def length_validator():
    """LengthRangeValidator with default options (min 0, unbounded)."""
    from inputguard import LengthRangeValidator

    return LengthRangeValidator()


# ============================================================================
# MOCK FIXTURES
# ============================================================================


@pytest.fixture
def mock_formatter(mocker):
    """
    Mock MessageFormatter collaborator.

    Returns "<kind>!" for every message so tests can see which kind was used.
    """
    formatter = mocker.MagicMock()
    formatter.format = mocker.MagicMock(side_effect=lambda kind, template, value, variables: f"{kind}!")
    return formatter
