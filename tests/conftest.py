"""Shared fixtures for the magicline test suite.

Project-wide fixtures live here. Fixtures used by a single test module
are defined in that module.
"""
from __future__ import annotations

import pytest

from magicline.channel import RecordingChannel


@pytest.fixture()
def package_name() -> str:
    return "magicline"


@pytest.fixture()
def expected_version() -> str:
    """Version declared in pyproject.toml; bump both together."""
    return "0.1.0"


@pytest.fixture()
def channel() -> RecordingChannel:
    """Return an empty in-memory output channel."""
    return RecordingChannel()
