"""Root pytest configuration for all tests."""

import logging

import pytest

# Keep request-level debug noise out of captured logs
logging.getLogger("urllib3").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep a developer's LINEAR_API_KEY out of unit tests."""
    monkeypatch.delenv("LINEAR_API_KEY", raising=False)
