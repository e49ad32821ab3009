"""Shared fixtures for integration tests."""

import os

import pytest

RUN_NETWORK_TESTS = os.environ.get("RUN_BIRDEYE_NETWORK_TESTS") == "1"


@pytest.fixture
def api_key() -> str:
    """Birdeye API key from the environment; skips the test when missing."""
    key = os.environ.get("BIRDEYE_API_KEY", "")
    if not RUN_NETWORK_TESTS or not key:
        pytest.skip("Requires network access. Set RUN_BIRDEYE_NETWORK_TESTS=1 and BIRDEYE_API_KEY")
    return key
