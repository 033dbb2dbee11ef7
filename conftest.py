"""Repo-wide test fixtures.

Snapshots and clears the Honeycomb environment variables around each test
so a developer's real credentials never reach the fake API, and tests that
set them cannot pollute each other.
"""

from __future__ import annotations

import os

import pytest

_SENSITIVE_ENV_VARS = [
    "HONEYCOMB_API_ENDPOINT",
    "HONEYCOMB_KEY_ID",
    "HONEYCOMB_KEY_SECRET",
]


@pytest.fixture(autouse=True)
def _restore_env():
    """Snapshot sensitive env vars before each test and restore after."""
    snapshot = {}
    for var in _SENSITIVE_ENV_VARS:
        val = os.environ.pop(var, None)
        if val is not None:
            snapshot[var] = val

    yield

    # Restore: remove any that were added, reset any that changed
    for var in _SENSITIVE_ENV_VARS:
        if var in snapshot:
            os.environ[var] = snapshot[var]
        else:
            os.environ.pop(var, None)
