"""Shared test fixtures for the Honeycomb client tests."""

from __future__ import annotations

import pytest
from starlette.testclient import TestClient as StarletteTestClient

from honeycombio.v2 import Client

from fake_honeycomb import BASE_URL, FakeHoneycomb, create_app, make_config


@pytest.fixture
def fake():
    """Fresh fake API state: one environment, no keys."""
    state = FakeHoneycomb()
    state.add_environment("Production", description="prod", color="red")
    return state


@pytest.fixture
def http(fake):
    """httpx.Client wired straight to the fake app, no real network."""
    with StarletteTestClient(create_app(fake), base_url=BASE_URL) as inner:
        yield inner


@pytest.fixture
def client(http):
    return Client(make_config(http))
