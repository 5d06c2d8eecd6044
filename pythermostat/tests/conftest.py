"""Pytest configuration and fixtures."""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from pythermostat.server.config import Settings
from pythermostat.server.core.store import ThermostatStore
from pythermostat.server.main import create_app


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds=1):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    """Store seeded with the two default thermostats."""
    return ThermostatStore(clock=clock)


@pytest.fixture
def empty_store(clock):
    return ThermostatStore(seed=False, clock=clock)


@pytest.fixture
def test_settings():
    return Settings(server_host="127.0.0.1", server_port=8080)


@pytest.fixture
def app(store, test_settings):
    return create_app(store=store, settings=test_settings)


@pytest.fixture
def client(app):
    """FastAPI test client over a freshly seeded home."""
    return TestClient(app)


@pytest.fixture
def empty_client(empty_store, test_settings):
    return TestClient(create_app(store=empty_store, settings=test_settings))
