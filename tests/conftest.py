from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from telemetry_relay.api import create_app
from telemetry_relay.config import Settings
from telemetry_relay.service import RelayService


START = datetime(2025, 3, 14, 9, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = START):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings(service_name="telemetry-relay-test", metrics_enabled=True)


@pytest.fixture
def service(settings, clock):
    return RelayService(settings, clock=clock)


@pytest.fixture
def client(service):
    with TestClient(create_app(service)) as c:
        yield c


@pytest.fixture
def api_path(settings):
    return settings.api_path
