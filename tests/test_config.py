from fastapi.testclient import TestClient

from telemetry_relay.api import create_app
from telemetry_relay.config import Settings
from telemetry_relay.service import RelayService
from telemetry_relay.types import KNOWN_RECORD_TYPES


def test_defaults(monkeypatch):
    for var in ("HTTP_PORT", "API_PATH", "FRESHNESS_THRESHOLD_MINUTES", "KNOWN_RECORD_TYPES"):
        monkeypatch.delenv(var, raising=False)
    s = Settings()
    assert s.http_port == 8080
    assert s.api_path == "/api/simulation-data"
    assert s.freshness_threshold_minutes == 5.0
    assert s.known_record_types == KNOWN_RECORD_TYPES


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("HTTP_PORT", "9090")
    monkeypatch.setenv("FRESHNESS_THRESHOLD_MINUTES", "2.5")
    monkeypatch.setenv("METRICS_ENABLED", "off")
    monkeypatch.setenv("KNOWN_RECORD_TYPES", "weather_data, air_quality,")
    s = Settings()
    assert s.http_port == 9090
    assert s.freshness_threshold_minutes == 2.5
    assert s.metrics_enabled is False
    assert s.known_record_types == ["weather_data", "air_quality"]


def test_kwargs_take_precedence(monkeypatch):
    monkeypatch.setenv("SERVICE_NAME", "from-env")
    assert Settings(service_name="explicit").service_name == "explicit"


def test_threshold_and_path_flow_into_app(clock):
    s = Settings(api_path="/relay", freshness_threshold_minutes=1, known_record_types=["weather_data"])
    service = RelayService(s, clock=clock)
    with TestClient(create_app(service)) as client:
        client.post("/relay", json={"record_type": "weather_data", "payload": {}})
        clock.advance(seconds=61)
        body = client.get("/relay").json()
        assert body["data_freshness"] == {"weather_data": False}
        assert client.get("/api/simulation-data").status_code == 404
