from datetime import datetime, timedelta, timezone

import pytest

from telemetry_relay.freshness import freshness_map, is_fresh
from telemetry_relay.models import Record


START = datetime(2025, 3, 14, 9, 0, 0, tzinfo=timezone.utc)


def make_record(received_at=START, record_type="weather_data"):
    return Record(record_type=record_type, payload={}, received_at=received_at)


def test_absent_record_is_stale():
    assert is_fresh(None, START) is False


@pytest.mark.parametrize(
    "age, expected",
    [
        (timedelta(0), True),
        (timedelta(minutes=4, seconds=59), True),
        (timedelta(minutes=5), False),
        (timedelta(minutes=5, milliseconds=1), False),
        (timedelta(hours=2), False),
    ],
)
def test_threshold_is_strict(age, expected):
    assert is_fresh(make_record(), START + age) is expected


def test_future_received_at_counts_as_fresh():
    record = make_record(received_at=START + timedelta(minutes=30))
    assert is_fresh(record, START) is True


def test_custom_threshold():
    record = make_record()
    now = START + timedelta(minutes=2)
    assert is_fresh(record, now, threshold_minutes=1) is False
    assert is_fresh(record, now, threshold_minutes=3) is True


def test_freshness_map_covers_every_entry():
    records = {
        "weather_data": make_record(),
        "traffic_zones": make_record(received_at=START - timedelta(minutes=10)),
        "events_data": None,
    }
    assert freshness_map(records, START) == {
        "weather_data": True,
        "traffic_zones": False,
        "events_data": False,
    }
