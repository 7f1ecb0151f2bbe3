from telemetry_relay.tracker import ConnectionTracker


def test_initial_stats(clock):
    tracker = ConnectionTracker(clock=clock)
    stats = tracker.read()
    assert stats.total_requests == 0
    assert stats.successful_posts == 0
    assert stats.last_foundry_connection is None
    assert stats.startup_time == clock.now


def test_counters_advance_independently(clock):
    tracker = ConnectionTracker(clock=clock)
    for _ in range(3):
        tracker.record_request()
    clock.advance(seconds=5)
    tracker.record_successful_ingest()

    stats = tracker.read()
    assert stats.total_requests == 3
    assert stats.successful_posts == 1
    assert stats.last_foundry_connection == clock.now


def test_startup_time_is_fixed(clock):
    tracker = ConnectionTracker(clock=clock)
    started = tracker.startup_time
    clock.advance(minutes=10)
    tracker.record_successful_ingest()
    assert tracker.read().startup_time == started
    assert tracker.uptime_seconds() == 600


def test_last_connection_never_moves_backwards(clock):
    tracker = ConnectionTracker(clock=clock)
    clock.advance(minutes=1)
    tracker.record_successful_ingest()
    latest = clock.now

    clock.advance(minutes=-5)
    tracker.record_successful_ingest()

    stats = tracker.read()
    assert stats.successful_posts == 2
    assert stats.last_foundry_connection == latest


def test_read_returns_a_copy(clock):
    tracker = ConnectionTracker(clock=clock)
    stats = tracker.read()
    tracker.record_request()
    assert stats.total_requests == 0
    assert tracker.read().total_requests == 1


def test_serialized_timestamps_use_millisecond_utc(clock):
    tracker = ConnectionTracker(clock=clock)
    tracker.record_successful_ingest()
    dumped = tracker.read().model_dump(mode="json")
    assert dumped["startup_time"] == "2025-03-14T09:00:00.000Z"
    assert dumped["last_foundry_connection"] == "2025-03-14T09:00:00.000Z"
