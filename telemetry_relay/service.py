import asyncio
import threading
from typing import Any, Dict, Optional

import uvicorn

from .clock import Clock, format_timestamp, utc_now
from .config import Settings, settings as default_settings
from .freshness import freshness_map
from .logging_setup import configure_logging, get_logger
from .metrics import last_ingest_age_seconds, record_types_held, records_ingested_total, requests_total
from .models import Record
from .store import RecordStore
from .tracker import ConnectionTracker
from .types import JSONValue, TimestampValue


log = get_logger(__name__)


class RelayService:
    """Owns the record store and connection tracker for one relay process.

    A single lock guards the store and tracker together: the ASGI server may
    run handlers concurrently, and both ingest and request counting are
    read-modify-write operations on shared state.
    """

    def __init__(self, config: Optional[Settings] = None, clock: Clock = utc_now) -> None:
        self.settings = config or default_settings
        self.clock = clock

        self.store = RecordStore(self.settings.known_record_types, clock=clock)
        self.tracker = ConnectionTracker(clock=clock)
        self._lock = threading.Lock()

        # Set by the app lifespan while the ASGI app is serving
        self.running = False
        self.server: Optional[uvicorn.Server] = None

    def record_request(self, method: str) -> None:
        """Count one inbound call on the relay endpoint, whatever its outcome."""
        with self._lock:
            self.tracker.record_request()
        requests_total.labels(method=method).inc()

    def ingest(
        self,
        record_type: str,
        payload: JSONValue,
        sim_timestamp: TimestampValue = None,
        real_timestamp: TimestampValue = None,
    ) -> Record:
        """Store a record and count the successful ingest."""
        with self._lock:
            record = self.store.put(
                record_type,
                payload,
                sim_timestamp=sim_timestamp,
                real_timestamp=real_timestamp,
            )
            self.tracker.record_successful_ingest()
            held = self.store.held_count()

        records_ingested_total.labels(record_type=record_type).inc()
        record_types_held.set(held)
        log.info("record_ingested", record_type=record_type)
        return record

    def snapshot_view(self) -> Dict[str, Any]:
        """Assemble the consumer view: records, stats, freshness and read time."""
        with self._lock:
            now = self.clock()
            records = self.store.snapshot()
            stats = self.tracker.read()

        freshness = freshness_map(records, now, self.settings.freshness_threshold_minutes)

        if stats.last_foundry_connection is not None:
            last_ingest_age_seconds.set((now - stats.last_foundry_connection).total_seconds())
        else:
            last_ingest_age_seconds.set(-1)

        return {
            "data": {
                name: record.model_dump(mode="json") if record is not None else None
                for name, record in records.items()
            },
            "connection_stats": stats.model_dump(mode="json"),
            "data_freshness": freshness,
            "last_updated": format_timestamp(now),
        }

    def health_status(self) -> Dict[str, Any]:
        """Detailed health: degraded when records exist but none is fresh."""
        view = self.snapshot_view()
        freshness = view["data_freshness"]
        has_records = any(record is not None for record in view["data"].values())
        healthy = not has_records or any(freshness.values())

        with self._lock:
            uptime = self.tracker.uptime_seconds()

        return {
            "status": "healthy" if healthy else "degraded",
            "service": self.settings.service_name,
            "running": self.running,
            "uptime_seconds": round(uptime, 3),
            "connection_stats": view["connection_stats"],
            "data_freshness": freshness,
        }

    async def run(self) -> None:
        """Serve the relay API until uvicorn is asked to exit."""
        from .api import create_app

        app = create_app(self)
        config = uvicorn.Config(
            app,
            host=self.settings.http_host,
            port=self.settings.http_port,
            log_level=self.settings.log_level.lower(),
            access_log=False,
        )
        self.server = uvicorn.Server(config)

        log.info(
            "service_start",
            service=self.settings.service_name,
            host=self.settings.http_host,
            port=self.settings.http_port,
            path=self.settings.api_path,
        )
        try:
            # uvicorn installs its own SIGINT/SIGTERM handlers for graceful shutdown
            await self.server.serve()
        finally:
            log.info("service_stop", service=self.settings.service_name)

    def stop(self) -> None:
        if self.server is not None:
            self.server.should_exit = True


def main() -> None:
    configure_logging(default_settings.log_level, default_settings.log_format)
    asyncio.run(RelayService().run())
