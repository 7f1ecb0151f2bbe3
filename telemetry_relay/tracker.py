"""Process-wide connection bookkeeping for the producer and consumers."""

from datetime import datetime
from typing import Optional

from .clock import Clock, utc_now
from .models import ConnectionStats


class ConnectionTracker:
    """Counts relay requests and successful ingests.

    ``startup_time`` is fixed at construction. Counters only increase and
    ``last_foundry_connection`` only moves forward.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self.startup_time: datetime = clock()
        self.total_requests = 0
        self.successful_posts = 0
        self.last_foundry_connection: Optional[datetime] = None

    def record_request(self) -> None:
        self.total_requests += 1

    def record_successful_ingest(self) -> None:
        now = self._clock()
        self.successful_posts += 1
        if self.last_foundry_connection is None or now > self.last_foundry_connection:
            self.last_foundry_connection = now

    def read(self) -> ConnectionStats:
        """Return the current counters as an immutable snapshot."""
        return ConnectionStats(
            total_requests=self.total_requests,
            successful_posts=self.successful_posts,
            last_foundry_connection=self.last_foundry_connection,
            startup_time=self.startup_time,
        )

    def uptime_seconds(self) -> float:
        return (self._clock() - self.startup_time).total_seconds()
