"""Pydantic models for stored records and connection statistics."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_serializer

from .clock import format_timestamp
from .types import JSONValue, TimestampValue


class Record(BaseModel):
    """The latest payload received for one record type."""

    model_config = ConfigDict(frozen=True)

    record_type: str
    payload: JSONValue
    sim_timestamp: TimestampValue = None
    real_timestamp: TimestampValue = None
    received_at: datetime

    @field_serializer("received_at")
    def _serialize_received_at(self, value: datetime) -> str:
        return format_timestamp(value)


class ConnectionStats(BaseModel):
    """Producer connection bookkeeping, returned by value."""

    model_config = ConfigDict(frozen=True)

    total_requests: int = 0
    successful_posts: int = 0
    last_foundry_connection: Optional[datetime] = None
    startup_time: datetime

    @field_serializer("last_foundry_connection", "startup_time")
    def _serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        return format_timestamp(value)
