"""Type definitions for the telemetry relay."""

from enum import Enum
from typing import Any, Dict, List, Optional


# Opaque JSON value; the relay never interprets payload contents.
JSONValue = Any

# Producer-supplied simulation/real timestamps are passed through untouched.
TimestampValue = Optional[JSONValue]


class RecordType(str, Enum):
    """Record kinds the dashboard knows how to display.

    The set is advisory: the store accepts any non-empty type name.
    """

    WEATHER_DATA = "weather_data"
    TRAFFIC_ZONES = "traffic_zones"
    EVENTS_DATA = "events_data"
    SYSTEM_STATUS = "system_status"


KNOWN_RECORD_TYPES: List[str] = [t.value for t in RecordType]

FreshnessMap = Dict[str, bool]
