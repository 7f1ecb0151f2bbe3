"""Time source and timestamp formatting.

Every read of "now" inside the relay goes through a ``Clock``: a zero-argument
callable returning an aware UTC datetime. Production code uses :func:`utc_now`;
tests pass a controllable clock so freshness can be checked deterministically.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render *value* as ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
