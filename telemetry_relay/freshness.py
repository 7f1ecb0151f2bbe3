"""Freshness verdicts for stored records."""

from datetime import datetime
from typing import Mapping, Optional

from .models import Record
from .types import FreshnessMap


DEFAULT_THRESHOLD_MINUTES = 5.0


def record_age_minutes(record: Record, now: datetime) -> float:
    return (now - record.received_at).total_seconds() / 60.0


def is_fresh(
    record: Optional[Record],
    now: datetime,
    threshold_minutes: float = DEFAULT_THRESHOLD_MINUTES,
) -> bool:
    """Return True when *record* was received less than *threshold_minutes* ago.

    Absent records are never fresh. The comparison is strict, so a record
    exactly ``threshold_minutes`` old is stale. A ``received_at`` later than
    *now* yields a negative age and counts as fresh.
    """
    if record is None or getattr(record, "received_at", None) is None:
        return False
    return record_age_minutes(record, now) < threshold_minutes


def freshness_map(
    records: Mapping[str, Optional[Record]],
    now: datetime,
    threshold_minutes: float = DEFAULT_THRESHOLD_MINUTES,
) -> FreshnessMap:
    """Evaluate :func:`is_fresh` for every entry of a snapshot."""
    return {
        name: is_fresh(record, now, threshold_minutes)
        for name, record in records.items()
    }
