"""In-memory store holding the latest record per record type."""

import copy
from typing import Dict, Iterable, Optional

from .clock import Clock, utc_now
from .logging_setup import get_logger
from .models import Record
from .types import JSONValue, TimestampValue


log = get_logger(__name__)


class RecordStore:
    """Latest-value store keyed by record type name.

    Holds at most one record per type. ``put`` replaces the previous record
    for that type outright; keys are never removed. Types listed in
    ``known_types`` appear in every snapshot, as ``None`` until the first
    record of that type arrives.

    Not synchronized on its own: :class:`~telemetry_relay.service.RelayService`
    guards the store together with the connection tracker.
    """

    def __init__(self, known_types: Iterable[str] = (), clock: Clock = utc_now) -> None:
        self._clock = clock
        self._records: Dict[str, Optional[Record]] = {name: None for name in known_types}

    def put(
        self,
        record_type: str,
        payload: JSONValue,
        sim_timestamp: TimestampValue = None,
        real_timestamp: TimestampValue = None,
    ) -> Record:
        """Store *payload* as the current record for *record_type* and return it."""
        record = Record(
            record_type=record_type,
            payload=copy.deepcopy(payload),
            sim_timestamp=sim_timestamp,
            real_timestamp=real_timestamp,
            received_at=self._clock(),
        )
        # Single assignment; readers see either the old or the new record.
        self._records[record_type] = record
        log.debug("record_stored", record_type=record_type)
        return record

    def get(self, record_type: str) -> Optional[Record]:
        return self._records.get(record_type)

    def snapshot(self) -> Dict[str, Optional[Record]]:
        """Return a copy of every entry, including types with no record yet."""
        return {
            name: record.model_copy(deep=True) if record is not None else None
            for name, record in list(self._records.items())
        }

    def types(self) -> list:
        return list(self._records)

    def held_count(self) -> int:
        """Number of types currently holding a record."""
        return sum(1 for record in self._records.values() if record is not None)

    def __len__(self) -> int:
        return len(self._records)
