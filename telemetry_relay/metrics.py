from __future__ import annotations

from prometheus_client import Counter, Gauge


requests_total = Counter(
    "telemetry_relay_requests_total",
    "Total requests received on the relay endpoint",
    ["method"],
)

records_ingested_total = Counter(
    "telemetry_relay_records_ingested_total",
    "Records successfully stored",
    ["record_type"],
)

ingest_rejected_total = Counter(
    "telemetry_relay_ingest_rejected_total",
    "Ingest requests rejected by validation",
)

internal_errors_total = Counter(
    "telemetry_relay_internal_errors_total",
    "Requests that failed with an internal error",
)

record_types_held = Gauge(
    "telemetry_relay_record_types_held",
    "Number of record types currently holding a record",
)

# Additional gauges for observability
last_ingest_age_seconds = Gauge(
    "telemetry_relay_last_ingest_age_seconds",
    "Seconds since the last successful ingest (-1 if none yet)",
)
