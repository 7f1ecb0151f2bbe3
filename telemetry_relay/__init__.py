"""Latest-value relay for simulation telemetry records."""

__version__ = "1.0.0"
