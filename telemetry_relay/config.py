"""Configuration module for the telemetry relay service."""

import os
from typing import List

from pydantic import BaseModel, Field

from .types import KNOWN_RECORD_TYPES


class Settings(BaseModel):
    """Application settings with environment variable support."""

    # Service
    service_name: str = Field(default="telemetry-relay")

    # HTTP Configuration
    http_host: str = Field(default="0.0.0.0")
    http_port: int = Field(default=8080)
    api_path: str = Field(default="/api/simulation-data")

    # Record Configuration
    freshness_threshold_minutes: float = Field(default=5.0)
    known_record_types: List[str] = Field(default_factory=lambda: list(KNOWN_RECORD_TYPES))

    # Observability
    metrics_enabled: bool = Field(default=True)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    def __init__(self, **kwargs):
        # Load from environment variables
        env_values = {}

        # Map environment variables to settings
        env_mapping = {
            "SERVICE_NAME": "service_name",
            "HTTP_HOST": "http_host",
            "HTTP_PORT": "http_port",
            "API_PATH": "api_path",
            "FRESHNESS_THRESHOLD_MINUTES": "freshness_threshold_minutes",
            "KNOWN_RECORD_TYPES": "known_record_types",
            "METRICS_ENABLED": "metrics_enabled",
            "LOG_LEVEL": "log_level",
            "LOG_FORMAT": "log_format",
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = os.environ[env_var]

                # Convert types
                if field_name == "http_port":
                    try:
                        value = int(value)
                    except ValueError:
                        pass
                elif field_name == "freshness_threshold_minutes":
                    try:
                        value = float(value)
                    except ValueError:
                        pass
                elif field_name == "metrics_enabled":
                    value = value.lower() in ("true", "1", "yes", "on")
                elif field_name == "known_record_types":
                    value = [item.strip() for item in value.split(",") if item.strip()]

                env_values[field_name] = value

        # Merge kwargs with env values (kwargs take precedence)
        final_values = {**env_values, **kwargs}
        super().__init__(**final_values)


# Global settings instance
settings = Settings()
