"""Configuration module for the accessible blog service."""

import os
from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Application settings with environment variable support."""

    service_name: str = Field(default="accessible-blog")

    # Listing / pagination
    page_size: int = Field(default=6, gt=0)

    # Live region behaviour
    announce_clear_ms: int = Field(default=1000, ge=0)

    # Simulated latency of the mock post source
    load_delay_ms: int = Field(default=1000, ge=0)

    # HTTP server
    http_host: str = Field(default="0.0.0.0")
    http_port: int = Field(default=8080)
    metrics_enabled: bool = Field(default=True)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    def __init__(self, **kwargs):
        # Load from environment variables
        env_values = {}

        env_mapping = {
            "SERVICE_NAME": "service_name",
            "PAGE_SIZE": "page_size",
            "ANNOUNCE_CLEAR_MS": "announce_clear_ms",
            "LOAD_DELAY_MS": "load_delay_ms",
            "HTTP_HOST": "http_host",
            "HTTP_PORT": "http_port",
            "METRICS_ENABLED": "metrics_enabled",
            "LOG_LEVEL": "log_level",
            "LOG_FORMAT": "log_format",
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = os.environ[env_var]

                # Convert types
                if field_name in ["page_size", "announce_clear_ms", "load_delay_ms", "http_port"]:
                    try:
                        value = int(value)
                    except ValueError:
                        # Unparseable numbers fall back to the field default
                        continue
                elif field_name == "metrics_enabled":
                    value = value.lower() in ("true", "1", "yes", "on")

                env_values[field_name] = value

        # Merge kwargs with env values (kwargs take precedence)
        final_values = {**env_values, **kwargs}
        super().__init__(**final_values)

    @property
    def announce_clear_seconds(self) -> float:
        return self.announce_clear_ms / 1000.0

    @property
    def load_delay_seconds(self) -> float:
        return self.load_delay_ms / 1000.0


# Global settings instance
settings = Settings()
