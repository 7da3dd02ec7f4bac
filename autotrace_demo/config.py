"""
Configuration management using Pydantic Settings.

Environment variables can override all settings. Telemetry settings share the
``OTEL_`` prefix with the standard OpenTelemetry environment variables, so
``OTEL_SERVICE_NAME`` and ``OTEL_TRACES_EXPORTER`` mean the same thing here as
they do to ``opentelemetry-instrument``.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VARIANTS = ("instrumented", "uninstrumented", "programmatic")
TRACES_EXPORTERS = ("console", "otlp", "none")


class TelemetrySettings(BaseSettings):
    """OpenTelemetry settings."""

    model_config = SettingsConfigDict(env_prefix="OTEL_")

    enabled: bool = Field(default=True, description="Enable OpenTelemetry tracing")
    service_name: str = Field(default="autotrace-demo", description="Service name for traces")
    traces_exporter: str = Field(
        default="console",
        description="Span exporters, comma-separated; the first of console, otlp or none is used",
    )
    exporter_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP exporter endpoint",
    )
    span_processor: Literal["batch", "simple"] = Field(
        default="batch",
        description="Span processor used in front of the exporter",
    )
    excluded_urls: list[str] = Field(
        default=["health", "ready", "live", "metrics"],
        description="URL patterns the programmatic instrumentation skips",
    )

    @field_validator("traces_exporter")
    @classmethod
    def normalize_exporter(cls, value: str) -> str:
        # Comma-separated like the standard variable; checked when an exporter is built
        return ",".join(name.strip().lower() for name in value.split(",") if name.strip())

    @property
    def exporter_names(self) -> list[str]:
        """Exporter names in the order they were given."""
        return [name for name in self.traces_exporter.split(",") if name]


class ClientSettings(BaseSettings):
    """Settings for the demo client."""

    model_config = SettingsConfigDict(env_prefix="CLIENT_")

    server_url: str = Field(
        default="http://localhost:8082",
        description="Base URL of the demo server",
    )
    timeout: float = Field(default=10.0, description="Request timeout in seconds")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Application settings
    debug: bool = Field(default=False, description="Enable debug mode")
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8082, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )
    variant: Literal["instrumented", "uninstrumented", "programmatic"] = Field(
        default="instrumented",
        description="Server variant started by autotrace_demo.main",
    )

    # Nested settings
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)
    client: ClientSettings = Field(default_factory=ClientSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
