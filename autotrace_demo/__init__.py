"""Sample web server traced with OpenTelemetry, manually and automatically."""

__version__ = "0.1.0"
