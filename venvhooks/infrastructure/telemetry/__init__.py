"""
venvhooks Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry integration for gate observability
- Metrics export over OTLP
"""

from venvhooks.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    OTELConfig,
    create_exporter,
)

__all__ = [
    "OTELExporter",
    "OTELConfig",
    "create_exporter",
]
