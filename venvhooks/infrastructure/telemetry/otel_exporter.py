"""
OpenTelemetry Exporter for venvhooks

Architectural Intent:
- Exports gate telemetry (skips, runs, failures, work duration) to OTLP backends
- Fed from gate events on the event bus, never called by the gate directly
- Disabled unless an endpoint is configured

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Any
from urllib.parse import urlparse
import logging
from datetime import datetime, UTC

from venvhooks.domain.events.event_base import DomainEvent
from venvhooks.domain.events.gate_events import (
    GateSkippedEvent,
    WorkCompletedEvent,
    WorkFailedEvent,
)

logger = logging.getLogger(__name__)


@dataclass
class OTELConfig:
    endpoint: str = ""
    service_name: str = "venvhooks"
    environment: str = "development"
    insecure: bool = False

    def __post_init__(self) -> None:
        if self.endpoint:
            parsed = urlparse(self.endpoint)
            is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
            if parsed.scheme == "http" and not is_localhost and not self.insecure:
                raise ValueError(
                    f"Non-localhost HTTP endpoint '{self.endpoint}' requires "
                    "insecure=True or use https://. "
                    "Set insecure=True to explicitly allow plaintext export."
                )


class OTELExporter:
    """
    OpenTelemetry exporter for checksum gates.

    Metrics:
    - venvhooks.gate.skipped: a stored checksum matched
    - venvhooks.gate.ran: work ran and a checksum was stored
    - venvhooks.gate.failed: work failed
    - venvhooks.work.duration_ms: wall time of the work unit
    """

    def __init__(self, config: OTELConfig):
        self.config = config
        self._initialized = False
        self._metrics_buffer: list[dict[str, Any]] = []
        self._meter: Any = None
        self._provider: Any = None
        self._instruments: dict[str, Any] = {}

    def initialize(self) -> None:
        """Initialize the OpenTelemetry metrics SDK and OTLP exporter."""
        if not self.config.endpoint:
            logger.debug("OTEL endpoint not configured, telemetry disabled")
            return

        try:
            from opentelemetry import metrics
            from opentelemetry.sdk.metrics import MeterProvider
            from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
            from opentelemetry.sdk.resources import Resource, SERVICE_NAME
            from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
                OTLPMetricExporter,
            )

            resource = Resource(
                attributes={
                    SERVICE_NAME: self.config.service_name,
                    "environment": self.config.environment,
                }
            )
            metric_reader = PeriodicExportingMetricReader(
                OTLPMetricExporter(
                    endpoint=self.config.endpoint, insecure=self.config.insecure
                )
            )
            self._provider = MeterProvider(
                resource=resource, metric_readers=[metric_reader]
            )
            metrics.set_meter_provider(self._provider)
            self._meter = metrics.get_meter(__name__)
            self._initialized = True

        except ImportError:
            logger.warning("OpenTelemetry SDK not installed, telemetry disabled")
            self._initialized = False
        except Exception as e:
            logger.error("Failed to initialize OTEL: %s", e)
            self._initialized = False

    def _instrument(self, name: str, unit: str = "") -> Any:
        if name not in self._instruments and self._meter:
            if unit == "ms":
                self._instruments[name] = self._meter.create_histogram(name, unit=unit)
            else:
                self._instruments[name] = self._meter.create_counter(name, unit=unit)
        return self._instruments.get(name)

    def record_metric(
        self,
        name: str,
        value: float,
        unit: str = "",
        attributes: Optional[dict[str, str]] = None,
    ) -> None:
        """Record a metric value."""
        self._metrics_buffer.append(
            {
                "name": name,
                "value": value,
                "unit": unit,
                "attributes": attributes or {},
                "timestamp": datetime.now(UTC).isoformat(),
            }
        )

        if self._initialized:
            instrument = self._instrument(name, unit)
            if instrument is None:
                return
            if unit == "ms":
                instrument.record(value, attributes=attributes or {})
            else:
                instrument.add(value, attributes=attributes or {})

    def on_event(self, event: DomainEvent) -> None:
        """Event bus handler translating gate events into metrics."""
        attributes = {"hook": event.aggregate_id}
        if isinstance(event, GateSkippedEvent):
            self.record_metric("venvhooks.gate.skipped", 1, attributes=attributes)
        elif isinstance(event, WorkCompletedEvent):
            self.record_metric("venvhooks.gate.ran", 1, attributes=attributes)
            self.record_metric(
                "venvhooks.work.duration_ms",
                event.duration_ms,
                unit="ms",
                attributes={**attributes, "success": "True"},
            )
        elif isinstance(event, WorkFailedEvent):
            self.record_metric(
                "venvhooks.gate.failed",
                1,
                attributes={**attributes, "exit_code": str(event.exit_code)},
            )
            self.record_metric(
                "venvhooks.work.duration_ms",
                event.duration_ms,
                unit="ms",
                attributes={**attributes, "success": "False"},
            )

    def shutdown(self) -> None:
        """Flush pending metrics; hooks are short-lived processes."""
        if not self._initialized:
            return

        exported_count = len(self._metrics_buffer)
        self._metrics_buffer.clear()
        self._provider.shutdown()
        if exported_count:
            logger.debug("Flushed %d buffered metrics", exported_count)


def create_exporter(
    endpoint: Optional[str] = None,
    service_name: str = "venvhooks",
    insecure: bool = False,
) -> OTELExporter:
    """Factory function to create an initialized OTEL exporter."""
    config = OTELConfig(
        endpoint=endpoint or "",
        service_name=service_name,
        insecure=insecure,
    )
    exporter = OTELExporter(config)
    exporter.initialize()
    return exporter
