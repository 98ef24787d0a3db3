"""
Centralized Logging

Architectural Intent:
- Keeps diagnostics on stderr so stdout stays the work units' relayed output
- Gate decisions are logged with structured fields passed via `extra=`
  (hook, checksum record, stored/current fingerprint, exit status, duration)
- JSON lines carry those fields as keys; the human format appends them as key=value
- Supports configurable log levels via CLI flags (--verbose, --debug)
"""

import json
import logging
import sys
from datetime import datetime, UTC

# Attributes a record may carry through `extra=`, in output order.
GATE_FIELDS = (
    "hook",
    "decision",
    "checksum_path",
    "stored",
    "current",
    "command",
    "exit_code",
    "duration_ms",
)


def gate_fields(record: logging.LogRecord) -> dict:
    """The gate fields set on `record`, skipping absent ones."""
    return {
        name: getattr(record, name)
        for name in GATE_FIELDS
        if getattr(record, name, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record, gate fields as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(gate_fields(record))
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


class HumanFormatter(logging.Formatter):
    """Plain format with gate fields appended as `key=value`."""

    def __init__(self):
        super().__init__("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = gate_fields(record)
        if not fields:
            return line
        # the first line only; a formatted traceback follows unchanged
        head, sep, tail = line.partition("\n")
        suffix = " ".join(f"{k}={v}" for k, v in fields.items())
        return f"{head} [{suffix}]{sep}{tail}"


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
) -> None:
    """Configure logging for venvhooks.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.)
        json_format: If True, use JSON structured output. Otherwise human-readable.
    """
    root = logging.getLogger("venvhooks")
    root.setLevel(level)

    # Remove existing handlers
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())

    root.addHandler(handler)


def level_from_name(name: str, default: int = logging.WARNING) -> int:
    """Resolve a level name from config ("debug", "INFO", ...)."""
    level = logging.getLevelName(name.upper()) if name else default
    return level if isinstance(level, int) else default
