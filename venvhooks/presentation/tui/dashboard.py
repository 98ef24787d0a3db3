"""
Dashboard TUI

Architectural Intent:
- Textual-based dashboard showing whether each hook's checksum is fresh
- Read-only: computes fingerprints but never runs work or writes checksums
- Severity-colored activity log; refresh on demand (r) or on a timer
"""

from textual.app import App, ComposeResult
from textual.widgets import Header, Footer, DataTable, RichLog
from textual.containers import Vertical
from textual.coordinate import Coordinate
from rich.markup import escape
from typing import Sequence
import logging
from datetime import datetime

from venvhooks.application.hooks import HookStatus, VenvHook

logger = logging.getLogger(__name__)

SEVERITY_STYLES = {
    "info": "green",
    "warning": "yellow",
    "error": "red",
}

STATE_SEVERITY = {
    "fresh": "info",
    "stale": "warning",
    "never run": "warning",
    "error": "error",
}


class Dashboard(App):
    """A Textual app showing checksum gate status per hook."""

    CSS = """
    Screen {
        layout: vertical;
    }
    DataTable {
        height: 1fr;
        border: solid green;
    }
    RichLog {
        height: 1fr;
        border: solid yellow;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "refresh", "Refresh Status"),
    ]

    def __init__(self, hooks: Sequence[VenvHook], refresh_interval: float = 10.0):
        super().__init__()
        self.hooks = list(hooks)
        self.statuses: dict[str, HookStatus] = {}
        self._refresh_interval = refresh_interval

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(DataTable(id="hook_table"), RichLog(id="activity_log", markup=True))
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.add_columns("Hook", "State", "Stored", "Current", "Last Check")
        for hook in self.hooks:
            table.add_row(hook.name, "Pending", "...", "...", "Never", key=hook.name)

        self.log_message("venvhooks dashboard initialized.", severity="info")
        self.refresh_status()
        self.set_interval(self._refresh_interval, self.refresh_status)

    def log_message(self, message: str, severity: str = "info") -> None:
        log_widget = self.query_one(RichLog)
        timestamp = datetime.now().strftime("%H:%M:%S")
        style = SEVERITY_STYLES.get(severity, "")
        line = escape(f"[{timestamp}] [{severity.upper()}] {message}")
        if style:
            log_widget.write(f"[{style}]{line}[/{style}]")
        else:
            log_widget.write(line)

    def action_refresh(self) -> None:
        self.refresh_status()

    def refresh_status(self) -> None:
        table = self.query_one(DataTable)
        timestamp = datetime.now().strftime("%H:%M:%S")

        for row, hook in enumerate(self.hooks):
            try:
                status = hook.status()
            except Exception as e:
                logger.exception("Status check failed for %s", hook.name)
                self.log_message(f"Error checking {hook.name}: {e}", severity="error")
                continue

            previous = self.statuses.get(hook.name)
            self.statuses[hook.name] = status

            stored = status.stored.short if status.stored else "-"
            current = status.current.short if status.current else "-"
            table.update_cell_at(Coordinate(row, 1), status.state)
            table.update_cell_at(Coordinate(row, 2), stored)
            table.update_cell_at(Coordinate(row, 3), current)
            table.update_cell_at(Coordinate(row, 4), timestamp)

            if previous is None or previous.state != status.state:
                detail = f": {status.error}" if status.error else ""
                self.log_message(
                    f"{hook.name} is {status.state}{detail}",
                    severity=STATE_SEVERITY[status.state],
                )
