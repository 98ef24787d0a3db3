"""Tests for the Textual dashboard."""

import pytest
from textual.coordinate import Coordinate
from textual.widgets import DataTable

from venvhooks.application.hooks import HookStatus
from venvhooks.domain.value_objects.fingerprint import Fingerprint
from venvhooks.presentation.tui.dashboard import Dashboard

A = Fingerprint("a" * 64)
B = Fingerprint("b" * 64)


class FakeHook:
    def __init__(self, name, *statuses):
        self.name = name
        self._statuses = list(statuses)

    def status(self):
        if len(self._statuses) > 1:
            return self._statuses.pop(0)
        return self._statuses[0]


class BrokenHook:
    name = "broken"

    def status(self):
        raise RuntimeError("cannot stat")


class TestDashboard:
    @pytest.mark.asyncio
    async def test_rows_per_hook(self):
        hooks = [
            FakeHook("uv-sync", HookStatus("uv-sync", "/c", A, A)),
            FakeHook("patch-venv", HookStatus("patch-venv", "/p", None, B)),
        ]
        app = Dashboard(hooks, refresh_interval=3600)
        async with app.run_test() as pilot:
            await pilot.pause()
            table = app.query_one(DataTable)
            assert table.row_count == 2
            assert table.get_cell_at(Coordinate(0, 1)) == "fresh"
            assert table.get_cell_at(Coordinate(0, 2)) == A.short
            assert table.get_cell_at(Coordinate(1, 1)) == "never run"
            assert table.get_cell_at(Coordinate(1, 2)) == "-"

    @pytest.mark.asyncio
    async def test_refresh_binding(self):
        hook = FakeHook(
            "uv-sync",
            HookStatus("uv-sync", "/c", A, A),
            HookStatus("uv-sync", "/c", A, B),
        )
        app = Dashboard([hook], refresh_interval=3600)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.statuses["uv-sync"].state == "fresh"
            await pilot.press("r")
            await pilot.pause()
            assert app.statuses["uv-sync"].state == "stale"
            assert app.query_one(DataTable).get_cell_at(Coordinate(0, 3)) == B.short

    @pytest.mark.asyncio
    async def test_error_state(self):
        hook = FakeHook("patch-venv", HookStatus("patch-venv", "", None, None, error="no venv"))
        app = Dashboard([hook], refresh_interval=3600)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.statuses["patch-venv"].state == "error"

    @pytest.mark.asyncio
    async def test_failing_hook_does_not_stop_refresh(self):
        hooks = [BrokenHook(), FakeHook("uv-sync", HookStatus("uv-sync", "/c", A, A))]
        app = Dashboard(hooks, refresh_interval=3600)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert "broken" not in app.statuses
            assert app.statuses["uv-sync"].fresh

    @pytest.mark.asyncio
    async def test_quit_binding(self):
        app = Dashboard([], refresh_interval=3600)
        async with app.run_test() as pilot:
            await pilot.press("q")
        assert app.return_code in (0, None)
