"""Tests for the syspulse dashboard."""

from datetime import datetime, timedelta, timezone

import pytest
from conftest import FakePlatform
from textual.widgets import DataTable

from syspulse.app import HeaderStats, HistoryTable, SyspulseApp, usage_bar
from syspulse.models import DetailedSnapshot, Snapshot
from syspulse.sampler import Sampler

WHEN = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def make_app(**kwargs) -> SyspulseApp:
    return SyspulseApp(Sampler(FakePlatform()), poll_rate=0.1, **kwargs)


def snapshot_at(seconds: int, cpu: int = 10) -> Snapshot:
    return Snapshot(
        cpu_usage=cpu,
        memory_usage=20,
        disk_usage=30,
        timestamp=WHEN + timedelta(seconds=seconds),
    )


def test_usage_bar_colors():
    assert "[green]" in usage_bar("CPU", 10)
    assert "[yellow]" in usage_bar("CPU", 70)
    assert "[red]" in usage_bar("CPU", 95)
    assert usage_bar("CPU", 100).endswith("100%")


def test_usage_bar_empty():
    bar = usage_bar("Mem", 0)
    assert "█" not in bar
    assert bar.count("░") == 20


@pytest.mark.asyncio
async def test_app_starts():
    """Test that the app starts and has the expected widgets."""
    app = make_app()
    async with app.run_test() as pilot:
        assert pilot.app.query_one("#header-stats", HeaderStats) is not None
        assert pilot.app.query_one(HistoryTable) is not None
        assert pilot.app.monitor.is_running
        pilot.app.monitor.stop()


@pytest.mark.asyncio
async def test_app_quit_binding():
    """Test that 'q' binding stops the monitor and exits."""
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.press("q")
        assert not pilot.app.monitor.is_running
        assert pilot.app._exit


@pytest.mark.asyncio
async def test_app_pause_binding():
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.press("p")
        assert not pilot.app.monitor.is_running

        await pilot.press("p")
        assert pilot.app.monitor.is_running
        pilot.app.monitor.stop()


@pytest.mark.asyncio
async def test_app_shows_samples():
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.pause(1.2)
        history = pilot.app.query_one(HistoryTable)
        assert history.snapshots
        assert history.snapshots[0].cpu_usage == 25
        pilot.app.monitor.stop()


@pytest.mark.asyncio
async def test_history_table_newest_first():
    app = make_app()
    async with app.run_test() as pilot:
        pilot.app.monitor.stop()
        history = pilot.app.query_one(HistoryTable)
        history.show_history([snapshot_at(second, cpu=second) for second in range(5)])

        assert [s.cpu_usage for s in history.snapshots] == [4, 3, 2, 1, 0]
        assert pilot.app.query_one("#history-table", DataTable).row_count == 5


@pytest.mark.asyncio
async def test_history_table_follows_monitor_history():
    app = make_app(history_size=3)
    async with app.run_test() as pilot:
        monitor = pilot.app.monitor
        monitor.stop()
        for _ in range(5):
            monitor.poll_once()

        pilot.app._update_ui(monitor.get_history()[-1])

        history = pilot.app.query_one(HistoryTable)
        assert history.snapshots == list(reversed(monitor.get_history()))
        assert pilot.app.query_one("#history-table", DataTable).row_count == 3


@pytest.mark.asyncio
async def test_header_capacity_info():
    app = make_app()
    async with app.run_test() as pilot:
        pilot.app.monitor.stop()
        header = pilot.app.query_one("#header-stats", HeaderStats)
        header.update_stats(
            DetailedSnapshot(
                cpu_usage=10,
                memory_usage=50,
                disk_usage=40,
                timestamp=WHEN,
                total_ram=16 * 1024**3,
                total_disk=1024**4,
                used_ram=8 * 1024**3,
                used_disk=0.4 * 1024**4,
            )
        )
        text = header._get_capacity_info()
        assert "8 GB / 16 GB" in text
        assert "409.6 GB / 1 TB" in text

        header.update_stats(snapshot_at(0))
        assert header._get_capacity_info() == ""
