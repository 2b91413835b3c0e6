"""syspulse - Textual dashboard."""

from queue import Empty, Queue

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import DataTable, Footer, Static

from syspulse.formatting import format_bytes, usage_level
from syspulse.models import DetailedSnapshot, Snapshot
from syspulse.monitor import SystemMonitor
from syspulse.sampler import Sampler

LEVEL_COLORS = {
    "ok": "green",
    "warning": "yellow",
    "critical": "red",
}


def usage_bar(label: str, percent: int, width: int = 20) -> str:
    """Render a usage percentage as a coloured bar."""
    bar_len = min(max(int(percent * width / 100), 0), width)
    color = LEVEL_COLORS[usage_level(percent)]
    bar = f"[{color}]█[/{color}]" * bar_len + "[dim]░[/dim]" * (width - bar_len)
    # Use escaped brackets for the bar container
    return f"{label:<4}\\[{bar}] {percent:3d}%"


class HeaderStats(Static):
    """Header widget showing the latest usage figures."""

    DEFAULT_CSS = """
    HeaderStats {
        height: auto;
        min-height: 5;
        padding: 1;
        background: $surface;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize HeaderStats."""
        super().__init__(*args, **kwargs)
        self._snapshot: Snapshot | None = None

    def compose(self) -> ComposeResult:
        """Compose the header stats layout."""
        yield Horizontal(
            Static(self._get_usage_info(), id="usage-info"),
            Static(self._get_capacity_info(), id="capacity-info"),
        )

    def update_stats(self, snapshot: Snapshot) -> None:
        """Update the statistics from a snapshot."""
        self._snapshot = snapshot
        self._refresh_display()

    def _refresh_display(self) -> None:
        try:
            usage_info = self.query_one("#usage-info", Static)
            capacity_info = self.query_one("#capacity-info", Static)
            usage_info.update(self._get_usage_info())
            capacity_info.update(self._get_capacity_info())
        except Exception:
            pass  # Widget not mounted yet

    def _get_usage_info(self) -> str:
        snapshot = self._snapshot
        if snapshot is None:
            return "Sampling..."
        return "\n".join(
            [
                usage_bar("CPU", snapshot.cpu_usage),
                usage_bar("Mem", snapshot.memory_usage),
                usage_bar("Disk", snapshot.disk_usage),
            ]
        )

    def _get_capacity_info(self) -> str:
        snapshot = self._snapshot
        if not isinstance(snapshot, DetailedSnapshot):
            return ""
        return (
            f"RAM:  {format_bytes(snapshot.used_ram)} / {format_bytes(snapshot.total_ram)}\n"
            f"Disk: {format_bytes(snapshot.used_disk)} / {format_bytes(snapshot.total_disk)}\n"
            f"Last update: {snapshot.timestamp.astimezone():%H:%M:%S}"
        )


class HistoryTable(Container):
    """Container for the table of recent samples, newest first."""

    DEFAULT_CSS = """
    HistoryTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize HistoryTable."""
        super().__init__(*args, **kwargs)
        self._snapshots: list[Snapshot] = []

    @property
    def snapshots(self) -> list[Snapshot]:
        """Samples currently shown, newest first."""
        return list(self._snapshots)

    def compose(self) -> ComposeResult:
        """Compose the history table."""
        yield DataTable(id="history-table")

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        table = self.query_one("#history-table", DataTable)
        table.cursor_type = "row"

        table.add_column("TIME", key="time", width=10)
        table.add_column("CPU%", key="cpu", width=6)
        table.add_column("MEM%", key="mem", width=6)
        table.add_column("DISK%", key="disk", width=6)

    def show_history(self, history: list[Snapshot]) -> None:
        """Render the monitor history (oldest first) with the newest row on top."""
        self._snapshots = list(reversed(history))

        # DataTable only appends, so rebuild newest first
        table = self.query_one("#history-table", DataTable)
        table.clear()
        for row in self._snapshots:
            table.add_row(*self._format_row(row))

    @staticmethod
    def _format_row(snapshot: Snapshot) -> tuple[str, str, str, str]:
        return (
            f"{snapshot.timestamp.astimezone():%H:%M:%S}",
            f"{snapshot.cpu_usage:3d}",
            f"{snapshot.memory_usage:3d}",
            f"{snapshot.disk_usage:3d}",
        )


class SyspulseApp(App):
    """Main syspulse application."""

    TITLE = "syspulse"
    SUB_TITLE = "System Resource Monitor"

    CSS = """
    Screen {
        layout: vertical;
    }

    #header-stats {
        dock: top;
        height: auto;
        min-height: 5;
    }

    Horizontal {
        height: auto;
    }

    #usage-info {
        width: 1fr;
        padding-right: 2;
    }

    #capacity-info {
        width: 1fr;
        padding-left: 2;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("p", "toggle_pause", "Pause"),
    ]

    def __init__(
        self,
        sampler: Sampler | None = None,
        poll_rate: float = 2.0,
        history_size: int = 50,
        with_specs: bool = True,
    ) -> None:
        """Initialize the SyspulseApp."""
        super().__init__()
        self._update_queue: Queue[Snapshot] = Queue()
        self._monitor = SystemMonitor(
            sampler or Sampler(),
            self._update_queue,
            poll_rate=poll_rate,
            history_size=history_size,
            with_specs=with_specs,
        )

    @property
    def monitor(self) -> SystemMonitor:
        return self._monitor

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield HeaderStats(id="header-stats")
        yield HistoryTable()
        yield Footer()

    def on_mount(self) -> None:
        """Start the system monitor when the app is mounted."""
        self._monitor.start()
        # Set up a timer to poll the queue for updates
        self.set_interval(0.5, self._check_for_updates)

    def _check_for_updates(self) -> None:
        """Check the queue for new samples and refresh the UI."""
        try:
            # Drain the queue; the table is rebuilt from the monitor history
            snapshot = None
            while True:
                try:
                    snapshot = self._update_queue.get_nowait()
                except Empty:
                    break

            if snapshot is not None:
                self._update_ui(snapshot)
        except Exception:
            self.log.error("Failed to apply monitor update")

    def _update_ui(self, snapshot: Snapshot) -> None:
        """Update the UI with a new snapshot."""
        try:
            header = self.query_one("#header-stats", HeaderStats)
            header.update_stats(snapshot)
        except Exception:
            pass  # Header not mounted yet

        try:
            history = self.query_one(HistoryTable)
            history.show_history(self._monitor.get_history())
        except Exception:
            pass  # Table not mounted yet

    def action_toggle_pause(self) -> None:
        """Pause or resume polling."""
        if self._monitor.is_running:
            self._monitor.stop()
            self.notify("Paused")
        else:
            self._monitor.start()
            self.notify("Resumed")

    def action_quit(self) -> None:
        """Handle quit action with graceful cleanup."""
        self._monitor.stop()
        self.exit()
