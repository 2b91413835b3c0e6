"""Background polling of the sampler for the dashboard."""

import logging
import threading
from collections import deque
from queue import Queue

from syspulse.models import Snapshot
from syspulse.sampler import Sampler

logger = logging.getLogger(__name__)


class SystemMonitor:
    """
    Polls a Sampler on a fixed interval.

    Runs in a separate daemon thread and pushes each snapshot to a thread-safe
    Queue, keeping the most recent ones as history. The sampler itself never
    polls; this class is the caller that does.
    """

    def __init__(
        self,
        sampler: Sampler,
        update_queue: Queue[Snapshot],
        poll_rate: float = 2.0,
        history_size: int = 50,
        with_specs: bool = True,
    ) -> None:
        """
        Initialize the SystemMonitor.

        Args:
            sampler: Sampler to call on every poll.
            update_queue: Thread-safe queue to push updates to.
            poll_rate: How often to poll the system (in seconds). Default 2.0s.
            history_size: How many snapshots to keep in history.
            with_specs: Poll sample_with_specs() instead of sample().
        """
        self._sampler = sampler
        self._queue = update_queue
        self.poll_rate = poll_rate
        self._with_specs = with_specs
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._history: deque[Snapshot] = deque(maxlen=history_size)

    @property
    def poll_rate(self) -> float:
        """Get the current poll rate."""
        return self._poll_rate

    @poll_rate.setter
    def poll_rate(self, value: float) -> None:
        """Set the poll rate."""
        self._poll_rate = max(0.1, value)  # Minimum 0.1 seconds

    @property
    def is_running(self) -> bool:
        """Check if the monitor thread is running."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the monitoring thread."""
        if self.is_running:
            return

        # Each thread owns its event, so a thread left over from a timed-out
        # stop() stays stopped
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._poll_loop,
            args=(self._stop_event,),
            daemon=True,
            name="SystemMonitor",
        )
        self._thread.start()
        logger.debug("Monitor started, polling every %.1fs", self._poll_rate)

    def stop(self, timeout: float | None = 5.0) -> None:
        """
        Stop the monitoring thread.

        A sample already in flight is not interrupted; its result is dropped
        when it finishes and the thread then exits.

        Args:
            timeout: How long to wait for thread to stop (seconds).
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning("Monitor thread still sampling after %ss, detaching it", timeout)
            self._thread = None

    def poll_once(self) -> Snapshot:
        """Take one sample and record it."""
        snapshot = self._take_sample()
        self._history.append(snapshot)
        return snapshot

    def _take_sample(self) -> Snapshot:
        if self._with_specs:
            return self._sampler.sample_with_specs()
        return self._sampler.sample()

    def _poll_loop(self, stop_event: threading.Event) -> None:
        """Main polling loop running in the background thread."""
        while not stop_event.is_set():
            try:
                snapshot = self._take_sample()
                if not stop_event.is_set():
                    self._history.append(snapshot)
                    self._queue.put(snapshot)
            except Exception:
                logger.exception("Sampling failed, will retry on next poll")

            # Wait for poll_rate seconds or until stop is requested
            stop_event.wait(timeout=self._poll_rate)

    def get_history(self) -> list[Snapshot]:
        """Get recent snapshots, oldest first."""
        return list(self._history)
