"""Aggregates the per-metric strategies into one snapshot."""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

from syspulse.models import DetailedSnapshot, Snapshot
from syspulse.platforms import Platform, detect_platform

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Sampler:
    """
    Takes point-in-time CPU, memory and disk samples.

    The platform strategy is chosen once, at construction. Each call runs the
    metrics concurrently on worker threads and waits for all of them; there
    is no timeout and no cancellation at this level. A metric that cannot be
    measured is reported as 0 rather than failing the sample.
    """

    def __init__(
        self,
        platform: Platform | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Initialize the Sampler.

        Args:
            platform: Measurement strategy. Defaults to the running OS.
            clock: Source of snapshot timestamps.
        """
        self._platform = platform or detect_platform()
        self._clock = clock
        logger.debug("Sampler using %s platform", self._platform.name)

    @property
    def platform(self) -> Platform:
        return self._platform

    def sample(self) -> Snapshot:
        """Measure CPU, memory and disk concurrently."""
        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="syspulse") as pool:
            cpu = pool.submit(self._platform.cpu_usage)
            memory = pool.submit(self._platform.memory_info)
            disk = pool.submit(self._platform.disk_info)

            return Snapshot(
                cpu_usage=cpu.result(),
                memory_usage=memory.result().usage,
                disk_usage=disk.result().usage,
                timestamp=self._clock(),
            )

    def sample_with_specs(self) -> DetailedSnapshot:
        """
        Measure the three metrics and the host capacity concurrently.

        Used bytes are derived from the usage percentages, not measured, so
        used_ram == memory_usage / 100 * total_ram exactly.
        """
        with ThreadPoolExecutor(max_workers=4, thread_name_prefix="syspulse") as pool:
            cpu = pool.submit(self._platform.cpu_usage)
            memory = pool.submit(self._platform.memory_info)
            disk = pool.submit(self._platform.disk_info)
            specs = pool.submit(self._platform.system_specs)

            memory_usage = memory.result().usage
            disk_usage = disk.result().usage
            system_specs = specs.result()

            return DetailedSnapshot(
                cpu_usage=cpu.result(),
                memory_usage=memory_usage,
                disk_usage=disk_usage,
                timestamp=self._clock(),
                total_ram=system_specs.total_ram,
                total_disk=system_specs.total_disk,
                used_ram=memory_usage / 100 * system_specs.total_ram,
                used_disk=disk_usage / 100 * system_specs.total_disk,
            )
