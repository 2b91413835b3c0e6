"""
Per-platform measurement strategies.

Each metric is an ordered chain of attempts. An attempt is a zero-argument
callable that returns a value or raises; first_success walks the chain and
returns the first value produced, or the metric's zero value once every
attempt has failed. Nothing raised by an attempt escapes a metric.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import TypeVar

import psutil

from syspulse.errors import SamplerError
from syspulse.models import DiskInfo, MemoryInfo, SystemSpecs, percent_of, round_half_up
from syspulse.parsers import (
    parse_counter_value,
    parse_df,
    parse_drive_pairs,
    parse_load_percentage,
    parse_total_physical_memory,
    parse_wmic_disk,
    parse_wmic_sizes,
)
from syspulse.runner import CommandRunner

logger = logging.getLogger(__name__)

T = TypeVar("T")

Attempt = Callable[[], T]

MB = 1024 * 1024


def first_success(attempts: Sequence[Attempt[T]], default: T, metric: str) -> T:
    """Return the result of the first attempt that succeeds, else default."""
    for attempt in attempts:
        name = getattr(attempt, "__name__", repr(attempt))
        try:
            return attempt()
        except SamplerError as e:
            logger.warning("%s: %s failed: %s", metric, name, e)
        except Exception:
            logger.exception("%s: %s raised unexpectedly", metric, name)
    logger.warning("%s: all methods failed, reporting zero", metric)
    return default


def native_memory_info() -> MemoryInfo:
    """Memory from the OS accessors, available on every platform."""
    mem = psutil.virtual_memory()
    return MemoryInfo.from_total_free(mem.total, mem.available)


class Platform(ABC):
    """
    Measurement strategy for one operating-system family.

    Subclasses provide the attempt chains; the public methods never raise.
    """

    name = "abstract"

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self._runner = runner or CommandRunner()

    @property
    def runner(self) -> CommandRunner:
        return self._runner

    @abstractmethod
    def cpu_attempts(self) -> list[Attempt[int]]: ...

    @abstractmethod
    def memory_attempts(self) -> list[Attempt[MemoryInfo]]: ...

    @abstractmethod
    def disk_attempts(self) -> list[Attempt[DiskInfo]]: ...

    @abstractmethod
    def total_ram_attempts(self) -> list[Attempt[int]]: ...

    @abstractmethod
    def total_disk_attempts(self) -> list[Attempt[int]]: ...

    def cpu_usage(self) -> int:
        """Recent CPU load as an integer percentage."""
        return first_success(self.cpu_attempts(), 0, "cpu")

    def memory_info(self) -> MemoryInfo:
        return first_success(self.memory_attempts(), MemoryInfo.zero(), "memory")

    def disk_info(self) -> DiskInfo:
        """Usage of the primary volume."""
        return first_success(self.disk_attempts(), DiskInfo.zero(), "disk")

    def system_specs(self) -> SystemSpecs:
        """Total RAM and disk; each field degrades to 0 on its own."""
        return SystemSpecs(
            total_ram=first_success(self.total_ram_attempts(), 0, "total_ram"),
            total_disk=first_success(self.total_disk_attempts(), 0, "total_disk"),
        )


class PosixPlatform(Platform):
    """Linux, macOS and the other POSIX-like systems."""

    name = "posix"

    DF_COMMAND = ["df", "-kP", "/"]

    def cpu_attempts(self) -> list[Attempt[int]]:
        return [self.load_average_usage]

    def memory_attempts(self) -> list[Attempt[MemoryInfo]]:
        return [native_memory_info]

    def disk_attempts(self) -> list[Attempt[DiskInfo]]:
        return [self.df_disk_info]

    def total_ram_attempts(self) -> list[Attempt[int]]:
        return [self.native_total_ram]

    def total_disk_attempts(self) -> list[Attempt[int]]:
        return [self.df_total_disk]

    def load_average_usage(self) -> int:
        """
        Approximate CPU usage from the 1-minute load average.

        usage = min(load1 / logical_cores * 100, 100). Load average is not a
        true CPU percentage; the approximation is kept as-is.
        """
        cores = psutil.cpu_count(logical=True)
        if not cores:
            return 0
        load1 = psutil.getloadavg()[0]
        return round_half_up(min(load1 / cores * 100, 100))

    def df_disk_info(self) -> DiskInfo:
        total, used, free = parse_df(self._runner.run(self.DF_COMMAND))
        return DiskInfo(total=total, free=free, used=used, usage=percent_of(used, total))

    def native_total_ram(self) -> int:
        return psutil.virtual_memory().total

    def df_total_disk(self) -> int:
        total, _, _ = parse_df(self._runner.run(self.DF_COMMAND))
        return total


class WindowsPlatform(Platform):
    """Windows, measured through PowerShell counters and WMIC."""

    name = "windows"

    CPU_COUNTER_COMMAND = [
        "powershell",
        "-NoProfile",
        "-Command",
        "Get-Counter '\\Processor(_Total)\\% Processor Time' "
        "| Select-Object -ExpandProperty CounterSamples "
        "| Select-Object -ExpandProperty CookedValue",
    ]
    CPU_WMIC_COMMAND = ["wmic", "cpu", "get", "loadpercentage", "/value"]
    AVAILABLE_MEMORY_COMMAND = [
        "powershell",
        "-NoProfile",
        "-Command",
        "Get-Counter '\\Memory\\Available MBytes' "
        "| Select-Object -ExpandProperty CounterSamples "
        "| Select-Object -ExpandProperty CookedValue",
    ]
    TOTAL_MEMORY_COMMAND = ["wmic", "computersystem", "get", "TotalPhysicalMemory", "/value"]
    FIXED_DRIVES_COMMAND = [
        "powershell",
        "-NoProfile",
        "-Command",
        "Get-WmiObject -Class Win32_LogicalDisk "
        "| Where-Object {$_.DriveType -eq 3} "
        "| Select-Object Size,FreeSpace "
        "| ForEach-Object {$_.Size; $_.FreeSpace}",
    ]
    LOGICAL_DISK_COMMAND = ["wmic", "logicaldisk", "get", "size,freespace", "/value"]
    LOGICAL_DISK_SIZE_COMMAND = ["wmic", "logicaldisk", "get", "size", "/value"]

    def cpu_attempts(self) -> list[Attempt[int]]:
        return [self.counter_cpu_usage, self.wmic_cpu_usage]

    def memory_attempts(self) -> list[Attempt[MemoryInfo]]:
        return [self.counter_memory_info, native_memory_info]

    def disk_attempts(self) -> list[Attempt[DiskInfo]]:
        return [self.fixed_drives_disk_info, self.wmic_disk_info]

    def total_ram_attempts(self) -> list[Attempt[int]]:
        return [self.wmic_total_ram]

    def total_disk_attempts(self) -> list[Attempt[int]]:
        # All logical disks, unlike disk_info which only counts fixed drives
        return [self.wmic_total_disk]

    def counter_cpu_usage(self) -> int:
        value = parse_counter_value(self._runner.run(self.CPU_COUNTER_COMMAND))
        return min(max(round_half_up(value), 0), 100)

    def wmic_cpu_usage(self) -> int:
        return parse_load_percentage(self._runner.run(self.CPU_WMIC_COMMAND))

    def counter_memory_info(self) -> MemoryInfo:
        available_mb = parse_counter_value(self._runner.run(self.AVAILABLE_MEMORY_COMMAND))
        total = self.wmic_total_ram()
        return MemoryInfo.from_total_free(total, round(available_mb * MB))

    def fixed_drives_disk_info(self) -> DiskInfo:
        total, free = parse_drive_pairs(self._runner.run(self.FIXED_DRIVES_COMMAND))
        return DiskInfo.from_total_free(total, free)

    def wmic_disk_info(self) -> DiskInfo:
        total, free = parse_wmic_disk(self._runner.run(self.LOGICAL_DISK_COMMAND))
        return DiskInfo.from_total_free(total, free)

    def wmic_total_ram(self) -> int:
        return parse_total_physical_memory(self._runner.run(self.TOTAL_MEMORY_COMMAND))

    def wmic_total_disk(self) -> int:
        return parse_wmic_sizes(self._runner.run(self.LOGICAL_DISK_SIZE_COMMAND))


def detect_platform(runner: CommandRunner | None = None) -> Platform:
    """Pick the strategy for the running OS."""
    if psutil.WINDOWS:
        return WindowsPlatform(runner)
    return PosixPlatform(runner)
