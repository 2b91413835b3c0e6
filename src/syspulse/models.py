"""Data models for syspulse."""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TypeVar


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounded up."""
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def percent_of(part: float, whole: float) -> int:
    """Integer percentage of part in whole, 0 when whole is 0."""
    if not whole:
        return 0
    return round_half_up(part / whole * 100)


_U = TypeVar("_U", bound="UsageInfo")


@dataclass(slots=True, frozen=True)
class UsageInfo:
    """Capacity reading for one resource, in bytes."""

    total: int
    free: int
    used: int
    usage: int  # 0 - 100

    @classmethod
    def from_total_free(cls: type[_U], total: int, free: int) -> _U:
        used = max(total - free, 0)
        return cls(total=total, free=free, used=used, usage=percent_of(used, total))

    @classmethod
    def zero(cls: type[_U]) -> _U:
        return cls(total=0, free=0, used=0, usage=0)


@dataclass(slots=True, frozen=True)
class MemoryInfo(UsageInfo):
    """Physical memory reading."""


@dataclass(slots=True, frozen=True)
class DiskInfo(UsageInfo):
    """Reading for the primary volume."""


@dataclass(slots=True, frozen=True)
class SystemSpecs:
    """Capacity-only facts about the host."""

    total_ram: int
    total_disk: int

    @classmethod
    def zero(cls) -> "SystemSpecs":
        return cls(total_ram=0, total_disk=0)


@dataclass(slots=True, frozen=True)
class Snapshot:
    """Immutable point-in-time reading of CPU, memory and disk usage."""

    cpu_usage: int
    memory_usage: int
    disk_usage: int
    timestamp: datetime

    def to_dict(self) -> dict:
        """Wire form of the snapshot."""
        return {
            "cpuUsage": self.cpu_usage,
            "memoryUsage": self.memory_usage,
            "diskUsage": self.disk_usage,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(slots=True, frozen=True)
class DetailedSnapshot(Snapshot):
    """Snapshot augmented with host capacity and derived used bytes."""

    total_ram: int
    total_disk: int
    used_ram: float
    used_disk: float

    def to_dict(self) -> dict:
        data = Snapshot.to_dict(self)
        data.update(
            totalRAM=self.total_ram,
            totalDisk=self.total_disk,
            usedRAM=self.used_ram,
            usedDisk=self.used_disk,
        )
        return data
