"""Shared fixtures for syspulse tests."""

from types import SimpleNamespace

import psutil
import pytest

from syspulse.errors import CommandError
from syspulse.models import DiskInfo, MemoryInfo, SystemSpecs
from syspulse.platforms import Platform


class FakeRunner:
    """CommandRunner stand-in answering from a table of canned outputs."""

    def __init__(self, outputs: dict[str, str | Exception] | None = None) -> None:
        self.outputs = outputs or {}
        self.calls: list[list[str]] = []

    def run(self, args) -> str:
        argv = list(args)
        self.calls.append(argv)
        key = " ".join(argv)
        for pattern, output in self.outputs.items():
            if pattern in key:
                if isinstance(output, Exception):
                    raise output
                return output
        raise CommandError(argv, returncode=1, stderr="command not found")


class FakePlatform(Platform):
    """Platform with fixed readings, no commands run."""

    name = "fake"

    def __init__(
        self,
        cpu: int = 25,
        memory: MemoryInfo | None = None,
        disk: DiskInfo | None = None,
        specs: SystemSpecs | None = None,
    ) -> None:
        super().__init__(FakeRunner())
        self.cpu = cpu
        self.memory = memory or MemoryInfo.from_total_free(16 * 1024**3, 4 * 1024**3)
        self.disk = disk or DiskInfo.from_total_free(500 * 1000**3, 300 * 1000**3)
        self.specs = specs or SystemSpecs(total_ram=16 * 1024**3, total_disk=500 * 1000**3)

    def cpu_attempts(self):
        return [lambda: self.cpu]

    def memory_attempts(self):
        return [lambda: self.memory]

    def disk_attempts(self):
        return [lambda: self.disk]

    def total_ram_attempts(self):
        return [lambda: self.specs.total_ram]

    def total_disk_attempts(self):
        return [lambda: self.specs.total_disk]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture
def fake_memory(monkeypatch):
    """Replace psutil.virtual_memory with a settable reading."""

    def install(total: int, available: int) -> None:
        monkeypatch.setattr(
            psutil,
            "virtual_memory",
            lambda: SimpleNamespace(total=total, available=available),
        )

    return install
