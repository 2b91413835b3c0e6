"""
Parsers for platform command output.

Every function here is pure: it takes the raw stdout of one command and
returns numbers, raising ParseError when the text does not have the shape
that command is known to produce.
"""

import re

from syspulse.errors import ParseError

KB = 1024

_LOAD_PERCENTAGE = re.compile(r"LoadPercentage=(\d+)")
_TOTAL_PHYSICAL_MEMORY = re.compile(r"TotalPhysicalMemory=(\d+)")


def _to_int(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ParseError(f"{what} is not an integer: {value!r}") from None


def parse_counter_value(text: str) -> float:
    """Parse the single CookedValue printed by a Get-Counter query."""
    value = text.strip()
    if not value:
        raise ParseError("empty counter output")
    # Counter values follow the system locale
    value = value.splitlines()[-1].strip().replace(",", ".")
    try:
        return float(value)
    except ValueError:
        raise ParseError(f"counter value is not a number: {value!r}") from None


def parse_load_percentage(text: str) -> int:
    """Parse `wmic cpu get loadpercentage /value` output."""
    match = _LOAD_PERCENTAGE.search(text)
    if match is None:
        raise ParseError("no LoadPercentage in output")
    return int(match.group(1))


def parse_total_physical_memory(text: str) -> int:
    """Parse `wmic computersystem get TotalPhysicalMemory /value` output."""
    match = _TOTAL_PHYSICAL_MEMORY.search(text)
    if match is None:
        raise ParseError("no TotalPhysicalMemory in output")
    return int(match.group(1))


def parse_drive_pairs(text: str) -> tuple[int, int]:
    """
    Parse the fixed-drive query that prints Size then FreeSpace per drive.

    Returns (total, free) summed across every drive listed.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines or len(lines) % 2:
        raise ParseError(f"expected Size/FreeSpace pairs, got {len(lines)} lines")

    total = free = 0
    for size, free_space in zip(lines[::2], lines[1::2]):
        total += _to_int(size, "Size")
        free += _to_int(free_space, "FreeSpace")
    return total, free


def parse_wmic_disk(text: str) -> tuple[int, int]:
    """
    Parse `wmic logicaldisk get size,freespace /value` output.

    Drives without media report empty values, which count as 0.
    """
    total = free = 0
    seen = False
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("Size="):
            seen = True
            value = line.partition("=")[2]
            total += _to_int(value, "Size") if value else 0
        elif line.startswith("FreeSpace="):
            value = line.partition("=")[2]
            free += _to_int(value, "FreeSpace") if value else 0
    if not seen:
        raise ParseError("no Size= lines in output")
    return total, free


def parse_wmic_sizes(text: str) -> int:
    """Sum the Size= lines of `wmic logicaldisk get size /value` output."""
    total, _ = parse_wmic_disk(text)
    return total


def parse_df(text: str) -> tuple[int, int, int]:
    """
    Parse `df -kP /` output into (total, used, free) bytes.

    The header is skipped and the last row is read by position:
    [1] total KB, [2] used KB, [3] free KB.
    """
    rows = [line for line in text.splitlines() if line.strip()]
    if len(rows) < 2:
        raise ParseError("df printed no data row")

    fields = rows[-1].split()
    if len(fields) < 4:
        raise ParseError(f"df row has too few fields: {rows[-1]!r}")

    total = _to_int(fields[1], "total KB") * KB
    used = _to_int(fields[2], "used KB") * KB
    free = _to_int(fields[3], "free KB") * KB
    return total, used, free
