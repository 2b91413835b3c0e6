"""Human-readable rendering of sampler numbers."""

import math
from decimal import ROUND_HALF_UP, Decimal

UNITS = ["Bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]

K = 1024


def format_bytes(size: float) -> str:
    """
    Format a byte count with a binary unit, e.g. 1500 -> "1.46 KB".

    The unit is floor(log(size) / log(1024)), clamped to the unit table; the
    value is rounded half-up to two decimals with trailing zeros dropped.
    """
    if size == 0:
        return "0 Bytes"

    # log2 keeps exact powers of 1024 on their unit boundary
    index = math.floor(math.log2(size) / math.log2(K))
    index = min(max(index, 0), len(UNITS) - 1)

    value = Decimal(size / K**index).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {UNITS[index]}"


def usage_level(percent: float) -> str:
    """Severity bucket for a usage percentage."""
    if percent < 60:
        return "ok"
    if percent < 80:
        return "warning"
    return "critical"
