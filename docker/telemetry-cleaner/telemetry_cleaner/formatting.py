from __future__ import annotations

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal, localcontext


_COUNT_SUFFIXES = ("K", "M", "B", "T")
_BYTE_UNITS = ("KB", "MB", "GB")


def format_count(count: int) -> str:
    """Format a count with an abbreviated suffix, e.g. ``1234 -> "1.2K"``."""
    count = int(count)
    if count < 0:
        raise ValueError("count must be non-negative")
    if count < 1000:
        return str(count)

    # Counts beyond the largest suffix keep every digit, so size precision to the input.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(str(count)) + 2)
        magnitude = 0
        scaled = Decimal(count)
        while scaled >= 1000 * 1000 and magnitude < len(_COUNT_SUFFIXES) - 1:
            scaled /= 1000
            magnitude += 1
        scaled /= 1000

        rounded = scaled.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{rounded}{_COUNT_SUFFIXES[magnitude]}"


def format_bytes(num_bytes: int) -> str:
    """Format a byte count as ``B``, ``KB``, ``MB`` or ``GB``."""
    num_bytes = int(num_bytes)
    if num_bytes < 0:
        raise ValueError("bytes cannot be negative")
    if num_bytes < 1024:
        return f"{num_bytes} B"

    value = num_bytes / 1024.0
    for unit in _BYTE_UNITS[:-1]:
        if value < 1024:
            return f"{value:.2f} {unit}"
        value /= 1024.0
    return f"{value:.2f} {_BYTE_UNITS[-1]}"


def format_uptime(uptime: timedelta) -> str:
    total_seconds = max(0, int(uptime.total_seconds()))
    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    if days:
        return f"{days}d {hours}h {minutes}m"
    if hours:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"
