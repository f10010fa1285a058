"""Durations as integer nanoseconds, and their human-readable form."""

from __future__ import annotations

NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE


def _with_fraction(value: int, precision: int) -> str:
    """Render value / 10**precision, dropping trailing zeros of the fraction."""
    whole, fraction = divmod(value, 10 ** precision)
    digits = f"{fraction:0{precision}d}".rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(nanoseconds: int) -> str:
    """Format a duration in nanoseconds, e.g. "1h2m3.5s", "25ms", "0s".

    Durations under one second use the largest of ns, µs and ms that fits;
    longer ones are written as hours, minutes and fractional seconds.
    """
    nanoseconds = int(nanoseconds)
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    magnitude = abs(nanoseconds)

    if magnitude < MICROSECOND:
        text = f"{magnitude}ns"
    elif magnitude < MILLISECOND:
        text = _with_fraction(magnitude, 3) + "µs"
    elif magnitude < SECOND:
        text = _with_fraction(magnitude, 6) + "ms"
    else:
        total_seconds, sub_second = divmod(magnitude, SECOND)
        text = _with_fraction((total_seconds % 60) * SECOND + sub_second, 9) + "s"
        minutes = total_seconds // 60
        if minutes:
            text = f"{minutes % 60}m{text}"
            hours = minutes // 60
            if hours:
                text = f"{hours}h{text}"
    return sign + text