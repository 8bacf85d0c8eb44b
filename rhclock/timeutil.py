"""Helpers for turning server timestamps and durations into display text."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})"
)


def format_time(current_date: str, current_time: int) -> tuple[str, datetime]:
    """Combine the calendar day of an RFC 3339 timestamp with a millisecond offset.

    The offset is counted from local midnight of that day. Returns the text
    ``DD/MM/YYYY HH:MM:SS`` and the naive local datetime it describes.
    Raises ValueError when the timestamp is not valid RFC 3339.
    """
    match = _RFC3339.fullmatch(current_date)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {current_date!r}")
    year, month, day, hour, minute, second = (int(part) for part in match.groups())
    try:
        datetime(year, month, day, hour, minute, second)
    except ValueError as exc:
        raise ValueError(f"invalid RFC 3339 timestamp: {current_date!r}") from exc

    midnight = datetime(year, month, day).astimezone()
    moment_utc = midnight.astimezone(timezone.utc) + timedelta(milliseconds=current_time)
    moment = moment_utc.astimezone().replace(tzinfo=None)
    return moment.strftime("%d/%m/%Y %H:%M:%S"), moment


def format_duration(duration: int) -> str:
    """Render a millisecond count like ``1h2m3.5s``, ``250ms`` or ``0s``."""
    if duration == 0:
        return "0s"
    sign = "-" if duration < 0 else ""
    remaining = abs(duration)
    if remaining < 1000:
        return f"{sign}{remaining}ms"

    millis_of_minute = remaining % 60_000
    seconds, millis = divmod(millis_of_minute, 1000)
    text = str(seconds)
    if millis:
        text += "." + f"{millis:03d}".rstrip("0")
    text += "s"

    minutes = remaining // 60_000
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text