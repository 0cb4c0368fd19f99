"""Display formatting for timestamps, clock times and weekdays."""

from __future__ import annotations

from datetime import datetime, timezone


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 backend timestamp; naive values are taken as UTC."""
    try:
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        parsed = datetime.fromisoformat(value)
    except (AttributeError, ValueError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _elapsed_seconds(timestamp: str | datetime, now: datetime | None) -> int | None:
    then = timestamp if isinstance(timestamp, datetime) else parse_timestamp(timestamp)
    if then is None:
        return None
    if then.tzinfo is None:
        then = then.replace(tzinfo=timezone.utc)
    current = now or datetime.now(timezone.utc)
    return max(int((current - then).total_seconds()), 0)


def format_elapsed(seconds: int) -> str:
    """Format elapsed seconds as "Ns ago", "Nm ago" or "Nh ago"."""
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    return f"{seconds // 3600}h ago"


def time_since(timestamp: str | datetime, now: datetime | None = None) -> str:
    """Age of a tracking sample, with no unit larger than hours."""
    seconds = _elapsed_seconds(timestamp, now)
    if seconds is None:
        return "unknown"
    return format_elapsed(seconds)


def time_ago(timestamp: str | datetime, now: datetime | None = None) -> str:
    """Age of a notification: "Just now", then minutes, hours and days."""
    seconds = _elapsed_seconds(timestamp, now)
    if seconds is None:
        return ""
    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def format_clock(value: str) -> str:
    """Render a wall-clock "HH:MM[:SS]" string as "hh:MM AM/PM".

    Unparseable input is returned unchanged.
    """
    for pattern in ("%H:%M:%S", "%H:%M"):
        try:
            parsed = datetime.strptime(value.split(".")[0], pattern)
        except ValueError:
            continue
        return parsed.strftime("%I:%M %p")
    return value


def day_label(day: str) -> str:
    return day[:1].upper() + day[1:]


__all__ = [
    "parse_timestamp",
    "format_elapsed",
    "time_since",
    "time_ago",
    "format_clock",
    "day_label",
]
