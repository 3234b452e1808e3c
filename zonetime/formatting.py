"""
Text helpers for timeline consumers.

Every function takes its zone explicitly and builds its output locally;
nothing here holds a shared formatter between calls.
"""

from datetime import UTC, datetime, timedelta

from .models import ObserverZone, ResolvedInterval

TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%Y-%m-%d"
RANGE_SEPARATOR = "–"  # en dash


def duration_string(duration: timedelta) -> str:
    """
    Compact duration: "2h 30min", "2h" or "45min".

    Negative durations clamp to "0min"; pass abs(gap.duration) for overlaps.
    """
    total_seconds = max(0, int(duration.total_seconds()))
    hours, remainder = divmod(total_seconds, 3600)
    minutes = remainder // 60

    if hours > 0 and minutes > 0:
        return f"{hours}h {minutes}min"
    if hours > 0:
        return f"{hours}h"
    return f"{minutes}min"


def _expressed(at: datetime, zone: ObserverZone) -> datetime:
    if at.tzinfo is None:
        raise TypeError("datetime must be timezone-aware")
    return at.astimezone(zone.tzinfo() or UTC)


def zone_abbreviation(zone: ObserverZone | str, at: datetime | None = None) -> str:
    """
    Zone abbreviation in effect at an instant ("JST", "CEST").

    Falls back to the identifier for unresolvable zones.
    """
    zone = ObserverZone.coerce(zone)
    tz = zone.tzinfo()
    if tz is None:
        return zone.identifier or "UTC"
    if at is None:
        at = datetime.now(UTC)
    return _expressed(at, zone).tzname() or zone.identifier


def format_range(
    start: datetime,
    end: datetime,
    zone: ObserverZone | str,
    include_date: bool = False,
) -> str:
    """
    Range in zone, e.g. "18:00–21:00 JST" or "2025-06-01 18:00–21:00 JST".

    The abbreviation is taken at start.
    """
    zone = ObserverZone.coerce(zone)
    local_start = _expressed(start, zone)
    local_end = _expressed(end, zone)
    text = (
        f"{local_start.strftime(TIME_FORMAT)}{RANGE_SEPARATOR}"
        f"{local_end.strftime(TIME_FORMAT)} {zone_abbreviation(zone, start)}"
    )
    if include_date:
        return f"{local_start.strftime(DATE_FORMAT)} {text}"
    return text


def format_interval(interval: ResolvedInterval, zone: ObserverZone | str, include_date: bool = False) -> str:
    return format_range(interval.start, interval.end, zone, include_date=include_date)


def timezone_label(zone: ObserverZone | str, at: datetime | None = None) -> str:
    """Observer frame caption, e.g. "Your Timezone: CEST"."""
    return f"Your Timezone: {zone_abbreviation(zone, at)}"
