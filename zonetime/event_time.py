"""
Event feed timestamp parsing.

The upstream event feed delivers start/end as strings in one of:
- 2025-06-01T18:00:00.000Z      (zone designator -> absolute event)
- 2025-06-01T18:00:00.000+09:00 (numeric offset  -> absolute event)
- 2025-06-01T18:00:00.000       (no zone         -> repeating-local event)
- 2025-06-01T18:00:00

A zone designator on either end marks the event as absolute. Zoned values
are converted to UTC components; unzoned values keep their components
verbatim.
"""

import re
from datetime import UTC, datetime

from .errors import EventTimeParseError
from .models import EventTimeSpec

TIMESTAMP_REGEX = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(\.\d{1,6})?(Z|[+-]\d{2}:?\d{2})?$"
)


def has_zone_designator(raw: str) -> bool:
    """True if raw ends with Z or a numeric UTC offset."""
    match = TIMESTAMP_REGEX.match(raw.strip())
    return bool(match and match.group(3))


def parse_timestamp(raw: str) -> datetime:
    """
    Parse one feed timestamp.

    Returns:
        Aware UTC datetime if raw carries a zone designator, naive otherwise.

    Raises:
        EventTimeParseError: If raw is not in a supported format
    """
    if not isinstance(raw, str):
        raise TypeError(f"timestamp must be a string, got {type(raw).__name__}")

    match = TIMESTAMP_REGEX.match(raw.strip())
    if not match:
        raise EventTimeParseError(raw)

    base, frac, designator = match.groups()
    text = base + (frac.ljust(7, "0") if frac else "")
    if designator == "Z":
        text += "+00:00"
    elif designator:
        text += designator if ":" in designator else f"{designator[:3]}:{designator[3:]}"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise EventTimeParseError(raw, str(exc)) from exc

    if parsed.tzinfo is not None:
        return parsed.astimezone(UTC)
    return parsed


def parse_event_time(
    raw_start: str,
    raw_end: str,
    is_absolute: bool | None = None,
) -> EventTimeSpec:
    """
    Build an EventTimeSpec from feed strings.

    Args:
        raw_start: Start timestamp string
        raw_end: End timestamp string
        is_absolute: Explicit override. None = detect from zone designators.

    Raises:
        EventTimeParseError: If either timestamp is unparseable
    """
    start = parse_timestamp(raw_start)
    end = parse_timestamp(raw_end)
    if is_absolute is None:
        is_absolute = has_zone_designator(raw_start) or has_zone_designator(raw_end)
    return EventTimeSpec(start=start, end=end, is_absolute=is_absolute)
