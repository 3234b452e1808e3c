"""
Time Resolver - turns an event's stored time pair into true instants.

Absolute events:
    The stored components already denote a UTC instant. The observer zone
    is accepted but has no effect.

Repeating-local events:
    The six calendar fields (year, month, day, hour, minute, second) are
    read as UTC components, then re-encoded as local wall time in the
    observer zone. 18:00 stays 18:00 in Tokyo and in Denver, at different
    instants. This is a reinterpretation, not an offset shift.

Fallback:
    When the zone cannot be resolved, or a wall time does not exist in the
    zone (spring-forward gap), the stored components are returned as UTC
    with degraded=True. The whole interval falls back together so start and
    end stay in one frame.

resolve() is pure: no I/O beyond debug logging, no shared state.
"""

import logging
from datetime import UTC, datetime
from enum import Enum
from zoneinfo import ZoneInfo

from .models import EventTimeSpec, ObserverZone, ResolvedInterval

logger = logging.getLogger(__name__)


class EventPhase(Enum):
    """Where an event stands relative to a given instant."""

    UPCOMING = "upcoming"
    ACTIVE = "active"
    PAST = "past"


def _localize(components: datetime, tz: ZoneInfo) -> datetime | None:
    """
    Read naive components as wall time in tz and return the UTC instant.

    Ambiguous wall times (repeated hour) take the first occurrence.

    Returns:
        UTC datetime, or None if the wall time does not exist in tz.
    """
    local = components.replace(tzinfo=tz, fold=0)
    roundtrip = local.astimezone(UTC).astimezone(tz)
    if roundtrip.replace(tzinfo=None) != components:
        return None
    return local.astimezone(UTC)


def resolve(spec: EventTimeSpec, zone: ObserverZone | str) -> ResolvedInterval:
    """
    Resolve an event's start/end instants as observed from zone.

    Args:
        spec: Stored event time pair + absolute/local flag
        zone: Observer zone (ObserverZone or IANA identifier)

    Returns:
        ResolvedInterval in UTC. degraded=True if the unconverted fallback
        was used.

    Raises:
        TypeError: If spec is None or not an EventTimeSpec
    """
    if spec is None:
        raise TypeError("resolve() requires an EventTimeSpec, got None")
    if not isinstance(spec, EventTimeSpec):
        raise TypeError(f"resolve() requires an EventTimeSpec, got {type(spec).__name__}")
    zone = ObserverZone.coerce(zone)

    if spec.is_absolute:
        return spec.encoded_interval()

    tz = zone.tzinfo()
    if tz is None:
        logger.debug("Zone %r unresolvable, passing event time through unconverted", zone.identifier)
        return spec.encoded_interval(degraded=True)

    start = _localize(spec.start, tz)
    end = _localize(spec.end, tz)
    if start is None or end is None:
        logger.debug(
            "Wall time %s-%s does not exist in %s, passing through unconverted",
            spec.start.isoformat(),
            spec.end.isoformat(),
            zone.identifier,
        )
        return spec.encoded_interval(degraded=True)

    if spec.is_well_formed and end < start:
        # Resolution must not invert an ordering the input had
        logger.debug("Resolution inverted interval in %s, passing through unconverted", zone.identifier)
        return spec.encoded_interval(degraded=True)

    return ResolvedInterval(start=start, end=end)


def event_phase(
    spec: EventTimeSpec,
    zone: ObserverZone | str,
    at: datetime | None = None,
) -> EventPhase:
    """
    Classify an event as upcoming, active or past for an observer.

    Active is inclusive at both ends: start <= at <= end.

    Args:
        spec: Event time pair
        zone: Observer zone
        at: Instant to test (aware). Defaults to now.
    """
    if at is None:
        at = datetime.now(UTC)
    elif at.tzinfo is None:
        raise TypeError("at must be timezone-aware")

    interval = resolve(spec, zone)
    at_utc = at.astimezone(UTC)
    if at_utc < interval.start_utc:
        return EventPhase.UPCOMING
    if at_utc > interval.end_utc:
        return EventPhase.PAST
    return EventPhase.ACTIVE


def local_wall_times(interval: ResolvedInterval, zone: ObserverZone | str) -> tuple[datetime, datetime]:
    """Naive wall-clock (start, end) of interval as seen in zone."""
    expressed = interval.in_zone(ObserverZone.coerce(zone))
    return (
        expressed.start.replace(tzinfo=None),
        expressed.end.replace(tzinfo=None),
    )
