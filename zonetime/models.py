"""
Value objects for event time resolution and multi-city timelines.

Objects:
- EventTimeSpec (stored start/end components + absolute/local flag)
- ObserverZone (IANA zone identifier)
- ResolvedInterval (true instants for one spec/zone pair)
- CityEntry (aligner input)
- CityWindow / Gap (timeline items)
- TimelineResult (aligner output)

All objects are immutable and constructed fresh per computation.
Instant arithmetic and ordering always go through UTC: aware datetimes that
share a tzinfo compare and subtract by wall clock, which is wrong across a
DST transition.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

UTC_IDENTIFIER = "UTC"


def _to_components(value: datetime, name: str) -> datetime:
    """Normalize a datetime to naive calendar components (aware values via UTC)."""
    if not isinstance(value, datetime):
        raise TypeError(f"{name} must be a datetime, got {type(value).__name__}")
    if value.tzinfo is not None and value.utcoffset() is not None:
        value = value.astimezone(UTC)
    return value.replace(tzinfo=None, fold=0)


def _require_aware(value: datetime, name: str) -> None:
    if not isinstance(value, datetime):
        raise TypeError(f"{name} must be a datetime, got {type(value).__name__}")
    if value.tzinfo is None or value.utcoffset() is None:
        raise TypeError(f"{name} must be timezone-aware")


# =============================================================================
# EVENT TIME SPEC
# =============================================================================


@dataclass(frozen=True)
class EventTimeSpec:
    """
    When an event occurs, in its canonical stored encoding.

    start/end are calendar components with no zone semantics until
    interpreted. Aware inputs are converted to UTC first, then stripped.

    is_absolute:
        True  -> components are one fixed UTC instant for every observer.
        False -> components are a wall-clock recipe reproduced in each
                 observer's own zone.
    """

    start: datetime
    end: datetime
    is_absolute: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _to_components(self.start, "start"))
        object.__setattr__(self, "end", _to_components(self.end, "end"))
        object.__setattr__(self, "is_absolute", bool(self.is_absolute))

    @property
    def is_well_formed(self) -> bool:
        """end is not before start."""
        return self.end >= self.start

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def encoded_interval(self, degraded: bool = False) -> ResolvedInterval:
        """The stored components read directly as UTC instants."""
        return ResolvedInterval(
            start=self.start.replace(tzinfo=UTC),
            end=self.end.replace(tzinfo=UTC),
            degraded=degraded,
        )


# =============================================================================
# OBSERVER ZONE
# =============================================================================


@dataclass(frozen=True)
class ObserverZone:
    """A geographic time zone. Equal iff identifiers match."""

    identifier: str

    def __post_init__(self) -> None:
        if not isinstance(self.identifier, str):
            raise TypeError(
                f"zone identifier must be a string, got {type(self.identifier).__name__}"
            )

    @classmethod
    def utc(cls) -> ObserverZone:
        return cls(UTC_IDENTIFIER)

    @classmethod
    def coerce(cls, value: ObserverZone | str) -> ObserverZone:
        """Accept either an ObserverZone or a bare identifier."""
        if isinstance(value, ObserverZone):
            return value
        return cls(value)

    def tzinfo(self) -> ZoneInfo | None:
        """
        Zone rules from the platform database.

        Returns:
            ZoneInfo, or None if the identifier cannot be resolved
            (unknown name, malformed key, directory instead of zone file).
        """
        if not self.identifier:
            return None
        try:
            return ZoneInfo(self.identifier)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            return None

    @property
    def is_resolvable(self) -> bool:
        return self.tzinfo() is not None

    def __str__(self) -> str:
        return self.identifier


# =============================================================================
# RESOLVED INTERVAL
# =============================================================================


@dataclass(frozen=True, eq=False)
class ResolvedInterval:
    """
    Start/end as true instants.

    degraded=True marks the unconverted-passthrough fallback: the stored
    components were returned as UTC because the zone could not be applied.
    Gap intervals reuse this type and may have negative duration.
    """

    start: datetime
    end: datetime
    degraded: bool = False

    def __post_init__(self) -> None:
        _require_aware(self.start, "start")
        _require_aware(self.end, "end")

    @property
    def start_utc(self) -> datetime:
        return self.start.astimezone(UTC)

    @property
    def end_utc(self) -> datetime:
        return self.end.astimezone(UTC)

    @property
    def duration(self) -> timedelta:
        """Signed duration, computed on instants."""
        return self.end_utc - self.start_utc

    def in_zone(self, zone: ObserverZone) -> ResolvedInterval:
        """Same instants, expressed in zone (UTC if the zone is unresolvable)."""
        tz = zone.tzinfo() or UTC
        return ResolvedInterval(
            start=self.start.astimezone(tz),
            end=self.end.astimezone(tz),
            degraded=self.degraded,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResolvedInterval):
            return NotImplemented
        return (
            self.start_utc == other.start_utc
            and self.end_utc == other.end_utc
            and self.degraded == other.degraded
        )

    def __hash__(self) -> int:
        return hash((self.start_utc, self.end_utc, self.degraded))


# =============================================================================
# ALIGNER INPUT / OUTPUT
# =============================================================================


@dataclass(frozen=True)
class CityEntry:
    """A candidate city. Duplicate zones are allowed and resolved independently."""

    label: str
    zone: ObserverZone

    def __post_init__(self) -> None:
        object.__setattr__(self, "zone", ObserverZone.coerce(self.zone))

    @classmethod
    def of(cls, label: str, identifier: str) -> CityEntry:
        return cls(label=label, zone=ObserverZone(identifier))


@dataclass(frozen=True)
class CityWindow:
    """One city's event window, expressed in the observer zone."""

    city_label: str
    interval: ResolvedInterval
    zone: ObserverZone
    position: int = 0

    @property
    def start(self) -> datetime:
        return self.interval.start

    @property
    def end(self) -> datetime:
        return self.interval.end

    @property
    def duration(self) -> timedelta:
        return self.interval.duration

    @property
    def degraded(self) -> bool:
        return self.interval.degraded

    @property
    def key(self) -> tuple[str, str, str]:
        return ("window", self.city_label, self.interval.start_utc.isoformat())


@dataclass(frozen=True)
class Gap:
    """
    Time between one window's end and the next window's start.

    Negative duration means the two windows overlap.
    """

    interval: ResolvedInterval
    position: int = 0

    @property
    def duration(self) -> timedelta:
        return self.interval.duration

    @property
    def is_overlap(self) -> bool:
        return self.duration < timedelta(0)

    @property
    def key(self) -> tuple[str, int]:
        return ("gap", self.position)


TimelineItem = Union[CityWindow, Gap]


@dataclass(frozen=True)
class TimelineResult:
    """
    Ordered multi-city schedule.

    items alternates window, gap, ..., window.
    total_span     = last window end - first window start
    active_duration = sum of window durations (overlaps counted twice)
    """

    items: tuple[TimelineItem, ...]
    total_span: timedelta
    active_duration: timedelta
    observer_zone: ObserverZone
    generated_at: datetime

    @property
    def windows(self) -> list[CityWindow]:
        return [item for item in self.items if isinstance(item, CityWindow)]

    @property
    def gaps(self) -> list[Gap]:
        return [item for item in self.items if isinstance(item, Gap)]

    @property
    def overlaps(self) -> list[Gap]:
        return [gap for gap in self.gaps if gap.is_overlap]

    @property
    def degraded_labels(self) -> list[str]:
        return [window.city_label for window in self.windows if window.degraded]
