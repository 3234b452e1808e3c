"""
Timeline Aligner - multi-city schedule for one event.

For each city the event is resolved in the city's own zone, then the same
instants are re-expressed in one observer zone. Windows are sorted by start
(stable: input order on ties) and the signed gap between each adjacent pair
is synthesised:

    window, gap, window, gap, ..., window

A negative gap is an overlap, never clamped. It is a real scheduling
conflict the player needs to see.

Metrics:
- total_span: last window end - first window start
- active_duration: sum of window durations, overlaps counted twice
  ("total engagement cost" if each window is played separately)

No usable window -> None. That is a normal outcome ("nothing to show"),
not an error. Empty city list and "every city dropped" are not
distinguished.
"""

import logging
from collections.abc import Iterable
from contextlib import nullcontext
from datetime import UTC, datetime, timedelta

from .config import TimelineConfig
from .models import (
    CityEntry,
    CityWindow,
    EventTimeSpec,
    Gap,
    ObserverZone,
    ResolvedInterval,
    TimelineItem,
    TimelineResult,
)
from .observability.context import RunContext, get_run_id
from .resolver import resolve

logger = logging.getLogger(__name__)


def _coerce_entry(entry: CityEntry | tuple[str, str]) -> CityEntry:
    if isinstance(entry, CityEntry):
        return entry
    label, zone = entry
    return CityEntry(label=label, zone=ObserverZone.coerce(zone))


class TimelineAligner:
    """
    Builds TimelineResult values.

    Stateless apart from its configuration: concurrent calls with different
    inputs never interfere.
    """

    def __init__(self, config: TimelineConfig | None = None):
        self.config = config or TimelineConfig()

    def align(
        self,
        spec: EventTimeSpec,
        cities: Iterable[CityEntry],
        observer_zone: ObserverZone | str | None = None,
        *,
        include_degraded: bool | None = None,
        generated_at: datetime | None = None,
    ) -> TimelineResult | None:
        """
        Align one event across cities, expressed in observer_zone.

        Args:
            spec: Event time pair
            cities: Candidate cities (order is the tie-break order)
            observer_zone: Display frame. Defaults to config.observer_zone.
            include_degraded: Keep fallback-resolved windows. Defaults to
                config.include_degraded.
            generated_at: Stamp for the result. Defaults to now (UTC).

        Returns:
            TimelineResult, or None if no city produced a positive window.

        Raises:
            TypeError: If spec is None
        """
        if spec is None:
            raise TypeError("align() requires an EventTimeSpec, got None")
        if observer_zone is None:
            observer_zone = self.config.observer_zone
        observer = ObserverZone.coerce(observer_zone)
        if include_degraded is None:
            include_degraded = self.config.include_degraded
        if generated_at is None:
            generated_at = datetime.now(UTC)
        elif generated_at.tzinfo is None:
            raise TypeError("generated_at must be timezone-aware")

        # Reuse the caller's run id; standalone calls get their own
        scope = nullcontext() if get_run_id() else RunContext()
        with scope:
            return self._build(spec, cities, observer, include_degraded, generated_at)

    def _build(
        self,
        spec: EventTimeSpec,
        cities: Iterable[CityEntry],
        observer: ObserverZone,
        include_degraded: bool,
        generated_at: datetime,
    ) -> TimelineResult | None:
        survivors: list[tuple[CityEntry, ResolvedInterval]] = []
        for raw_entry in cities:
            entry = _coerce_entry(raw_entry)
            interval = resolve(spec, entry.zone)

            if interval.duration <= timedelta(0):
                logger.debug("Dropping %s: window duration %s is not positive", entry.label, interval.duration)
                continue
            if interval.degraded:
                if not include_degraded:
                    logger.debug("Dropping %s: degraded window excluded", entry.label)
                    continue
                logger.warning(
                    "Window for %s (%s) computed via unconverted fallback",
                    entry.label,
                    entry.zone.identifier,
                )
            survivors.append((entry, interval.in_zone(observer)))

        if not survivors:
            logger.info("No usable city windows, timeline not produced")
            return None

        # list.sort is stable: equal starts keep input order
        survivors.sort(key=lambda pair: pair[1].start_utc)

        items: list[TimelineItem] = []
        active_duration = timedelta(0)
        for index, (entry, interval) in enumerate(survivors):
            window = CityWindow(
                city_label=entry.label,
                interval=interval,
                zone=entry.zone,
                position=len(items),
            )
            items.append(window)
            active_duration += window.duration

            if index < len(survivors) - 1:
                next_interval = survivors[index + 1][1]
                gap = Gap(
                    interval=ResolvedInterval(start=interval.end, end=next_interval.start),
                    position=len(items),
                )
                items.append(gap)

        first = survivors[0][1]
        last = survivors[-1][1]
        total_span = last.end_utc - first.start_utc

        result = TimelineResult(
            items=tuple(items),
            total_span=total_span,
            active_duration=active_duration,
            observer_zone=observer,
            generated_at=generated_at,
        )
        logger.info(
            "Timeline built: %d windows, %d overlaps, span %s, active %s (%s)",
            len(survivors),
            len(result.overlaps),
            total_span,
            active_duration,
            observer.identifier,
        )
        return result


def align(
    spec: EventTimeSpec,
    cities: Iterable[CityEntry],
    observer_zone: ObserverZone | str,
    *,
    include_degraded: bool = True,
    generated_at: datetime | None = None,
) -> TimelineResult | None:
    """
    Align one event across cities with default configuration.

    Usage:
        spec = EventTimeSpec(datetime(2025, 6, 1, 18), datetime(2025, 6, 1, 21), is_absolute=False)
        result = align(spec, [CityEntry.of("Tokyo", "Asia/Tokyo")], "Europe/Berlin")
        if result is None:
            ...  # nothing to show
    """
    return TimelineAligner().align(
        spec,
        cities,
        observer_zone,
        include_degraded=include_degraded,
        generated_at=generated_at,
    )
