"""
Timeline layout math - presentation-independent geometry.

Used by timeline views to place city windows on a shared time axis:
- assign_lanes: first-fit packing so overlapping windows get separate lanes
- axis_range / axis_padding: visible range around the windows
- tick_marks: axis tick instants on a span-dependent step
- progress: fractional position of an instant within a range

No pixels here; callers map progress and lanes to their own coordinates.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from .models import CityWindow, ObserverZone

_MIN_PADDING = timedelta(minutes=15)
_MAX_PADDING = timedelta(hours=3)
_TICK_TOLERANCE = timedelta(seconds=60)
MAX_TICKS = 80


@dataclass(frozen=True)
class LaneMarker:
    window: CityWindow
    lane: int


@dataclass(frozen=True)
class LaneLayout:
    markers: tuple[LaneMarker, ...]
    lane_count: int


def assign_lanes(windows: Iterable[CityWindow]) -> LaneLayout:
    """
    Pack windows into lanes, first fit.

    Windows are taken in start order (stable). A window reuses the lowest
    lane whose last window ended at or before its start; otherwise it opens
    a new lane. Touching windows share a lane.
    """
    ordered = sorted(windows, key=lambda w: w.interval.start_utc)
    lane_ends: list[datetime] = []
    markers: list[LaneMarker] = []

    for window in ordered:
        start = window.interval.start_utc
        for lane, lane_end in enumerate(lane_ends):
            if start >= lane_end:
                lane_ends[lane] = window.interval.end_utc
                break
        else:
            lane = len(lane_ends)
            lane_ends.append(window.interval.end_utc)
        markers.append(LaneMarker(window=window, lane=lane))

    return LaneLayout(markers=tuple(markers), lane_count=len(lane_ends))


def axis_padding(span: timedelta) -> timedelta:
    """10% of the span, clamped to [15 min, 3 h]."""
    return min(max(span * 0.1, _MIN_PADDING), _MAX_PADDING)


def axis_range(windows: Iterable[CityWindow]) -> tuple[datetime, datetime] | None:
    """
    Padded (start, end) covering all windows, in UTC.

    Returns:
        None if there are no windows or they cover no time.
    """
    windows = list(windows)
    if not windows:
        return None
    earliest = min(w.interval.start_utc for w in windows)
    latest = max(w.interval.end_utc for w in windows)
    if latest <= earliest:
        return None
    padding = axis_padding(latest - earliest)
    return earliest - padding, latest + padding


def _tick_step(span: timedelta) -> timedelta:
    hours = span.total_seconds() / 3600
    if hours < 3:
        step_hours = 0.5
    elif hours < 8:
        step_hours = 1
    elif hours < 16:
        step_hours = 2
    elif hours < 32:
        step_hours = 3
    else:
        step_hours = max(math.ceil(hours / 8.0), 4)
    return timedelta(hours=step_hours)


def tick_marks(
    start: datetime,
    end: datetime,
    zone: ObserverZone | str | None = None,
) -> list[datetime]:
    """
    Axis ticks for [start, end].

    Ticks sit on whole multiples of the step since the Unix epoch and are
    kept if within 60s of the range. The range ends are added when the
    first/last tick lies more than 60s inside. At most MAX_TICKS steps are
    walked.

    Args:
        start, end: Aware range bounds
        zone: Express ticks in this zone (default UTC)
    """
    tz = ObserverZone.coerce(zone).tzinfo() if zone is not None else None
    tz = tz or UTC
    start = start.astimezone(UTC)
    end = end.astimezone(UTC)

    if end <= start:
        return [start.astimezone(tz), end.astimezone(tz)]

    step = _tick_step(end - start)
    step_seconds = step.total_seconds()
    current = math.floor(start.timestamp() / step_seconds) * step_seconds

    ticks: list[datetime] = []
    for _ in range(MAX_TICKS):
        tick = datetime.fromtimestamp(current, UTC)
        if start - _TICK_TOLERANCE <= tick <= end + _TICK_TOLERANCE:
            ticks.append(tick)
        if tick > end + step:
            break
        current += step_seconds

    if not ticks:
        ticks = [start, end]
    if ticks[0] > start + _TICK_TOLERANCE:
        ticks.insert(0, start)
    if ticks[-1] < end - _TICK_TOLERANCE:
        ticks.append(end)
    return [tick.astimezone(tz) for tick in ticks]


def progress(at: datetime, start: datetime, end: datetime) -> float:
    """Fraction of [start, end] elapsed at `at`, clamped to [0, 1]."""
    at, start, end = (value.astimezone(UTC) for value in (at, start, end))
    total = (end - start).total_seconds()
    if total <= 0:
        return 0.0
    clamped = min(max(at, start), end)
    return (clamped - start).total_seconds() / total
