"""
Invariants Module — Semantic Correctness Checks for TimelineResult.

Invariants verify MEANING, not just shape:
- windows are non-decreasing by start
- items alternate window/gap and gaps are bounded by adjacent window edges
- gap sign matches overlap
- span and active-duration laws hold exactly
"""

from datetime import timedelta

from ..models import CityWindow, Gap, TimelineResult


class InvariantViolation(Exception):
    """Raised when a timeline invariant is violated."""

    pass


# =============================================================================
# INVARIANT FUNCTIONS
# =============================================================================


def check_items_alternate(result: TimelineResult) -> None:
    """
    INVARIANT: items run window, gap, ..., window with sequential positions.

    Raises:
        InvariantViolation: On a missing, doubled or misplaced item
    """
    if not result.items:
        raise InvariantViolation("TimelineResult has no items; absent timelines must be None")
    if len(result.items) % 2 == 0:
        raise InvariantViolation(f"Even item count {len(result.items)}: leading or trailing gap")

    for index, item in enumerate(result.items):
        expected = CityWindow if index % 2 == 0 else Gap
        if not isinstance(item, expected):
            raise InvariantViolation(
                f"Item {index} is {type(item).__name__}, expected {expected.__name__}"
            )
        if item.position != index:
            raise InvariantViolation(f"Item {index} carries position {item.position}")


def check_windows_positive(result: TimelineResult) -> None:
    """
    INVARIANT: every window has strictly positive duration.

    Raises:
        InvariantViolation: If a zero/negative window survived
    """
    bad = [w.city_label for w in result.windows if w.duration <= timedelta(0)]
    if bad:
        raise InvariantViolation(f"Non-positive windows in timeline: {bad}")


def check_windows_sorted(result: TimelineResult) -> None:
    """
    INVARIANT: windows are non-decreasing by start instant.

    Raises:
        InvariantViolation: If a window starts before its predecessor
    """
    windows = result.windows
    for previous, current in zip(windows, windows[1:], strict=False):
        if current.interval.start_utc < previous.interval.start_utc:
            raise InvariantViolation(
                f"{current.city_label} starts before {previous.city_label}"
            )


def check_gap_bounds(result: TimelineResult) -> None:
    """
    INVARIANT: each gap runs from the previous window's end to the next
    window's start, and is negative iff the next window starts before the
    previous one ends.

    Raises:
        InvariantViolation: On misplaced bounds or a wrong sign
    """
    items = result.items
    for index in range(1, len(items) - 1, 2):
        previous, gap, following = items[index - 1], items[index], items[index + 1]
        if gap.interval.start_utc != previous.interval.end_utc:
            raise InvariantViolation(f"Gap {index} does not start at {previous.city_label} end")
        if gap.interval.end_utc != following.interval.start_utc:
            raise InvariantViolation(f"Gap {index} does not end at {following.city_label} start")
        overlapping = following.interval.start_utc < previous.interval.end_utc
        if gap.is_overlap != overlapping:
            raise InvariantViolation(
                f"Gap {index} sign wrong: is_overlap={gap.is_overlap}, overlapping={overlapping}"
            )


def check_total_span(result: TimelineResult) -> None:
    """
    INVARIANT: total_span == last window end - first window start.

    Raises:
        InvariantViolation: If the stored span differs
    """
    windows = result.windows
    expected = windows[-1].interval.end_utc - windows[0].interval.start_utc
    if result.total_span != expected:
        raise InvariantViolation(f"total_span={result.total_span}, expected {expected}")


def check_active_duration(result: TimelineResult) -> None:
    """
    INVARIANT: active_duration == sum of window durations (no overlap
    subtraction).

    Raises:
        InvariantViolation: If the stored active duration differs
    """
    expected = sum((w.duration for w in result.windows), timedelta(0))
    if result.active_duration != expected:
        raise InvariantViolation(f"active_duration={result.active_duration}, expected {expected}")


# =============================================================================
# INVARIANT REGISTRY
# =============================================================================

ALL_INVARIANTS = [
    check_items_alternate,
    check_windows_positive,
    check_windows_sorted,
    check_gap_bounds,
    check_total_span,
    check_active_duration,
]


def enforce_invariants(result: TimelineResult) -> list[str]:
    """
    Run all invariants. Returns list of violations.

    Structural failure (check_items_alternate) stops the run, since the
    remaining checks assume alternating items.

    Returns:
        List of violation messages. Empty = pass.
    """
    violations = []

    for invariant in ALL_INVARIANTS:
        try:
            invariant(result)
        except InvariantViolation as e:
            violations.append(f"INVARIANT_VIOLATION: {str(e)}")
            if invariant is check_items_alternate:
                break

    return violations


def enforce_invariants_strict(result: TimelineResult) -> None:
    """
    Strict enforcement. Raises on first violation.

    Raises:
        InvariantViolation: If any invariant fails
    """
    for invariant in ALL_INVARIANTS:
        invariant(result)
