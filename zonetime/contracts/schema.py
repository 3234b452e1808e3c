"""
Schema Module — Pydantic Models for Timeline Snapshot Shape Validation.

Export consumers (image/document renderers) receive the already-resolved,
already-sorted timeline through this contract and must not re-derive timing.
Instants are ISO 8601 strings in the observer zone; durations are seconds.

Extra fields are FORBIDDEN at the top level.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from ..models import CityWindow, Gap, TimelineResult

# =============================================================================
# CONTRACT VERSION
# =============================================================================

SCHEMA_VERSION = "1.0.0"

# Float tolerance for seconds sums
_TOLERANCE = 1e-6


# =============================================================================
# ITEMS
# =============================================================================


class WindowEntry(BaseModel):
    """One city's event window."""

    kind: Literal["window"] = "window"
    position: int = Field(ge=0)
    city_label: str
    city_zone: str
    start: str
    end: str
    duration_seconds: float = Field(gt=0)
    degraded: bool = False


class GapEntry(BaseModel):
    """Signed gap between adjacent windows. Negative = overlap."""

    kind: Literal["gap"] = "gap"
    position: int = Field(ge=1)
    start: str
    end: str
    duration_seconds: float
    is_overlap: bool

    @model_validator(mode="after")
    def _overlap_matches_sign(self) -> "GapEntry":
        if self.is_overlap != (self.duration_seconds < 0):
            raise ValueError(
                f"is_overlap={self.is_overlap} disagrees with duration {self.duration_seconds}s"
            )
        return self


TimelineEntry = Annotated[WindowEntry | GapEntry, Field(discriminator="kind")]


# =============================================================================
# TOP-LEVEL CONTRACT
# =============================================================================


class TimelineSnapshot(BaseModel):
    """
    Timeline Snapshot Contract: the shape handed to export consumers.

    items alternates window, gap, ..., window and is never empty; an absent
    timeline is represented by not producing a snapshot at all.
    """

    model_config = {"extra": "forbid"}

    schema_version: str = SCHEMA_VERSION
    observer_zone: str
    generated_at: str
    total_span_seconds: float
    active_duration_seconds: float = Field(gt=0)
    items: list[TimelineEntry] = Field(min_length=1)

    @field_validator("items")
    @classmethod
    def _alternates(cls, items: list) -> list:
        if len(items) % 2 == 0:
            raise ValueError("items must start and end with a window")
        for index, item in enumerate(items):
            expected = "window" if index % 2 == 0 else "gap"
            if item.kind != expected:
                raise ValueError(f"item {index} is a {item.kind}, expected {expected}")
            if item.position != index:
                raise ValueError(f"item {index} has position {item.position}")
        return items

    @model_validator(mode="after")
    def _metrics_consistent(self) -> "TimelineSnapshot":
        windows = [item for item in self.items if item.kind == "window"]

        active = sum(w.duration_seconds for w in windows)
        if abs(active - self.active_duration_seconds) > _TOLERANCE:
            raise ValueError(
                f"active_duration_seconds={self.active_duration_seconds} but windows sum to {active}"
            )

        span = (
            datetime.fromisoformat(windows[-1].end) - datetime.fromisoformat(windows[0].start)
        ).total_seconds()
        if abs(span - self.total_span_seconds) > _TOLERANCE:
            raise ValueError(f"total_span_seconds={self.total_span_seconds} but windows span {span}")
        return self

    @property
    def windows(self) -> list[WindowEntry]:
        return [item for item in self.items if isinstance(item, WindowEntry)]

    @property
    def gaps(self) -> list[GapEntry]:
        return [item for item in self.items if isinstance(item, GapEntry)]


def snapshot_from_result(result: TimelineResult) -> TimelineSnapshot:
    """Serialize a TimelineResult verbatim into the export contract."""
    entries: list[WindowEntry | GapEntry] = []
    for item in result.items:
        if isinstance(item, CityWindow):
            entries.append(
                WindowEntry(
                    position=item.position,
                    city_label=item.city_label,
                    city_zone=item.zone.identifier,
                    start=item.start.isoformat(),
                    end=item.end.isoformat(),
                    duration_seconds=item.duration.total_seconds(),
                    degraded=item.degraded,
                )
            )
        elif isinstance(item, Gap):
            entries.append(
                GapEntry(
                    position=item.position,
                    start=item.interval.start.isoformat(),
                    end=item.interval.end.isoformat(),
                    duration_seconds=item.duration.total_seconds(),
                    is_overlap=item.is_overlap,
                )
            )

    return TimelineSnapshot(
        observer_zone=result.observer_zone.identifier,
        generated_at=result.generated_at.isoformat(),
        total_span_seconds=result.total_span.total_seconds(),
        active_duration_seconds=result.active_duration.total_seconds(),
        items=entries,
    )
