"""
ZoneTime - event time resolution and multi-city timelines.

Resolve a game event's stored time pair into true instants for any zone,
and align one event across several cities on a single observer axis.
"""

from .aligner import TimelineAligner, align
from .config import TimelineConfig, load_config
from .errors import ConfigError, EventTimeParseError, ZoneTimeError
from .event_time import parse_event_time, parse_timestamp
from .formatting import duration_string, format_interval, format_range, timezone_label, zone_abbreviation
from .layout import LaneLayout, LaneMarker, assign_lanes, axis_padding, axis_range, progress, tick_marks
from .models import (
    CityEntry,
    CityWindow,
    EventTimeSpec,
    Gap,
    ObserverZone,
    ResolvedInterval,
    TimelineResult,
)
from .resolver import EventPhase, event_phase, local_wall_times, resolve

__version__ = "0.1.0"

__all__ = [
    # Models
    "EventTimeSpec",
    "ObserverZone",
    "ResolvedInterval",
    "CityEntry",
    "CityWindow",
    "Gap",
    "TimelineResult",
    # Operations
    "resolve",
    "event_phase",
    "EventPhase",
    "local_wall_times",
    "align",
    "TimelineAligner",
    "parse_event_time",
    "parse_timestamp",
    # Presentation
    "duration_string",
    "format_interval",
    "format_range",
    "timezone_label",
    "zone_abbreviation",
    "LaneLayout",
    "LaneMarker",
    "assign_lanes",
    "axis_padding",
    "axis_range",
    "tick_marks",
    "progress",
    # Config / errors
    "TimelineConfig",
    "load_config",
    "ZoneTimeError",
    "EventTimeParseError",
    "ConfigError",
]
