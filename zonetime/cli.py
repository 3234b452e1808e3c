#!/usr/bin/env python3
"""ZoneTime CLI

Commands:
- resolve   (one event, one zone)
- timeline  (one event across cities, in an observer zone)

Timestamps use the event feed format, e.g. 2025-06-01T18:00:00 (local,
repeats in every zone) or 2025-06-01T18:00:00.000Z (absolute).
"""

import argparse
import logging
import sys
from pathlib import Path

from .aligner import TimelineAligner
from .config import LOG_LEVELS, load_config
from .contracts import enforce_invariants, snapshot_from_result
from .errors import ConfigError, EventTimeParseError
from .event_time import parse_event_time
from .formatting import duration_string, format_interval, timezone_label
from .layout import assign_lanes
from .models import CityEntry, Gap, ObserverZone, TimelineResult
from .observability import RunContext, configure_logging
from .resolver import event_phase, resolve

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_TIMELINE = 1
EXIT_BAD_INPUT = 2


def city_argument(value: str) -> CityEntry:
    """argparse type for LABEL=ZONE."""
    label, sep, zone = value.partition("=")
    if not sep or not label.strip() or not zone.strip():
        raise argparse.ArgumentTypeError(f"expected LABEL=ZONE, got {value!r}")
    return CityEntry.of(label.strip(), zone.strip())


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="zonetime", description="Event time resolution across time zones")
    p.add_argument("--config", type=Path, default=None, help="Config YAML (default config/timeline.yaml)")
    p.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, default=None, help="Override configured log level"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_event_args(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--start", required=True, help="Event start timestamp")
        parser.add_argument("--end", required=True, help="Event end timestamp")
        kind = parser.add_mutually_exclusive_group()
        kind.add_argument(
            "--absolute", dest="is_absolute", action="store_const", const=True, default=None,
            help="Treat as one fixed UTC instant (default: detect from Z/offset)",
        )
        kind.add_argument(
            "--local", dest="is_absolute", action="store_const", const=False,
            help="Treat as wall time repeated in each zone",
        )

    r = sub.add_parser("resolve", help="Resolve an event for one zone")
    add_event_args(r)
    r.add_argument("--zone", required=True, help="IANA zone, e.g. Asia/Tokyo")

    t = sub.add_parser("timeline", help="Align an event across cities")
    add_event_args(t)
    t.add_argument(
        "--city", dest="cities", type=city_argument, action="append", default=[],
        help="LABEL=ZONE, repeatable; order breaks start-time ties",
    )
    t.add_argument("--observer", default=None, help="Display zone (default from config)")
    t.add_argument("--exclude-degraded", action="store_true", help="Drop windows computed via fallback")
    t.add_argument("--json", action="store_true", help="Print the snapshot contract as JSON")

    return p


def cmd_resolve(args: argparse.Namespace) -> int:
    spec = parse_event_time(args.start, args.end, is_absolute=args.is_absolute)
    zone = ObserverZone(args.zone)
    interval = resolve(spec, zone)
    shown = interval.in_zone(zone)

    print(f"zone:     {zone.identifier}")
    print(f"start:    {shown.start.isoformat()}")
    print(f"end:      {shown.end.isoformat()}")
    print(f"local:    {format_interval(interval, zone, include_date=True)}")
    print(f"duration: {duration_string(interval.duration)}")
    print(f"phase:    {event_phase(spec, zone).value}")
    if interval.degraded:
        print("note:     zone not applied, stored time shown as UTC")
    return EXIT_OK


def render_timeline(result: TimelineResult) -> list[str]:
    """Plain-text lines for a timeline, in its observer zone."""
    observer = result.observer_zone
    windows = result.windows
    width = max(len(w.city_label) for w in windows)
    layout = assign_lanes(windows)
    lanes = {marker.window.position: marker.lane for marker in layout.markers}

    lines = [f"Observer: {observer.identifier} ({timezone_label(observer, windows[0].start)})"]
    for item in result.items:
        if isinstance(item, Gap):
            label = "overlap" if item.is_overlap else "gap"
            lines.append(f"  {'':{width}}  {label} {duration_string(abs(item.duration))}")
            continue
        marker = "  [unconverted]" if item.degraded else ""
        if layout.lane_count > 1:
            marker += f"  lane {lanes[item.position] + 1}/{layout.lane_count}"
        lines.append(
            f"  {item.city_label:{width}}  "
            f"{format_interval(item.interval, observer, include_date=True)}  "
            f"{duration_string(item.duration)}{marker}"
        )
    lines.append(f"Total span: {duration_string(result.total_span)}")
    lines.append(f"Active:     {duration_string(result.active_duration)}")
    return lines


def cmd_timeline(args: argparse.Namespace, aligner: TimelineAligner) -> int:
    spec = parse_event_time(args.start, args.end, is_absolute=args.is_absolute)
    result = aligner.align(
        spec,
        args.cities,
        args.observer,
        include_degraded=False if args.exclude_degraded else None,
    )
    if result is None:
        print("No timeline: no city produced a usable window", file=sys.stderr)
        return EXIT_NO_TIMELINE

    for violation in enforce_invariants(result):
        logger.error(violation)

    if args.json:
        print(snapshot_from_result(result).model_dump_json(indent=2))
    else:
        print("\n".join(render_timeline(result)))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    configure_logging(args.log_level or config.log_level, config.json_logs)

    with RunContext() as ctx:
        logger.debug("zonetime %s (run %s)", args.cmd, ctx.run_id)
        try:
            if args.cmd == "resolve":
                return cmd_resolve(args)
            if args.cmd == "timeline":
                return cmd_timeline(args, TimelineAligner(config))
        except EventTimeParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_BAD_INPUT

    return EXIT_BAD_INPUT


if __name__ == "__main__":
    sys.exit(main())
