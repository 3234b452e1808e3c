"""
Tests for timeline text helpers.
"""

from datetime import UTC, datetime, timedelta

import pytest

from zonetime.formatting import (
    duration_string,
    format_interval,
    format_range,
    timezone_label,
    zone_abbreviation,
)
from zonetime.models import ObserverZone, ResolvedInterval


def utc(*args):
    return datetime(*args, tzinfo=UTC)


class TestDurationString:
    @pytest.mark.parametrize(
        "duration,expected",
        [
            (timedelta(hours=2, minutes=30), "2h 30min"),
            (timedelta(hours=2), "2h"),
            (timedelta(minutes=45), "45min"),
            (timedelta(hours=25), "25h"),
            (timedelta(0), "0min"),
            (timedelta(seconds=59), "0min"),
            (timedelta(hours=-3), "0min"),
        ],
    )
    def test_format(self, duration, expected):
        assert duration_string(duration) == expected


class TestZoneAbbreviation:
    def test_tokyo(self):
        assert zone_abbreviation("Asia/Tokyo", utc(2025, 6, 1)) == "JST"

    def test_berlin_summer_and_winter(self):
        assert zone_abbreviation("Europe/Berlin", utc(2025, 6, 1)) == "CEST"
        assert zone_abbreviation("Europe/Berlin", utc(2025, 1, 15)) == "CET"

    def test_denver_summer(self):
        assert zone_abbreviation(ObserverZone("America/Denver"), utc(2025, 6, 1)) == "MDT"

    def test_unresolvable_uses_identifier(self):
        assert zone_abbreviation("Not/AZone", utc(2025, 6, 1)) == "Not/AZone"
        assert zone_abbreviation("", utc(2025, 6, 1)) == "UTC"

    def test_defaults_to_now(self):
        assert zone_abbreviation("UTC") == "UTC"


class TestFormatRange:
    def test_in_tokyo(self):
        assert format_range(utc(2025, 6, 1, 9), utc(2025, 6, 1, 12), "Asia/Tokyo") == "18:00–21:00 JST"

    def test_with_date(self):
        text = format_range(utc(2025, 6, 2, 0), utc(2025, 6, 2, 3), "America/Denver", include_date=True)
        assert text == "2025-06-01 18:00–21:00 MDT"

    def test_unresolvable_zone_shows_utc_clock(self):
        assert format_range(utc(2025, 6, 1, 18), utc(2025, 6, 1, 21), "Not/AZone") == "18:00–21:00 Not/AZone"

    def test_naive_rejected(self):
        with pytest.raises(TypeError):
            format_range(datetime(2025, 6, 1, 18), utc(2025, 6, 1, 21), "UTC")

    def test_format_interval(self):
        interval = ResolvedInterval(utc(2025, 6, 1, 16), utc(2025, 6, 1, 19))
        assert format_interval(interval, "Europe/Berlin") == "18:00–21:00 CEST"


class TestTimezoneLabel:
    def test_label(self):
        assert timezone_label("Europe/Berlin", utc(2025, 6, 1)) == "Your Timezone: CEST"
