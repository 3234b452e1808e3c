"""
Tests for the zonetime CLI.
"""

import json

import pytest

from zonetime.cli import EXIT_BAD_INPUT, EXIT_NO_TIMELINE, EXIT_OK, main

LOCAL = ["--start", "2025-06-01T18:00:00", "--end", "2025-06-01T21:00:00"]
ABSOLUTE = ["--start", "2025-06-01T18:00:00.000Z", "--end", "2025-06-01T21:00:00.000Z"]


@pytest.fixture
def run(timeline_config_file, restore_root_logger):
    """Invoke main() with an isolated config file."""
    config = timeline_config_file("observer_zone: UTC\nlogging:\n  level: WARNING\n  json: false\n")

    def _run(*argv):
        return main(["--config", str(config), *argv])

    return _run


class TestResolveCommand:
    def test_local_event(self, run, capsys):
        assert run("resolve", *LOCAL, "--zone", "Asia/Tokyo") == EXIT_OK
        out = capsys.readouterr().out
        assert "start:    2025-06-01T18:00:00+09:00" in out
        assert "local:    2025-06-01 18:00–21:00 JST" in out
        assert "duration: 3h" in out
        assert "note:" not in out

    def test_absolute_event(self, run, capsys):
        assert run("resolve", *ABSOLUTE, "--zone", "Asia/Tokyo") == EXIT_OK
        assert "start:    2025-06-02T03:00:00+09:00" in capsys.readouterr().out

    def test_local_override(self, run, capsys):
        assert run("resolve", *ABSOLUTE, "--local", "--zone", "Asia/Tokyo") == EXIT_OK
        assert "start:    2025-06-01T18:00:00+09:00" in capsys.readouterr().out

    def test_unresolvable_zone_noted(self, run, capsys):
        assert run("resolve", *LOCAL, "--zone", "Not/AZone") == EXIT_OK
        out = capsys.readouterr().out
        assert "start:    2025-06-01T18:00:00+00:00" in out
        assert "note:" in out

    def test_bad_timestamp(self, run, capsys):
        assert run("resolve", "--start", "tomorrow", "--end", "2025-06-01T21:00:00", "--zone", "UTC") == EXIT_BAD_INPUT
        assert "Cannot parse event time" in capsys.readouterr().err


class TestTimelineCommand:
    def test_text_output(self, run, capsys):
        code = run("timeline", *LOCAL, "--city", "Denver=America/Denver", "--city", "Tokyo=Asia/Tokyo")
        assert code == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Observer: UTC (Your Timezone: UTC)"
        assert "Tokyo" in lines[1]
        assert "2025-06-01 09:00–12:00 UTC" in lines[1]
        assert lines[2].strip() == "gap 12h"
        assert "Denver" in lines[3]
        assert "Total span: 18h" in lines
        assert "Active:     6h" in lines

    def test_overlap_shown(self, run, capsys):
        code = run("timeline", *ABSOLUTE, "--city", "Tokyo=Asia/Tokyo", "--city", "Denver=America/Denver")
        assert code == EXIT_OK
        assert "overlap 3h" in capsys.readouterr().out

    def test_overlapping_windows_get_lanes(self, run, capsys):
        run("timeline", *ABSOLUTE, "--city", "Tokyo=Asia/Tokyo", "--city", "Denver=America/Denver")
        lines = capsys.readouterr().out.splitlines()
        assert lines[1].endswith("lane 1/2")
        assert lines[3].endswith("lane 2/2")

    def test_separate_windows_share_lane(self, run, capsys):
        run("timeline", *LOCAL, "--city", "Tokyo=Asia/Tokyo", "--city", "Denver=America/Denver")
        assert "lane" not in capsys.readouterr().out

    def test_observer_option(self, run, capsys):
        run("timeline", *LOCAL, "--city", "Tokyo=Asia/Tokyo", "--observer", "Europe/Berlin")
        assert "2025-06-01 11:00–14:00 CEST" in capsys.readouterr().out

    def test_json_snapshot(self, run, capsys):
        code = run("timeline", *LOCAL, "--city", "Tokyo=Asia/Tokyo", "--city", "Denver=America/Denver", "--json")
        assert code == EXIT_OK
        payload = json.loads(capsys.readouterr().out)
        assert [item["kind"] for item in payload["items"]] == ["window", "gap", "window"]
        assert payload["total_span_seconds"] == 18 * 3600
        assert payload["observer_zone"] == "UTC"

    def test_degraded_marked(self, run, capsys):
        run("timeline", *LOCAL, "--city", "Atlantis=Not/AZone")
        assert "[unconverted]" in capsys.readouterr().out

    def test_exclude_degraded_leaves_nothing(self, run, capsys):
        code = run("timeline", *LOCAL, "--city", "Atlantis=Not/AZone", "--exclude-degraded")
        assert code == EXIT_NO_TIMELINE
        assert "No timeline" in capsys.readouterr().err

    def test_no_cities(self, run):
        assert run("timeline", *LOCAL) == EXIT_NO_TIMELINE

    def test_malformed_city_argument(self, run):
        with pytest.raises(SystemExit) as exc_info:
            run("timeline", *LOCAL, "--city", "Tokyo")
        assert exc_info.value.code == 2


class TestConfigHandling:
    def test_invalid_config(self, timeline_config_file, restore_root_logger, capsys):
        config = timeline_config_file("include_degraded: maybe\n")
        assert main(["--config", str(config), "resolve", *LOCAL, "--zone", "UTC"]) == EXIT_BAD_INPUT
        assert "Config error" in capsys.readouterr().err

    def test_scalar_logging_section(self, timeline_config_file, restore_root_logger, capsys):
        config = timeline_config_file("logging: DEBUG\n")
        assert main(["--config", str(config), "resolve", *LOCAL, "--zone", "UTC"]) == EXIT_BAD_INPUT
        assert "logging must be a mapping" in capsys.readouterr().err

    def test_config_observer_used(self, timeline_config_file, restore_root_logger, capsys):
        config = timeline_config_file("observer_zone: Asia/Tokyo\nlogging:\n  json: false\n")
        main(["--config", str(config), "timeline", *LOCAL, "--city", "Tokyo=Asia/Tokyo"])
        assert "Observer: Asia/Tokyo (Your Timezone: JST)" in capsys.readouterr().out

    def test_config_exclude_degraded(self, timeline_config_file, restore_root_logger):
        config = timeline_config_file("include_degraded: false\nlogging:\n  json: false\n")
        code = main(["--config", str(config), "timeline", *LOCAL, "--city", "Atlantis=Not/AZone"])
        assert code == EXIT_NO_TIMELINE
