"""
Test configuration — ensures repo root is in sys.path + determinism guards.

This allows tests to import zonetime without installation.
Enforces determinism by stripping ZONETIME_* environment overrides so a
developer's shell never changes test outcomes.
"""

import logging
import os
import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from zonetime.models import CityEntry, EventTimeSpec  # noqa: E402

# Fixed generation stamp for reproducible timelines
GENERATED_AT = datetime(2025, 5, 1, 12, 0, tzinfo=UTC)


# =============================================================================
# DETERMINISM GUARD: Strip environment overrides
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Remove ZONETIME_* variables for every test."""
    for key in list(os.environ):
        if key.startswith("ZONETIME_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# SHARED FIXTURES
# =============================================================================


@pytest.fixture
def generated_at():
    return GENERATED_AT


@pytest.fixture
def local_evening():
    """18:00-21:00 on 2025-06-01, repeated in every zone."""
    return EventTimeSpec(
        start=datetime(2025, 6, 1, 18, 0),
        end=datetime(2025, 6, 1, 21, 0),
        is_absolute=False,
    )


@pytest.fixture
def absolute_evening():
    """18:00-21:00 UTC on 2025-06-01, one instant for everyone."""
    return EventTimeSpec(
        start=datetime(2025, 6, 1, 18, 0),
        end=datetime(2025, 6, 1, 21, 0),
        is_absolute=True,
    )


@pytest.fixture
def tokyo():
    return CityEntry.of("Tokyo", "Asia/Tokyo")


@pytest.fixture
def denver():
    return CityEntry.of("Denver", "America/Denver")


@pytest.fixture
def timeline_config_file(tmp_path):
    """Write a timeline.yaml and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "timeline.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_root_logger():
    """Undo configure_logging() changes to the root logger after a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
