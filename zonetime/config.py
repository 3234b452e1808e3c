"""
Centralized configuration for ZoneTime.

Loaded from config/timeline.yaml. Falls back to defaults if the file is
missing or unreadable. Override via environment variables where marked.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from . import paths
from .errors import ConfigError

logger = logging.getLogger(__name__)

# =============================================================================
# DEFAULTS
# =============================================================================

_DEFAULT_OBSERVER_ZONE = "UTC"
_DEFAULT_INCLUDE_DEGRADED = True
_DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_OBSERVER_ZONE = "ZONETIME_OBSERVER_ZONE"
"""Observer zone used when a caller does not pass one."""

ENV_INCLUDE_DEGRADED = "ZONETIME_INCLUDE_DEGRADED"
"""Keep windows computed through the unconverted fallback (true/false)."""

ENV_LOG_LEVEL = "ZONETIME_LOG_LEVEL"
ENV_LOG_JSON = "ZONETIME_LOG_JSON"

_TRUE_VALUES = frozenset(["1", "true", "yes", "on"])
_FALSE_VALUES = frozenset(["0", "false", "no", "off"])


@dataclass(frozen=True)
class TimelineConfig:
    """Resolved configuration for the resolver, aligner and CLI."""

    observer_zone: str = _DEFAULT_OBSERVER_ZONE
    include_degraded: bool = _DEFAULT_INCLUDE_DEGRADED
    log_level: str = _DEFAULT_LOG_LEVEL
    json_logs: bool | None = None  # None = auto-detect from TTY

    def __post_init__(self) -> None:
        if not isinstance(self.observer_zone, str) or not self.observer_zone:
            raise ConfigError(f"observer_zone must be a non-empty string: {self.observer_zone!r}")
        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level!r}")
        object.__setattr__(self, "log_level", level)


def parse_bool(value: Any, name: str) -> bool:
    """Parse a YAML/env boolean. Raises ConfigError on anything else."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _load_yaml(config_path: Path) -> dict:
    """Load YAML config, return empty dict on failure."""
    if not config_path.exists():
        logger.warning("Timeline config not found at %s, using defaults", config_path)
        return {}
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as exc:
        logger.error("Failed to load timeline config: %s", exc)
        return {}
    if not isinstance(data, dict):
        logger.error("Timeline config at %s is not a mapping, using defaults", config_path)
        return {}
    return data


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> TimelineConfig:
    """
    Build the effective configuration.

    Resolution order (later wins):
    1. Built-in defaults
    2. config/timeline.yaml (or ZONETIME_CONFIG)
    3. ZONETIME_* environment variables

    Raises:
        ConfigError: If a value is present but invalid
    """
    if environ is None:
        environ = os.environ
    if config_path is None:
        config_path = paths.config_path()

    data = _load_yaml(config_path)
    log_section = data.get("logging") or {}
    if not isinstance(log_section, dict):
        raise ConfigError(f"logging must be a mapping, got {log_section!r}")

    observer_zone = data.get("observer_zone", _DEFAULT_OBSERVER_ZONE)
    include_degraded = data.get("include_degraded", _DEFAULT_INCLUDE_DEGRADED)
    log_level = log_section.get("level", _DEFAULT_LOG_LEVEL)
    json_logs = log_section.get("json")

    if environ.get(ENV_OBSERVER_ZONE):
        observer_zone = environ[ENV_OBSERVER_ZONE]
    if environ.get(ENV_INCLUDE_DEGRADED):
        include_degraded = environ[ENV_INCLUDE_DEGRADED]
    if environ.get(ENV_LOG_LEVEL):
        log_level = environ[ENV_LOG_LEVEL]
    if environ.get(ENV_LOG_JSON):
        json_logs = environ[ENV_LOG_JSON]

    return TimelineConfig(
        observer_zone=observer_zone,
        include_degraded=parse_bool(include_degraded, "include_degraded"),
        log_level=log_level,
        json_logs=None if json_logs is None else parse_bool(json_logs, "logging.json"),
    )
