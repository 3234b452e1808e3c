"""
Error types for ZoneTime.

The resolver and aligner report degraded or empty outcomes as data, not
exceptions. The classes here cover programming errors and bad external input.
"""


class ZoneTimeError(Exception):
    """Base class for ZoneTime errors."""

    pass


class EventTimeParseError(ZoneTimeError, ValueError):
    """Raised when an event feed timestamp cannot be parsed."""

    def __init__(self, raw: str, reason: str = "unrecognised format"):
        self.raw = raw
        self.reason = reason
        super().__init__(f"Cannot parse event time {raw!r}: {reason}")


class ConfigError(ZoneTimeError, ValueError):
    """Raised when a configuration value is invalid."""

    pass
