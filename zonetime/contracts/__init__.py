"""
Contracts Module — Validation for timeline snapshots.

This module provides:
- schema.py: Pydantic models for the export snapshot shape
- invariants.py: Semantic correctness checks on TimelineResult
"""

from .invariants import (
    ALL_INVARIANTS,
    InvariantViolation,
    enforce_invariants,
    enforce_invariants_strict,
)
from .schema import (
    SCHEMA_VERSION,
    GapEntry,
    TimelineSnapshot,
    WindowEntry,
    snapshot_from_result,
)

__all__ = [
    # Schema
    "SCHEMA_VERSION",
    "TimelineSnapshot",
    "WindowEntry",
    "GapEntry",
    "snapshot_from_result",
    # Invariants
    "ALL_INVARIANTS",
    "InvariantViolation",
    "enforce_invariants",
    "enforce_invariants_strict",
]
