"""
Run context management with context-local storage.

A run is one CLI invocation or one caller-scoped batch of timeline builds;
every log line emitted inside it carries the same run ID.
"""

import contextvars
import uuid
from typing import Optional

_run_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "run_id", default=None
)


def get_run_id() -> Optional[str]:
    """Get the current run ID from context."""
    return _run_id_var.get()


def set_run_id(run_id: str) -> contextvars.Token:
    """Set the run ID in context. Returns token for reset."""
    return _run_id_var.set(run_id)


def generate_run_id() -> str:
    return f"run-{uuid.uuid4().hex[:16]}"


class RunContext:
    """
    Context manager for run-scoped operations.

    Usage:
        with RunContext() as ctx:
            result = align(spec, cities, "Europe/Berlin")
            # All logs within this block include ctx.run_id

        # Or with an existing ID:
        with RunContext(run_id="run-abc123"):
            ...
    """

    def __init__(self, run_id: Optional[str] = None):
        self.run_id = run_id or generate_run_id()
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> "RunContext":
        self._token = set_run_id(self.run_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _run_id_var.reset(self._token)
            self._token = None
