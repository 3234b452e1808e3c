"""
Observability module: structured logging and run context.
"""

from .context import RunContext, generate_run_id, get_run_id, set_run_id
from .logging import HumanFormatter, JSONFormatter, configure_logging, get_logger

__all__ = [
    "RunContext",
    "generate_run_id",
    "get_run_id",
    "set_run_id",
    "JSONFormatter",
    "HumanFormatter",
    "configure_logging",
    "get_logger",
]
