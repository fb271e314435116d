"""
Generation run status constants.

Centralized run status definitions used by the orchestrator and the API.
"""

from enum import Enum


class RunStatus(Enum):
    """Enumeration of all generation run states."""

    RUNNING = "running"
    COMPLETE = "complete"
    CANCELLED = "cancelled"
    SUPERSEDED = "superseded"
    FAILED = "failed"

    def is_in_progress(self) -> bool:
        return self is RunStatus.RUNNING


__all__ = ["RunStatus"]
