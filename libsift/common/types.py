"""
Shared type definitions for pipeline modules.

This module provides TypedDicts and Protocols that keep the clustering and
resolution services on consistent interfaces.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any, Protocol, TypedDict

# =============================================================================
# Base Result Types
# =============================================================================


class BaseResult(TypedDict, total=False):
    """
    Base result structure returned by all service functions.

    All service functions should return this structure for consistency.
    """

    success: bool  # Required: Whether the operation succeeded
    errors: list[str]  # Required: List of error messages
    stats: dict[str, Any]  # Required: Statistics about the operation


class PipelineResult(BaseResult, total=False):
    """
    Unified result structure for the clustering and resolution stages.
    """

    warnings: list[str]  # Non-fatal diagnostics (e.g. rejected relations)
    stage: str  # Pipeline stage: 'clustering', 'resolution'
    timestamp: str  # ISO timestamp when completed
    duration_ms: int  # Duration in milliseconds


class LibraryRecord(TypedDict):
    """A library row handed to the record sink."""

    library_id: int
    artifact_count: int
    name_count: int


class LibraryArtifactRecord(TypedDict):
    """Membership of one artifact in one library."""

    library_id: int
    artifact_id: str


class LibraryNameRecord(TypedDict):
    """A seed name claimed by a library."""

    library_id: int
    fqn: str


class LibraryRecords(TypedDict):
    """All rows describing one clustering run."""

    libraries: list[LibraryRecord]
    artifacts: list[LibraryArtifactRecord]
    names: list[LibraryNameRecord]


# =============================================================================
# Utility Protocols
# =============================================================================


class StepContextProtocol(Protocol):
    """Protocol for step context returned by run loggers."""

    items_processed: int
    items_created: int
    items_failed: int

    def complete(self, message: str = "") -> None:
        """Mark the step as complete."""
        ...

    def error(self, error: str, message: str = "") -> None:
        """Mark the step as failed with an error message."""
        ...


class RunLoggerProtocol(Protocol):
    """Protocol for run loggers."""

    def phase_start(self, phase: str, message: str = "") -> None:
        """Log the start of a phase."""
        ...

    def phase_complete(
        self, phase: str, message: str = "", stats: dict[str, Any] | None = None
    ) -> None:
        """Log the completion of a phase."""
        ...

    def phase_error(self, phase: str, error: str, message: str = "") -> None:
        """Log a phase error."""
        ...

    def step_start(self, step: str, message: str = "") -> StepContextProtocol:
        """Log the start of a step and return a context manager."""
        ...


class ProgressReporter(Protocol):
    """Protocol for visual progress feedback (CLI progress bars)."""

    def start_phase(self, name: str, total_steps: int) -> None: ...

    def start_step(self, name: str, total_items: int | None = None) -> None: ...

    def update(self, current: int | None = None, message: str = "") -> None: ...

    def advance(self, amount: int = 1) -> None: ...

    def complete_step(self, message: str = "") -> None: ...

    def complete_phase(self, message: str = "") -> None: ...

    def log(self, message: str, level: str = "info") -> None: ...


ProgressCallback = Callable[[int, int, str], None]


# =============================================================================
# Helpers
# =============================================================================


def current_timestamp() -> str:
    """Return the current time as an ISO string."""
    return datetime.now().isoformat()


def calculate_duration_ms(start: datetime) -> int:
    """Milliseconds elapsed since ``start``."""
    return int((datetime.now() - start).total_seconds() * 1000)


def create_result(
    success: bool,
    errors: list[str] | None = None,
    stats: dict[str, Any] | None = None,
    warnings: list[str] | None = None,
    stage: str | None = None,
    start: datetime | None = None,
) -> PipelineResult:
    """
    Build a PipelineResult dict.

    Args:
        success: Whether the operation succeeded
        errors: Error messages
        stats: Operation statistics
        warnings: Non-fatal diagnostics
        stage: Pipeline stage name
        start: Start time, used to fill ``duration_ms``

    Returns:
        PipelineResult with timestamp set
    """
    result: PipelineResult = {
        "success": success,
        "errors": errors or [],
        "warnings": warnings or [],
        "stats": stats or {},
        "timestamp": current_timestamp(),
    }
    if stage:
        result["stage"] = stage
    if start is not None:
        result["duration_ms"] = calculate_duration_ms(start)
    return result


__all__ = [
    "BaseResult",
    "PipelineResult",
    "LibraryRecord",
    "LibraryArtifactRecord",
    "LibraryNameRecord",
    "LibraryRecords",
    "StepContextProtocol",
    "RunLoggerProtocol",
    "ProgressReporter",
    "ProgressCallback",
    "current_timestamp",
    "calculate_duration_ms",
    "create_result",
]
