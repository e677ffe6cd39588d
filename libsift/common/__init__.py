"""Common utilities shared across libsift modules."""

from __future__ import annotations

from .types import (
    PipelineResult,
    calculate_duration_ms,
    create_result,
    current_timestamp,
)

__all__ = [
    "PipelineResult",
    "calculate_duration_ms",
    "create_result",
    "current_timestamp",
]
