"""Storage adapter - record sink contract."""

from __future__ import annotations

from .sink import InMemorySink, RecordSink

__all__ = ["InMemorySink", "RecordSink"]
