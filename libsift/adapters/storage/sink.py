"""
Record sinks - where finished records are handed for persistence.

Durable storage lives outside this package. ``RecordSink`` is the contract a
persistence layer implements; ``InMemorySink`` keeps everything in lists.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from libsift.common.types import LibraryRecords

if TYPE_CHECKING:
    from libsift.modules.resolution import ResolvedRelation

__all__ = ["RecordSink", "InMemorySink"]


class RecordSink(Protocol):
    def add_library_records(self, records: LibraryRecords) -> None: ...

    def add_relations(self, project: str, rows: list[ResolvedRelation]) -> None: ...


class InMemorySink:
    """Collects records in memory."""

    def __init__(self) -> None:
        self.library_records: list[LibraryRecords] = []
        self.relations: dict[str, list[ResolvedRelation]] = {}

    def add_library_records(self, records: LibraryRecords) -> None:
        self.library_records.append(records)

    def add_relations(self, project: str, rows: list[ResolvedRelation]) -> None:
        self.relations.setdefault(project, []).extend(rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "library_records": self.library_records,
            "relations": {
                project: [row.to_dict() for row in rows]
                for project, rows in self.relations.items()
            },
        }
