"""Tests for record sinks."""

from __future__ import annotations

from libsift.adapters.storage import InMemorySink, RecordSink
from libsift.modules.resolution import RelationClass, ResolvedRelation


class TestInMemorySink:
    """Tests for InMemorySink."""

    def test_satisfies_protocol(self):
        sink: RecordSink = InMemorySink()
        assert sink.library_records == []  # type: ignore[attr-defined]

    def test_collects_library_records(self):
        sink = InMemorySink()
        records = {"libraries": [], "artifacts": [], "names": []}
        sink.add_library_records(records)
        assert sink.library_records == [records]

    def test_relations_grouped_by_project(self):
        sink = InMemorySink()
        row = ResolvedRelation("CALLS", 1, 2, RelationClass.INTERNAL)
        sink.add_relations("p1", [row])
        sink.add_relations("p1", [row])
        sink.add_relations("p2", [])
        assert len(sink.relations["p1"]) == 2
        assert sink.relations["p2"] == []

    def test_to_dict_serializes_rows(self):
        sink = InMemorySink()
        sink.add_relations("p", [ResolvedRelation("USES", 1, 9, RelationClass.UNKNOWN)])
        assert sink.to_dict()["relations"] == {
            "p": [{"kind": "USES", "lhs_id": 1, "rhs_id": 9, "rhs_class": "unknown"}]
        }
