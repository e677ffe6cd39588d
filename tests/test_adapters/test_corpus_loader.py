"""Tests for corpus document models and loaders."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from libsift.adapters.corpus import (
    JarCorpus,
    ProjectExtraction,
    RelationRecord,
    load_jar_corpus,
    load_library_index,
    load_project,
    load_scores,
)
from libsift.modules.resolution import RawRelation


class TestJarCorpus:
    """Tests for JarCorpus validation."""

    def test_pairs_keep_input_order(self):
        corpus = JarCorpus.model_validate(
            {"jars": [{"id": "b", "fqns": ["x"]}, {"id": "a", "fqns": []}]}
        )
        assert corpus.pairs() == [("b", ["x"]), ("a", [])]

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValidationError, match="duplicate jar id"):
            JarCorpus.model_validate({"jars": [{"id": "a"}, {"id": "a"}]})

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            JarCorpus.model_validate({"jars": [{"id": "", "fqns": []}]})

    def test_fqns_default_to_empty(self):
        corpus = JarCorpus.model_validate({"jars": [{"id": "a"}]})
        assert corpus.jars[0].fqns == []


class TestProjectExtraction:
    def test_entity_pairs(self):
        project = ProjectExtraction.model_validate(
            {"project": "p", "entities": [{"fqn": "a.B", "entity_id": 4}]}
        )
        assert project.entity_pairs() == [("a.B", 4)]

    def test_negative_entity_id_rejected(self):
        with pytest.raises(ValidationError):
            ProjectExtraction.model_validate(
                {"project": "p", "entities": [{"fqn": "a.B", "entity_id": -1}]}
            )

    def test_relation_to_raw(self):
        record = RelationRecord(kind="CALLS", lhs="a", rhs="b")
        assert record.to_raw() == RawRelation("CALLS", "a", "b")


class TestLoaders:
    """Tests for the file loaders."""

    def test_load_jar_corpus(self, jar_corpus_file):
        corpus = load_jar_corpus(jar_corpus_file)
        assert [jar.id for jar in corpus.jars] == ["A", "B", "C"]

    def test_load_project(self, project_file):
        project = load_project(project_file)
        assert project.project == "demo"
        assert len(project.entities) == 2
        assert len(project.relations) == 3

    def test_load_library_index(self, library_index_file):
        index = load_library_index(library_index_file)
        assert index.entity_pairs() == [("java.lang.String", 500), ("java.util.List", 501)]

    def test_load_scores(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"A": 0.5, "B": 1}), encoding="utf-8")
        assert load_scores(path) == {"A": 0.5, "B": 1.0}

    def test_missing_file_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            load_jar_corpus(tmp_path / "missing.json")

    def test_malformed_json_raises_validation_error(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_jar_corpus(path)
