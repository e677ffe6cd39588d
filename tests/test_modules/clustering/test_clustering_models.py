"""Tests for the artifact/name arena and library containers."""

from __future__ import annotations

import pytest

from libsift.modules.clustering import (
    ArtifactGraph,
    Library,
    LibraryCollection,
    identify_libraries,
)


class TestArtifactGraph:
    """Tests for ArtifactGraph construction."""

    def test_names_are_shared_between_artifacts(self, chain_graph):
        """A name defined by two artifacts should exist once."""
        y = chain_graph.get_name("y")
        assert [a.artifact_id for a in chain_graph.artifacts_of(y)] == ["A", "B"]
        assert len(chain_graph.names) == 4

    def test_back_references_are_symmetric(self, chain_graph):
        """An artifact lists a name iff the name lists the artifact."""
        for artifact in chain_graph:
            for name in chain_graph.names_of(artifact):
                assert artifact in chain_graph.artifacts_of(name)
        for name in chain_graph.names:
            for artifact in chain_graph.artifacts_of(name):
                assert name in chain_graph.names_of(artifact)

    def test_duplicate_fqns_in_one_artifact_are_ignored(self):
        """Repeating a name inside one artifact should not duplicate handles."""
        graph = ArtifactGraph.from_mapping([("A", ["x", "x", "y"])])
        artifact = graph.get_artifact("A")
        assert [n.fqn for n in graph.names_of(artifact)] == ["x", "y"]
        assert graph.get_name("x").artifact_indices == [0]

    def test_widely_shared_name(self):
        """Every jar defining a name is listed once, in input order."""
        jars = [(f"jar-{i}", iter(["shaded.Util", "shaded.Util", f"own.C{i}"])) for i in range(3000)]
        graph = ArtifactGraph.from_mapping(jars)

        shared = graph.get_name("shaded.Util")
        assert shared.artifact_indices == list(range(3000))
        assert [n.fqn for n in graph.names_of(graph.get_artifact("jar-42"))] == [
            "shaded.Util",
            "own.C42",
        ]

    def test_duplicate_artifact_id_raises(self):
        """Artifact ids must be unique."""
        graph = ArtifactGraph()
        graph.add_artifact("A", ["x"])
        with pytest.raises(ValueError, match="Duplicate artifact id"):
            graph.add_artifact("A", ["y"])

    def test_artifact_without_names(self):
        """An artifact may define nothing."""
        graph = ArtifactGraph.from_mapping([("empty", [])])
        assert graph.names_of(graph.get_artifact("empty")) == []
        assert len(graph) == 1


class TestLibrary:
    """Tests for Library accumulation."""

    def test_members_and_seeds_are_deduplicated(self, chain_graph):
        library = Library()
        a = chain_graph.get_artifact("A")
        library.add_artifact(a)
        library.add_artifact(a)
        library.add_name(chain_graph.get_name("x"))
        library.add_name(chain_graph.get_name("x"))
        assert library.artifact_ids == ["A"]
        assert library.seed_fqns == ["x"]
        assert library.has_artifact(a)
        assert library.has_name(chain_graph.get_name("x"))
        assert not library.has_name(chain_graph.get_name("y"))


class TestLibraryCollection:
    """Tests for LibraryCollection."""

    def test_assigns_sequential_ids(self):
        collection = LibraryCollection([Library(), Library(), Library()])
        assert [lib.library_id for lib in collection] == [1, 2, 3]
        assert len(collection) == 3

    def test_libraries_is_a_tuple(self):
        collection = LibraryCollection([Library()])
        assert isinstance(collection.libraries, tuple)

    def test_to_dict(self, chain_graph):
        library = Library()
        library.add_artifact(chain_graph.get_artifact("C"))
        library.add_name(chain_graph.get_name("q"))
        collection = LibraryCollection([library])
        assert collection.to_dict() == {
            "libraries": [{"library_id": 1, "artifacts": ["C"], "seeds": ["q"]}]
        }

    def test_shared_artifact_count(self, bridge_graph, bridge_scores):
        """I joins both libraries of the bridge; G and H belong to one each."""
        collection = identify_libraries(bridge_graph, bridge_scores)
        counts = collection.membership_counts()

        assert counts[bridge_graph.get_artifact("I").index] == 2
        assert counts[bridge_graph.get_artifact("G").index] == 1
        assert collection.shared_artifact_count() == 1

    def test_shared_artifact_count_without_sharing(self, chain_graph, chain_scores):
        assert identify_libraries(chain_graph, chain_scores).shared_artifact_count() == 0

    def test_shared_artifact_count_empty(self):
        assert LibraryCollection([]).shared_artifact_count() == 0
