"""
Shared pytest fixtures for libsift tests.

Fixtures are organized by concern:
- clustering: artifact graphs and scores for the documented scenarios
- resolution: project/library tables and contexts
- environment: settings isolated from the developer's .env and log directory
"""

from __future__ import annotations

import json

import pytest

from libsift.modules.clustering import ArtifactGraph
from libsift.modules.resolution import RelationClass, ResolutionContext, build_entity_table

# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep settings and run logs inside the test's temp directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APP_LOG_DIR", str(tmp_path / "logs"))
    for var in (
        "CLUSTER_SCORE_WORKERS",
        "CLUSTER_CLUSTER_WORKERS",
        "CLUSTER_TIE_BREAK",
        "RESOLUTION_UNKNOWN_ID_START",
        "APP_LOG_LEVEL",
        "APP_RUN_LOG",
    ):
        monkeypatch.delenv(var, raising=False)


# =============================================================================
# Clustering Fixtures
# =============================================================================


@pytest.fixture
def chain_graph():
    """A{x,y} and B{y,z} share y; C{q} is isolated."""
    return ArtifactGraph.from_mapping(
        [
            ("A", ["x", "y"]),
            ("B", ["y", "z"]),
            ("C", ["q"]),
        ]
    )


@pytest.fixture
def chain_scores():
    return {"A": 0.1, "B": 0.2, "C": 0.05}


@pytest.fixture
def bridge_graph():
    """G{m} and H{n} are joined only through I{m,n}."""
    return ArtifactGraph.from_mapping(
        [
            ("G", ["m"]),
            ("H", ["n"]),
            ("I", ["m", "n"]),
        ]
    )


@pytest.fixture
def bridge_scores():
    return {"G": 0.05, "H": 0.06, "I": 0.5}


# =============================================================================
# Resolution Fixtures
# =============================================================================


@pytest.fixture
def library_index():
    return build_entity_table(
        [("java.lang.String", 500), ("java.util.List", 501)], RelationClass.LIBRARY
    )


@pytest.fixture
def make_context(library_index):
    """Factory fixture for resolution contexts.

    Usage:
        def test_something(make_context):
            context = make_context([("com.foo.Bar", 1)])
    """

    def _make(entities=None, unknown_id_start=None, project_name="demo"):
        if entities is None:
            entities = [("com.foo.Bar", 1), ("com.foo.Bar.baz()", 2)]
        return ResolutionContext.for_project(
            entities,
            library_index,
            project_name=project_name,
            unknown_id_start=unknown_id_start,
        )

    return _make


# =============================================================================
# Input Documents
# =============================================================================


@pytest.fixture
def jar_corpus_file(tmp_path):
    path = tmp_path / "jars.json"
    path.write_text(
        json.dumps(
            {
                "jars": [
                    {"id": "A", "fqns": ["x", "y"]},
                    {"id": "B", "fqns": ["y", "z"]},
                    {"id": "C", "fqns": ["q"]},
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def project_file(tmp_path):
    path = tmp_path / "project.json"
    path.write_text(
        json.dumps(
            {
                "project": "demo",
                "entities": [
                    {"fqn": "com.foo.Bar", "entity_id": 1},
                    {"fqn": "com.foo.Bar.baz()", "entity_id": 2},
                ],
                "relations": [
                    {"kind": "CALLS", "lhs": "com.foo.Bar.baz()", "rhs": "java.lang.String"},
                    {"kind": "USES", "lhs": "com.foo.Bar", "rhs": "com.foo.Generated$1"},
                    {"kind": "EXTENDS", "lhs": "java.lang.String", "rhs": "com.foo.Bar"},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def library_index_file(tmp_path):
    path = tmp_path / "library.json"
    path.write_text(
        json.dumps(
            {
                "entities": [
                    {"fqn": "java.lang.String", "entity_id": 500},
                    {"fqn": "java.util.List", "entity_id": 501},
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


# =============================================================================
# Run Logs
# =============================================================================


@pytest.fixture
def read_run_log():
    """Parse the JSONL file of a RunLogger, optionally keeping one level."""

    def _read(run_logger, level=None):
        path = run_logger.get_log_path()
        if not path.exists():
            return []
        entries = [
            json.loads(line)
            for line in path.read_text(encoding="utf-8").splitlines()
            if line.strip()
        ]
        return [e for e in entries if level is None or e["level"] == level]

    return _read
