"""Corpus adapter - validated input documents from upstream extraction."""

from __future__ import annotations

from .loader import load_jar_corpus, load_library_index, load_project, load_scores
from .models import (
    EntityRecord,
    JarCorpus,
    JarRecord,
    LibraryIndexDocument,
    ProjectExtraction,
    RelationRecord,
)

__all__ = [
    "EntityRecord",
    "JarCorpus",
    "JarRecord",
    "LibraryIndexDocument",
    "ProjectExtraction",
    "RelationRecord",
    "load_jar_corpus",
    "load_library_index",
    "load_project",
    "load_scores",
]
