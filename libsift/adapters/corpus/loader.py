"""
Load upstream JSON documents into validated models.

All loaders raise ``pydantic.ValidationError`` on malformed content and
``OSError`` when the file cannot be read.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter

from .models import JarCorpus, LibraryIndexDocument, ProjectExtraction

logger = logging.getLogger(__name__)

_SCORES = TypeAdapter(dict[str, float])


def _read(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def load_jar_corpus(path: str | Path) -> JarCorpus:
    corpus = JarCorpus.model_validate_json(_read(path))
    logger.info("Loaded %d jars from %s", len(corpus.jars), path)
    return corpus


def load_project(path: str | Path) -> ProjectExtraction:
    project = ProjectExtraction.model_validate_json(_read(path))
    logger.info(
        "Loaded project %s: %d entities, %d relations",
        project.project,
        len(project.entities),
        len(project.relations),
    )
    return project


def load_library_index(path: str | Path) -> LibraryIndexDocument:
    index = LibraryIndexDocument.model_validate_json(_read(path))
    logger.info("Loaded %d library entities from %s", len(index.entities), path)
    return index


def load_scores(path: str | Path) -> dict[str, float]:
    """Load precomputed scores: a JSON object mapping artifact id to score."""
    return _SCORES.validate_json(_read(path))
