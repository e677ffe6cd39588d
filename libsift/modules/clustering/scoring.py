"""
Distinctiveness scoring for artifacts.

A scorer assigns every artifact a non-negative score; lower means the
artifact's names are less likely to recur across unrelated artifacts, which
makes it a better seed for a new library. Scorers are pure and swappable.
Scores are computed for the whole corpus before clustering starts.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from libsift.common.types import ProgressCallback

from .models import Artifact, ArtifactGraph

logger = logging.getLogger(__name__)

__all__ = [
    "DistinctivenessScorer",
    "NameEntropyScorer",
    "PrecomputedScorer",
    "compute_scores",
]


class DistinctivenessScorer(Protocol):
    """Scores one artifact against the corpus it was built from."""

    def score(self, artifact: Artifact) -> float: ...


class NameEntropyScorer:
    """
    Mean number of bits needed to pick one defining artifact per name.

    For each name the artifact defines, ``log2`` of how many artifacts define
    it; the score is the mean over the artifact's names. An artifact whose
    names are all unique to it scores 0.
    """

    def __init__(self, graph: ArtifactGraph):
        self.graph = graph

    def score(self, artifact: Artifact) -> float:
        if not artifact.name_indices:
            return 0.0
        total = 0.0
        for name in self.graph.names_of(artifact):
            total += math.log2(len(name.artifact_indices))
        return total / len(artifact.name_indices)


class PrecomputedScorer:
    """Serves scores computed elsewhere, keyed by artifact id."""

    def __init__(self, scores: Mapping[str, float]):
        self.scores = scores

    def score(self, artifact: Artifact) -> float:
        try:
            return self.scores[artifact.artifact_id]
        except KeyError:
            raise ValueError(f"No score for artifact: {artifact.artifact_id}") from None


def compute_scores(
    graph: ArtifactGraph,
    scorer: DistinctivenessScorer,
    max_workers: int = 1,
    progress_callback: ProgressCallback | None = None,
) -> dict[str, float]:
    """
    Score every artifact in the graph.

    Args:
        graph: Loaded artifact graph
        scorer: Scorer to apply
        max_workers: Worker threads; 1 scores inline
        progress_callback: Optional callback(current, total, artifact_id)

    Returns:
        Mapping artifact_id -> score, complete for every artifact

    Raises:
        ValueError: If the scorer returns a negative or NaN score
    """
    artifacts = graph.artifacts
    total = len(artifacts)

    if max_workers > 1 and total > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            values = pool.map(scorer.score, artifacts)
            scored = list(zip(artifacts, values))
    else:
        scored = [(artifact, scorer.score(artifact)) for artifact in artifacts]

    scores: dict[str, float] = {}
    for current, (artifact, value) in enumerate(scored, start=1):
        if math.isnan(value) or value < 0:
            raise ValueError(f"Invalid score {value!r} for artifact {artifact.artifact_id}")
        scores[artifact.artifact_id] = value
        if progress_callback:
            progress_callback(current, total, artifact.artifact_id)

    logger.debug("Scored %d artifacts", len(scores))
    return scores
