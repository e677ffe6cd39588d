"""
Clustering module - group artifacts (jars) into logical libraries.

Modules:
- models: Artifact/Name arena graph, Library, LibraryCollection
- scoring: distinctiveness scorers and parallel score computation
- components: connected-component discovery
- identifier: greedy seed-driven library identification
"""

from __future__ import annotations

from .components import Component, iter_components, related_component
from .identifier import (
    cluster_component,
    describe_scores,
    identify_libraries,
    library_records,
    order_by_score,
)
from .models import Artifact, ArtifactGraph, Library, LibraryCollection, Name
from .scoring import (
    DistinctivenessScorer,
    NameEntropyScorer,
    PrecomputedScorer,
    compute_scores,
)

__all__ = [
    "Artifact",
    "ArtifactGraph",
    "Component",
    "DistinctivenessScorer",
    "Library",
    "LibraryCollection",
    "Name",
    "NameEntropyScorer",
    "PrecomputedScorer",
    "cluster_component",
    "compute_scores",
    "describe_scores",
    "identify_libraries",
    "iter_components",
    "library_records",
    "order_by_score",
    "related_component",
]
