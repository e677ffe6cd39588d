"""
Library identification - greedy clustering of artifacts into libraries.

Each connected component is clustered on its own. Artifacts are taken in
ascending score order; the first artifact of a component, and every later
artifact whose names no library has claimed yet, seeds a new library. An
artifact whose names are claimed by exactly one library joins it and extends
its claim. An artifact touching several libraries joins all of them without
claiming anything, and the libraries stay separate.

Usage:
    from libsift.modules.clustering import ArtifactGraph, NameEntropyScorer
    from libsift.modules.clustering import compute_scores, identify_libraries

    graph = ArtifactGraph.from_mapping([("a.jar", ["x", "y"]), ("b.jar", ["y"])])
    scores = compute_scores(graph, NameEntropyScorer(graph))
    libraries = identify_libraries(graph, scores)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Literal

from libsift.common.types import LibraryRecords, ProgressCallback

from .components import Component, iter_components
from .models import Artifact, ArtifactGraph, Library, LibraryCollection, Name

logger = logging.getLogger(__name__)

TieBreak = Literal["input_order", "artifact_id"]

__all__ = [
    "TieBreak",
    "order_by_score",
    "cluster_component",
    "identify_libraries",
    "describe_scores",
    "library_records",
]


def order_by_score(
    artifacts: list[Artifact],
    scores: Mapping[str, float],
    tie_break: TieBreak = "input_order",
) -> list[Artifact]:
    """
    Sort artifacts by ascending score.

    Equal scores fall back to the artifact's input position, or to its id
    when ``tie_break`` is ``"artifact_id"``.
    """
    if tie_break == "artifact_id":
        return sorted(artifacts, key=lambda a: (scores[a.artifact_id], a.artifact_id))
    if tie_break == "input_order":
        return sorted(artifacts, key=lambda a: (scores[a.artifact_id], a.index))
    raise ValueError(f"Unknown tie break: {tie_break}")


def _seed_library(
    library: Library, artifact: Artifact, names: list[Name], claims: dict[int, Library]
) -> None:
    library.add_artifact(artifact)
    for name in names:
        library.add_name(name)
        claims[name.index] = library


def cluster_component(
    graph: ArtifactGraph,
    component: Component,
    scores: Mapping[str, float],
    tie_break: TieBreak = "input_order",
) -> list[Library]:
    """
    Assign the artifacts of one component to libraries.

    Args:
        graph: The artifact graph
        component: Component from ``iter_components``
        scores: Score per artifact id
        tie_break: Ordering for equal scores

    Returns:
        Libraries of this component in creation order
    """
    libraries: list[Library] = []
    # Claims are local to the component
    claims: dict[int, Library] = {}

    for artifact in order_by_score(component.artifacts, scores, tie_break):
        names = graph.names_of(artifact)

        candidates: dict[int, Library] = {}
        for name in names:
            library = claims.get(name.index)
            if library is not None:
                candidates.setdefault(id(library), library)

        if not candidates:
            library = Library()
            _seed_library(library, artifact, names, claims)
            libraries.append(library)
        elif len(candidates) == 1:
            (library,) = candidates.values()
            _seed_library(library, artifact, names, claims)
        else:
            logger.debug(
                "Artifact %s shared by %d libraries", artifact.artifact_id, len(candidates)
            )
            for library in candidates.values():
                library.add_artifact(artifact)

    return libraries


def identify_libraries(
    graph: ArtifactGraph,
    scores: Mapping[str, float],
    tie_break: TieBreak = "input_order",
    max_workers: int = 1,
    progress_callback: ProgressCallback | None = None,
    components: Sequence[Component] | None = None,
) -> LibraryCollection:
    """
    Cluster every artifact of the graph into libraries.

    Args:
        graph: Loaded artifact graph
        scores: Score for every artifact id (see ``compute_scores``)
        tie_break: Ordering for equal scores
        max_workers: Components clustered concurrently; 1 runs inline
        progress_callback: Optional callback(current, total, message) per component
        components: Components of ``graph`` from ``iter_components``; found here when omitted

    Returns:
        LibraryCollection; library ids follow component order then creation order

    Raises:
        ValueError: If any artifact has no score
    """
    missing = [a.artifact_id for a in graph if a.artifact_id not in scores]
    if missing:
        raise ValueError(f"Missing scores for {len(missing)} artifact(s): {', '.join(missing[:5])}")

    if components is None:
        components = list(iter_components(graph))
    total = len(components)
    logger.info("Clustering %d artifacts in %d components", len(graph), total)

    def _cluster(component: Component) -> list[Library]:
        return cluster_component(graph, component, scores, tie_break)

    if max_workers > 1 and total > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            per_component = list(pool.map(_cluster, components))
    else:
        per_component = [_cluster(c) for c in components]

    libraries: list[Library] = []
    for current, (component, found) in enumerate(zip(components, per_component), start=1):
        libraries.extend(found)
        if progress_callback:
            progress_callback(current, total, f"{len(component.artifacts)} artifacts")

    collection = LibraryCollection(libraries)
    logger.info("Identified %d libraries", len(collection))
    return collection


def describe_scores(
    graph: ArtifactGraph,
    scores: Mapping[str, float],
    limit: int | None = None,
    nonzero_only: bool = False,
) -> list[dict[str, Any]]:
    """
    List artifacts by ascending score together with the names they define.

    Args:
        graph: The artifact graph
        scores: Score per artifact id
        limit: Maximum number of entries
        nonzero_only: Skip artifacts whose names are all unique

    Returns:
        List of {artifact_id, score, fqns} dicts
    """
    entries = []
    for artifact in order_by_score(graph.artifacts, scores):
        score = scores[artifact.artifact_id]
        if nonzero_only and score <= 0:
            continue
        entries.append(
            {
                "artifact_id": artifact.artifact_id,
                "score": score,
                "fqns": [n.fqn for n in graph.names_of(artifact)],
            }
        )
        if limit is not None and len(entries) >= limit:
            break
    return entries


def library_records(collection: LibraryCollection) -> LibraryRecords:
    """Flatten a collection into library, membership and seed-name rows."""
    records: LibraryRecords = {"libraries": [], "artifacts": [], "names": []}
    for library in collection:
        assert library.library_id is not None
        records["libraries"].append(
            {
                "library_id": library.library_id,
                "artifact_count": len(library.artifacts),
                "name_count": len(library.seeds),
            }
        )
        records["artifacts"].extend(
            {"library_id": library.library_id, "artifact_id": artifact_id}
            for artifact_id in library.artifact_ids
        )
        records["names"].extend(
            {"library_id": library.library_id, "fqn": fqn} for fqn in library.seed_fqns
        )
    return records
