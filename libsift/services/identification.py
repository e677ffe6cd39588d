"""
Identification service for libsift.

Orchestrates library identification by:
1. Building the artifact graph from a jar corpus
2. Scoring every artifact (default: NameEntropyScorer)
3. Clustering each connected component into libraries
4. Handing library records to a record sink

Usage:
    from libsift.adapters.corpus import load_jar_corpus
    from libsift.services import identification

    corpus = load_jar_corpus("jars.json")
    libraries, result = identification.run_identification(corpus)
    print(f"Libraries: {result['stats']['libraries']}")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING

from libsift.adapters.corpus import JarCorpus
from libsift.common.types import PipelineResult, ProgressCallback, create_result
from libsift.modules.clustering import (
    ArtifactGraph,
    DistinctivenessScorer,
    LibraryCollection,
    NameEntropyScorer,
    PrecomputedScorer,
    compute_scores,
    identify_libraries,
    iter_components,
    library_records,
)
from libsift.services.config_models import ClusteringSettings

if TYPE_CHECKING:
    from libsift.adapters.storage import RecordSink
    from libsift.common.types import ProgressReporter, RunLoggerProtocol

logger = logging.getLogger(__name__)

PHASE = "clustering"


def progress_callback_for(progress: ProgressReporter | None) -> ProgressCallback | None:
    """Adapt a progress reporter to the (current, total, message) callback."""
    if progress is None:
        return None

    def _callback(current: int, total: int, message: str) -> None:
        progress.update(current, message)

    return _callback


def build_graph(corpus: JarCorpus) -> ArtifactGraph:
    return ArtifactGraph.from_mapping(corpus.pairs())


def run_identification(
    corpus: JarCorpus | ArtifactGraph,
    scores: Mapping[str, float] | None = None,
    scorer: DistinctivenessScorer | None = None,
    settings: ClusteringSettings | None = None,
    sink: RecordSink | None = None,
    run_logger: RunLoggerProtocol | None = None,
    progress: ProgressReporter | None = None,
) -> tuple[LibraryCollection, PipelineResult]:
    """
    Run library identification over a jar corpus.

    Args:
        corpus: Validated jar corpus, or an already built graph
        scores: Precomputed scores keyed by artifact id (overrides ``scorer``)
        scorer: Scorer to use; defaults to NameEntropyScorer
        settings: Clustering settings (workers, tie break)
        sink: Optional record sink receiving the library records
        run_logger: Optional RunLogger for structured logging
        progress: Optional progress reporter for visual feedback

    Returns:
        Tuple of (LibraryCollection, result dict with stats)

    Raises:
        ValueError: On malformed input (missing or negative scores)
    """
    settings = settings or ClusteringSettings()
    start = datetime.now()
    callback = progress_callback_for(progress)

    graph = corpus if isinstance(corpus, ArtifactGraph) else build_graph(corpus)
    if scores is not None:
        scorer = PrecomputedScorer(scores)
    elif scorer is None:
        scorer = NameEntropyScorer(graph)

    if run_logger:
        run_logger.phase_start(PHASE, f"Identifying libraries in {len(graph)} jars")
    if progress:
        progress.start_phase(PHASE, 2)

    # Scoring
    step_ctx = None
    if run_logger:
        step_ctx = run_logger.step_start("scoring", "Computing jar scores")
    if progress:
        progress.start_step("scoring", len(graph))
    try:
        artifact_scores = compute_scores(graph, scorer, settings.score_workers, callback)
    except Exception as e:
        logger.error("Scoring failed: %s", e)
        if step_ctx:
            step_ctx.error(str(e))
        if run_logger:
            run_logger.phase_error(PHASE, str(e), "Scoring failed")
        raise
    if step_ctx:
        step_ctx.items_processed = len(artifact_scores)
        step_ctx.complete()
    if progress:
        progress.complete_step()

    # Clustering
    components = list(iter_components(graph))
    component_count = len(components)
    step_ctx = None
    if run_logger:
        step_ctx = run_logger.step_start(
            "identification", f"Identifying jar clusters in {component_count} components"
        )
    if progress:
        progress.start_step("identification", component_count)
    libraries = identify_libraries(
        graph,
        artifact_scores,
        tie_break=settings.tie_break,
        max_workers=settings.cluster_workers,
        progress_callback=callback,
        components=components,
    )
    records = library_records(libraries)
    if sink is not None:
        sink.add_library_records(records)
    if step_ctx:
        step_ctx.items_processed = len(graph)
        step_ctx.items_created = len(libraries)
        step_ctx.complete()
    if run_logger and hasattr(run_logger, "detail_library_created"):
        for library in libraries:
            run_logger.detail_library_created(
                library.library_id, library.artifact_ids, len(library.seeds)
            )
    if progress:
        progress.complete_step()

    stats = {
        "artifacts": len(graph),
        "names": len(graph.names),
        "components": component_count,
        "libraries": len(libraries),
        "shared_artifacts": libraries.shared_artifact_count(),
        "seed_names": len(records["names"]),
    }
    if run_logger:
        run_logger.phase_complete(PHASE, "Library identification completed", stats=stats)
    if progress:
        progress.complete_phase(f"Identified {len(libraries)} libraries")

    return libraries, create_result(True, stats=stats, stage=PHASE, start=start)
