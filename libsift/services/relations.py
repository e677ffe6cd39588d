"""
Relation import service for libsift.

Resolves the relations extracted from one project against the project's own
entities and the shared library index, then hands accepted rows to a record
sink. Relations whose source is not internal are logged and skipped.

Usage:
    from libsift.adapters.corpus import load_library_index, load_project
    from libsift.services import relations

    index = relations.build_library_index(load_library_index("library.json"))
    rows, result = relations.run_relation_import(load_project("project.json"), index)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from libsift.adapters.corpus import LibraryIndexDocument, ProjectExtraction
from libsift.common.types import PipelineResult
from libsift.modules.resolution import (
    ModeledEntity,
    RawRelation,
    RelationClass,
    ResolutionContext,
    ResolvedRelation,
    build_entity_table,
    import_relations,
)
from libsift.services.config_models import ResolutionSettings
from libsift.services.identification import progress_callback_for

if TYPE_CHECKING:
    from libsift.adapters.storage import RecordSink
    from libsift.common.types import ProgressReporter, RunLoggerProtocol

logger = logging.getLogger(__name__)

PHASE = "resolution"


def build_library_index(document: LibraryIndexDocument) -> Mapping[str, ModeledEntity]:
    """Build the shared, read-only library index from its document."""
    return build_entity_table(document.entity_pairs(), RelationClass.LIBRARY)


def build_context(
    extraction: ProjectExtraction,
    library_index: Mapping[str, ModeledEntity],
    settings: ResolutionSettings | None = None,
) -> ResolutionContext:
    """Build a fresh resolution context for one project."""
    settings = settings or ResolutionSettings()
    return ResolutionContext.for_project(
        extraction.entity_pairs(),
        library_index,
        project_name=extraction.project,
        unknown_id_start=settings.unknown_id_start,
    )


def run_relation_import(
    extraction: ProjectExtraction,
    library_index: Mapping[str, ModeledEntity],
    settings: ResolutionSettings | None = None,
    sink: RecordSink | None = None,
    run_logger: RunLoggerProtocol | None = None,
    progress: ProgressReporter | None = None,
) -> tuple[list[ResolvedRelation], PipelineResult]:
    """
    Import the relations of one project.

    Args:
        extraction: Entities and relations extracted from the project
        library_index: Shared library index (see ``build_library_index``)
        settings: Resolution settings
        sink: Optional record sink receiving accepted rows
        run_logger: Optional RunLogger for structured logging
        progress: Optional progress reporter for visual feedback

    Returns:
        Tuple of (accepted rows, result dict with stats and warnings)
    """
    context = build_context(extraction, library_index, settings)
    project = extraction.project

    if run_logger:
        run_logger.phase_start(PHASE, f"Importing relations for {project}")
    if progress:
        progress.start_phase(PHASE, 1)

    step_ctx = None
    if run_logger:
        step_ctx = run_logger.step_start("relations", f"Resolving {len(extraction.relations)} relations")
    if progress:
        progress.start_step("relations", len(extraction.relations))

    def _on_reject(relation: RawRelation, source_class: RelationClass) -> None:
        if run_logger and hasattr(run_logger, "detail_relation_rejected"):
            run_logger.detail_relation_rejected(
                relation.kind, relation.lhs, relation.rhs, source_class.value
            )

    rows, result = import_relations(
        (r.to_raw() for r in extraction.relations),
        context,
        on_reject=_on_reject,
        progress_callback=progress_callback_for(progress),
    )
    if sink is not None:
        sink.add_relations(project, rows)

    stats = result["stats"]
    stats["project"] = project
    stats["internal_entities"] = len(context.project)
    if step_ctx:
        step_ctx.items_processed = stats["relations_processed"]
        step_ctx.items_created = stats["relations_imported"]
        step_ctx.items_failed = stats["relations_rejected"]
        step_ctx.complete()
    if progress:
        progress.complete_step()

    if stats["relations_rejected"]:
        logger.warning(
            "%s: rejected %d of %d relations",
            project,
            stats["relations_rejected"],
            stats["relations_processed"],
        )
    if run_logger:
        run_logger.phase_complete(PHASE, "Relation import completed", stats=stats)
    if progress:
        progress.complete_phase(f"Imported {stats['relations_imported']} relations")

    return rows, result
