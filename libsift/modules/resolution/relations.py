"""
Relation endpoint validation and relation import.

The source (left-hand) endpoint of a relation must be defined by the project
under analysis. The target may be internal, a library entity or unknown.
A relation whose source does not resolve to an internal entity is logged and
skipped; the rest of the import continues.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from libsift.common.types import PipelineResult, ProgressCallback, create_result

from .models import RawRelation, RelationClass, ResolutionContext
from .resolver import resolve

logger = logging.getLogger(__name__)

__all__ = [
    "ResolvedRelation",
    "resolve_source_endpoint",
    "resolve_target_endpoint",
    "import_relations",
]


@dataclass(frozen=True)
class ResolvedRelation:
    """A relation row ready to be persisted."""

    kind: str
    lhs_id: int
    rhs_id: int
    rhs_class: RelationClass

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "lhs_id": self.lhs_id,
            "rhs_id": self.rhs_id,
            "rhs_class": self.rhs_class.value,
        }


def resolve_source_endpoint(fqn: str, context: ResolutionContext) -> int | None:
    """
    Resolve the left-hand endpoint of a relation.

    Returns:
        The entity id, or None if the FQN is not an internal entity
    """
    entity = resolve(fqn, context)
    if entity.relation_class is not RelationClass.INTERNAL:
        logger.error("Invalid lhs entity: %s (fqn=%s)", entity, fqn)
        return None
    return entity.entity_id


def resolve_target_endpoint(fqn: str, context: ResolutionContext) -> int:
    """Resolve the right-hand endpoint; any classification is accepted."""
    return resolve(fqn, context).entity_id


def import_relations(
    relations: Iterable[RawRelation],
    context: ResolutionContext,
    on_accept: Callable[[ResolvedRelation], None] | None = None,
    on_reject: Callable[[RawRelation, RelationClass], None] | None = None,
    progress_callback: ProgressCallback | None = None,
) -> tuple[list[ResolvedRelation], PipelineResult]:
    """
    Resolve a project's relations into persistable rows.

    Args:
        relations: Raw relations extracted from the project
        context: Resolution context of the project
        on_accept: Optional callback for each accepted row
        on_reject: Optional callback(relation, source_class) for each rejected relation
        progress_callback: Optional callback(current, total, kind)

    Returns:
        Tuple of (accepted rows, result dict with stats and rejection warnings)
    """
    start = datetime.now()
    relations = list(relations)
    total = len(relations)
    rows: list[ResolvedRelation] = []
    warnings: list[str] = []

    for current, relation in enumerate(relations, start=1):
        lhs_id = resolve_source_endpoint(relation.lhs, context)
        if lhs_id is None:
            source_class = resolve(relation.lhs, context).relation_class
            warnings.append(
                f"Rejected {relation.kind} {relation.lhs} -> {relation.rhs}: "
                f"source is {source_class.value}"
            )
            if on_reject:
                on_reject(relation, source_class)
        else:
            target = resolve(relation.rhs, context)
            row = ResolvedRelation(
                relation.kind, lhs_id, target.entity_id, target.relation_class
            )
            rows.append(row)
            if on_accept:
                on_accept(row)
        if progress_callback:
            progress_callback(current, total, relation.kind)

    stats = {
        "relations_processed": total,
        "relations_imported": len(rows),
        "relations_rejected": total - len(rows),
        "unknown_entities": len(context.unknowns),
    }
    return rows, create_result(
        True, stats=stats, warnings=warnings, stage="resolution", start=start
    )
