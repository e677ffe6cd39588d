"""
Resolution module - map referenced FQNs to classified entities.

Modules:
- models: RelationClass, ModeledEntity, UnknownEntityCache, ResolutionContext
- resolver: three-tier lookup
- relations: endpoint validation and relation import
"""

from __future__ import annotations

from .models import (
    ModeledEntity,
    RawRelation,
    RelationClass,
    ResolutionContext,
    UnknownEntityCache,
    build_entity_table,
)
from .relations import (
    ResolvedRelation,
    import_relations,
    resolve_source_endpoint,
    resolve_target_endpoint,
)
from .resolver import resolve

__all__ = [
    "ModeledEntity",
    "RawRelation",
    "RelationClass",
    "ResolutionContext",
    "ResolvedRelation",
    "UnknownEntityCache",
    "build_entity_table",
    "import_relations",
    "resolve",
    "resolve_source_endpoint",
    "resolve_target_endpoint",
]
