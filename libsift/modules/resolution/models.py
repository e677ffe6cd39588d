"""
Data model for FQN resolution.

A referenced FQN resolves to a ``ModeledEntity`` tagged with a
``RelationClass``. Lookup state for one project import lives in a
``ResolutionContext``: the project's own entities, the shared library index,
and a private cache of unknown placeholders.
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

__all__ = [
    "RelationClass",
    "ModeledEntity",
    "RawRelation",
    "UnknownEntityCache",
    "ResolutionContext",
    "build_entity_table",
]


class RelationClass(str, Enum):
    """Where a referenced name was found."""

    INTERNAL = "internal"  # defined by the project under analysis
    LIBRARY = "library"  # found in the known-library index
    UNKNOWN = "unknown"  # not found; placeholder synthesized


@dataclass(frozen=True)
class ModeledEntity:
    fqn: str
    entity_id: int
    relation_class: RelationClass

    def __str__(self) -> str:
        return f"{self.relation_class.value}:{self.entity_id}:{self.fqn}"


@dataclass(frozen=True)
class RawRelation:
    """A relation as extracted from source: kind plus textual endpoints."""

    kind: str
    lhs: str
    rhs: str


def build_entity_table(
    entities: Iterable[tuple[str, int]], relation_class: RelationClass
) -> Mapping[str, ModeledEntity]:
    """
    Build a read-only FQN -> entity table.

    Args:
        entities: ``(fqn, entity_id)`` pairs
        relation_class: Class tag for every entity in the table

    Returns:
        Read-only mapping

    Raises:
        ValueError: If one FQN is given two different ids
    """
    table: dict[str, ModeledEntity] = {}
    for fqn, entity_id in entities:
        existing = table.get(fqn)
        if existing is not None:
            if existing.entity_id != entity_id:
                raise ValueError(
                    f"Conflicting ids for {fqn}: {existing.entity_id} and {entity_id}"
                )
            continue
        table[fqn] = ModeledEntity(fqn, entity_id, relation_class)
    return MappingProxyType(table)


class UnknownEntityCache:
    """
    Memoized UNKNOWN placeholders for one project's import.

    ``get_or_create`` is atomic, so concurrent lookups of the same FQN always
    share one identifier.
    """

    def __init__(self, first_id: int = 1):
        self._ids = itertools.count(first_id)
        self._entities: dict[str, ModeledEntity] = {}
        self._lock = threading.Lock()

    def get_or_create(self, fqn: str) -> ModeledEntity:
        with self._lock:
            entity = self._entities.get(fqn)
            if entity is None:
                entity = ModeledEntity(fqn, next(self._ids), RelationClass.UNKNOWN)
                self._entities[fqn] = entity
            return entity

    def get(self, fqn: str) -> ModeledEntity | None:
        with self._lock:
            return self._entities.get(fqn)

    def entities(self) -> list[ModeledEntity]:
        """Snapshot of the placeholders created so far, in creation order."""
        with self._lock:
            return list(self._entities.values())

    def __contains__(self, fqn: object) -> bool:
        with self._lock:
            return fqn in self._entities

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)


@dataclass
class ResolutionContext:
    """
    Resolution scope for one project import.

    ``project`` and ``library_index`` are read-only; ``unknowns`` is the only
    mutable part and must not be shared with another project.
    """

    project: Mapping[str, ModeledEntity]
    library_index: Mapping[str, ModeledEntity]
    unknowns: UnknownEntityCache
    project_name: str = ""

    @classmethod
    def for_project(
        cls,
        entities: Iterable[tuple[str, int]],
        library_index: Mapping[str, ModeledEntity],
        project_name: str = "",
        unknown_id_start: int | None = None,
    ) -> ResolutionContext:
        """
        Build a context from a project's extracted entities.

        Args:
            entities: ``(fqn, entity_id)`` pairs defined by the project
            library_index: Shared index from ``build_entity_table``
            project_name: Name used in diagnostics
            unknown_id_start: First id for UNKNOWN placeholders; defaults to
                one past the largest id in either table

        Returns:
            A fresh ResolutionContext with an empty unknown cache
        """
        project = build_entity_table(entities, RelationClass.INTERNAL)
        if unknown_id_start is None:
            known_ids = [e.entity_id for e in project.values()]
            known_ids.extend(e.entity_id for e in library_index.values())
            unknown_id_start = max(known_ids, default=0) + 1
        return cls(
            project=project,
            library_index=library_index,
            unknowns=UnknownEntityCache(unknown_id_start),
            project_name=project_name,
        )
