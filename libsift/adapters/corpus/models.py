"""Pydantic models for the JSON documents produced by upstream extraction."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from libsift.modules.resolution import RawRelation

__all__ = [
    "JarRecord",
    "JarCorpus",
    "EntityRecord",
    "RelationRecord",
    "ProjectExtraction",
    "LibraryIndexDocument",
]


class JarRecord(BaseModel):
    """One artifact and the FQNs it defines."""

    id: str = Field(min_length=1)
    fqns: list[str] = Field(default_factory=list)


class JarCorpus(BaseModel):
    jars: list[JarRecord] = Field(default_factory=list)

    @field_validator("jars")
    @classmethod
    def unique_ids(cls, jars: list[JarRecord]) -> list[JarRecord]:
        seen: set[str] = set()
        for jar in jars:
            if jar.id in seen:
                raise ValueError(f"duplicate jar id: {jar.id}")
            seen.add(jar.id)
        return jars

    def pairs(self) -> list[tuple[str, list[str]]]:
        return [(jar.id, jar.fqns) for jar in self.jars]


class EntityRecord(BaseModel):
    fqn: str = Field(min_length=1)
    entity_id: int = Field(ge=0)


class RelationRecord(BaseModel):
    kind: str
    lhs: str
    rhs: str

    def to_raw(self) -> RawRelation:
        return RawRelation(self.kind, self.lhs, self.rhs)


class ProjectExtraction(BaseModel):
    """Entities and relations extracted from one project."""

    project: str
    entities: list[EntityRecord] = Field(default_factory=list)
    relations: list[RelationRecord] = Field(default_factory=list)

    def entity_pairs(self) -> list[tuple[str, int]]:
        return [(e.fqn, e.entity_id) for e in self.entities]


class LibraryIndexDocument(BaseModel):
    """Known-library entities shared by every project."""

    entities: list[EntityRecord] = Field(default_factory=list)

    def entity_pairs(self) -> list[tuple[str, int]]:
        return [(e.fqn, e.entity_id) for e in self.entities]
