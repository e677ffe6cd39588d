"""
Data model for library clustering.

Artifacts (jars) and the names they define are kept in an arena: both live in
indexed lists on ``ArtifactGraph`` and refer to each other by integer handle.
``Library`` and ``LibraryCollection`` hold the clustering output.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

__all__ = [
    "Artifact",
    "Name",
    "ArtifactGraph",
    "Library",
    "LibraryCollection",
]


@dataclass(eq=False)
class Artifact:
    """A library unit (jar) and the handles of the names it defines."""

    index: int
    artifact_id: str
    name_indices: list[int] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Artifact({self.artifact_id!r})"


@dataclass(eq=False)
class Name:
    """A fully-qualified name and the handles of the artifacts defining it."""

    index: int
    fqn: str
    artifact_indices: list[int] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Name({self.fqn!r})"


class ArtifactGraph:
    """
    Bipartite artifact/name graph.

    ``add_artifact`` is the only mutator and keeps the back-references
    symmetric: an artifact lists a name iff the name lists the artifact.
    """

    def __init__(self) -> None:
        self.artifacts: list[Artifact] = []
        self.names: list[Name] = []
        self._artifacts_by_id: dict[str, int] = {}
        self._names_by_fqn: dict[str, int] = {}

    @classmethod
    def from_mapping(cls, jars: Iterable[tuple[str, Iterable[str]]]) -> ArtifactGraph:
        """Build a graph from ``(artifact_id, fqns)`` pairs, preserving order."""
        graph = cls()
        for artifact_id, fqns in jars:
            graph.add_artifact(artifact_id, fqns)
        return graph

    def add_artifact(self, artifact_id: str, fqns: Iterable[str]) -> Artifact:
        """
        Add an artifact with its defined names.

        Args:
            artifact_id: Stable identifier of the artifact
            fqns: Names defined by the artifact (duplicates are ignored)

        Returns:
            The new Artifact

        Raises:
            ValueError: If the artifact id is already present
        """
        if artifact_id in self._artifacts_by_id:
            raise ValueError(f"Duplicate artifact id: {artifact_id}")

        artifact = Artifact(index=len(self.artifacts), artifact_id=artifact_id)
        self.artifacts.append(artifact)
        self._artifacts_by_id[artifact_id] = artifact.index

        # dict.fromkeys keeps first-seen order
        for fqn in dict.fromkeys(fqns):
            name = self._name_for(fqn)
            name.artifact_indices.append(artifact.index)
            artifact.name_indices.append(name.index)
        return artifact

    def _name_for(self, fqn: str) -> Name:
        index = self._names_by_fqn.get(fqn)
        if index is None:
            index = len(self.names)
            self.names.append(Name(index=index, fqn=fqn))
            self._names_by_fqn[fqn] = index
        return self.names[index]

    def get_artifact(self, artifact_id: str) -> Artifact:
        return self.artifacts[self._artifacts_by_id[artifact_id]]

    def get_name(self, fqn: str) -> Name:
        return self.names[self._names_by_fqn[fqn]]

    def names_of(self, artifact: Artifact) -> list[Name]:
        """Names defined by ``artifact``."""
        return [self.names[i] for i in artifact.name_indices]

    def artifacts_of(self, name: Name) -> list[Artifact]:
        """Artifacts defining ``name``."""
        return [self.artifacts[i] for i in name.artifact_indices]

    def __len__(self) -> int:
        return len(self.artifacts)

    def __iter__(self) -> Iterator[Artifact]:
        return iter(self.artifacts)


class Library:
    """
    A cluster of artifacts judged to form one logical library.

    Grows only by accumulation: members and seed names are never removed.
    """

    def __init__(self) -> None:
        self.library_id: int | None = None
        self._artifacts: dict[int, Artifact] = {}
        self._seeds: dict[int, Name] = {}

    def add_artifact(self, artifact: Artifact) -> None:
        self._artifacts.setdefault(artifact.index, artifact)

    def add_name(self, name: Name) -> None:
        self._seeds.setdefault(name.index, name)

    @property
    def artifacts(self) -> list[Artifact]:
        """Member artifacts in the order they joined."""
        return list(self._artifacts.values())

    @property
    def seeds(self) -> list[Name]:
        """Seed names in the order they were claimed."""
        return list(self._seeds.values())

    @property
    def artifact_ids(self) -> list[str]:
        return [a.artifact_id for a in self._artifacts.values()]

    @property
    def seed_fqns(self) -> list[str]:
        return [n.fqn for n in self._seeds.values()]

    def has_artifact(self, artifact: Artifact) -> bool:
        return artifact.index in self._artifacts

    def has_name(self, name: Name) -> bool:
        return name.index in self._seeds

    def __repr__(self) -> str:
        return f"Library(id={self.library_id}, artifacts={self.artifact_ids})"


class LibraryCollection:
    """All libraries produced by one clustering run. Read-only once built."""

    def __init__(self, libraries: Iterable[Library]):
        self._libraries: tuple[Library, ...] = tuple(libraries)
        for library_id, library in enumerate(self._libraries, start=1):
            library.library_id = library_id

    @property
    def libraries(self) -> tuple[Library, ...]:
        return self._libraries

    def libraries_of(self, artifact: Artifact) -> list[Library]:
        """Libraries that count ``artifact`` as a member."""
        return [lib for lib in self._libraries if lib.has_artifact(artifact)]

    def membership_counts(self) -> Counter[int]:
        """Number of libraries each member artifact belongs to, keyed by artifact index."""
        counts: Counter[int] = Counter()
        for library in self._libraries:
            counts.update(library._artifacts.keys())
        return counts

    def shared_artifact_count(self) -> int:
        """Artifacts that are members of more than one library."""
        return sum(1 for n in self.membership_counts().values() if n > 1)

    def to_dict(self) -> dict[str, list[dict[str, object]]]:
        """Convert to a JSON-serializable report."""
        return {
            "libraries": [
                {
                    "library_id": lib.library_id,
                    "artifacts": lib.artifact_ids,
                    "seeds": lib.seed_fqns,
                }
                for lib in self._libraries
            ]
        }

    def __len__(self) -> int:
        return len(self._libraries)

    def __iter__(self) -> Iterator[Library]:
        return iter(self._libraries)
