"""
Connected-component discovery over the artifact/name graph.

Two artifacts are in the same component when they are linked, directly or
transitively, by a name they both define.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

from .models import Artifact, ArtifactGraph, Name

__all__ = ["Component", "related_component", "iter_components"]


class Component(NamedTuple):
    artifacts: list[Artifact]
    names: list[Name]


def related_component(
    graph: ArtifactGraph, seed: Artifact, processed: set[int]
) -> Component:
    """
    Collect the component reachable from ``seed``.

    Depth-first: an artifact is marked processed when it is pushed, so no
    artifact is pushed twice. ``processed`` is shared across calls and updated
    in place.

    Args:
        graph: The artifact graph
        seed: An artifact not yet processed
        processed: Indices of artifacts already assigned to a component

    Returns:
        Component with its artifacts in visit order and its names
    """
    artifacts: list[Artifact] = []
    names: dict[int, Name] = {}

    processed.add(seed.index)
    stack = [seed]
    while stack:
        artifact = stack.pop()
        artifacts.append(artifact)
        for name in graph.names_of(artifact):
            names.setdefault(name.index, name)
            for other in graph.artifacts_of(name):
                if other.index not in processed:
                    processed.add(other.index)
                    stack.append(other)

    return Component(artifacts, list(names.values()))


def iter_components(graph: ArtifactGraph) -> Iterator[Component]:
    """Yield every component once, seeded in artifact input order."""
    processed: set[int] = set()
    for artifact in graph:
        if artifact.index not in processed:
            yield related_component(graph, artifact, processed)
