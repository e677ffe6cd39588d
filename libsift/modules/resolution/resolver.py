"""FQN resolution: project table, then library index, then unknown cache."""

from __future__ import annotations

from .models import ModeledEntity, ResolutionContext

__all__ = ["resolve"]


def resolve(fqn: str, context: ResolutionContext) -> ModeledEntity:
    """
    Resolve a referenced FQN to a classified entity.

    Never fails: a name found in neither table gets an UNKNOWN placeholder,
    and the same placeholder is returned for every later lookup in the
    same context.
    """
    entity = context.project.get(fqn)
    if entity is not None:
        return entity
    entity = context.library_index.get(fqn)
    if entity is not None:
        return entity
    return context.unknowns.get_or_create(fqn)
