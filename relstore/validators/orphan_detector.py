"""Isolated entity detection validator."""

from ..graph.schema_graph import SchemaGraph
from .base import ValidationResult


def check_isolated_entities(graph: SchemaGraph) -> ValidationResult:
    """Check for entities with no relations.

    An isolated entity has no relations to or from other entities. That is
    legal, but in a relational store it often means a relation was forgotten.

    Args:
        graph: The schema graph to check.

    Returns:
        ValidationResult with warnings for isolated entities.
    """
    result = ValidationResult()

    for entity_name in graph.get_entity_names():
        if not graph.has_any_relations(entity_name):
            result.add_warning(
                code="ISOLATED_ENTITY",
                message=f"Entity '{entity_name}' has no relations to other entities",
                entity=entity_name,
            )

    return result
