"""Reciprocal relation validator."""

from ..graph.schema_graph import SchemaGraph
from ..schema.models import ModelSchema
from .base import ValidationResult


def check_reciprocal_integrity(
    schema: ModelSchema, graph: SchemaGraph
) -> ValidationResult:
    """Check that every relation declares a mutual reciprocal.

    For a relation ``E.r -> F`` with reciprocal ``r'`` this validator checks:
    - ``F`` is declared and declares ``r'``
    - ``F.r'`` points back at ``E``
    - ``F.r'`` names ``r`` as its own reciprocal

    Args:
        schema: The parsed schema.
        graph: The schema graph.

    Returns:
        ValidationResult with errors for missing or asymmetric reciprocals.
    """
    result = ValidationResult()

    for entity_name, rels in schema.entities.items():
        for rel, rel_schema in rels.items():
            target = rel_schema.entity
            reciprocal = graph.get_relation(target, rel_schema.reciprocal)

            if not graph.has_entity(target) or reciprocal is None:
                result.add_error(
                    code="MISSING_RECIPROCAL",
                    message=(
                        f"Relation '{rel}' expects '{target}.{rel_schema.reciprocal}' "
                        "to be declared as its reciprocal"
                    ),
                    entity=entity_name,
                    resource=rel,
                    target_entity=target,
                    reciprocal=rel_schema.reciprocal,
                )
                continue

            if reciprocal["entity"] != entity_name:
                result.add_error(
                    code="RECIPROCAL_TARGET_MISMATCH",
                    message=(
                        f"Reciprocal '{target}.{rel_schema.reciprocal}' points at "
                        f"'{reciprocal['entity']}' instead of '{entity_name}'"
                    ),
                    entity=entity_name,
                    resource=rel,
                    target_entity=target,
                    reciprocal=rel_schema.reciprocal,
                )

            if reciprocal["reciprocal"] != rel:
                result.add_error(
                    code="ASYMMETRIC_RECIPROCAL",
                    message=(
                        f"Reciprocal '{target}.{rel_schema.reciprocal}' names "
                        f"'{reciprocal['reciprocal']}' as its reciprocal instead of '{rel}'"
                    ),
                    entity=entity_name,
                    resource=rel,
                    target_entity=target,
                    reciprocal=rel_schema.reciprocal,
                )

    return result
