"""Builder for converting a ModelSchema to a SchemaGraph."""

from ..schema.models import ModelSchema
from .schema_graph import SchemaGraph


def build_graph(schema: ModelSchema) -> SchemaGraph:
    """Build a SchemaGraph from a ModelSchema.

    Args:
        schema: The parsed schema.

    Returns:
        A SchemaGraph representing the schema.
    """
    graph = SchemaGraph()

    # Add all entities first
    for entity_name, rels in schema.entities.items():
        graph.add_entity(entity_name, rel_count=len(rels))

    # Add relations (after all entities exist)
    for entity_name, rels in schema.entities.items():
        for rel, rel_schema in rels.items():
            graph.add_relation(
                entity_name,
                rel,
                rel_schema.entity,
                rel_schema.cardinality,
                rel_schema.reciprocal,
            )

    return graph
