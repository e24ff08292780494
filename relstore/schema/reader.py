"""Read-only, validated access to a relstore schema."""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from ..graph.builder import build_graph
from ..graph.schema_graph import SchemaGraph
from .errors import SchemaValidationError
from .loader import parse_schema_data
from .models import ModelSchema, RelSchema


class ResolutionStatus(str, Enum):
    """Outcome of resolving a relation reference."""

    FOUND = "found"
    AMBIGUOUS = "ambiguous"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Resolution:
    """Result of ``ModelSchemaReader.resolve``.

    ``rel`` is set only when ``status`` is FOUND. ``candidates`` lists the
    matching relation keys when the reference was ambiguous.
    """

    status: ResolutionStatus
    rel: str | None = None
    candidates: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return self.status == ResolutionStatus.FOUND


class ModelSchemaReader:
    """Validated view of a ModelSchema.

    Construction fails with SchemaValidationError if any relation lacks a
    mutual reciprocal declaration; an engine never runs on such a schema.
    """

    def __init__(self, schema: ModelSchema | Mapping):
        if not isinstance(schema, ModelSchema):
            schema = parse_schema_data(dict(schema))

        # Imported here; the validators package depends on this module.
        from ..validators.runner import run_schema_validators

        self._schema = schema
        self._graph = build_graph(schema)

        result = run_schema_validators(schema, self._graph)
        if result.has_errors:
            errors = result.as_error_dicts()
            raise SchemaValidationError(
                f"Schema validation failed with {len(errors)} error(s)", errors
            )

    @property
    def schema(self) -> ModelSchema:
        return self._schema

    @property
    def graph(self) -> SchemaGraph:
        return self._graph

    @property
    def entities(self) -> list[str]:
        return self._schema.get_all_entity_names()

    def has_entity(self, entity: str) -> bool:
        return entity in self._schema.entities

    def rel_keys(self, entity: str) -> list[str]:
        """Relation keys declared on an entity, in declaration order."""
        return list(self._schema.entities.get(entity, {}))

    def is_rel(self, entity: str, key: str) -> bool:
        return key in self._schema.entities.get(entity, {})

    def rel_schema(self, entity: str, rel: str) -> RelSchema | None:
        return self._schema.entities.get(entity, {}).get(rel)

    def reciprocal_schema(self, entity: str, rel: str) -> RelSchema | None:
        """The RelSchema stored on the other side of ``entity.rel``."""
        rel_schema = self.rel_schema(entity, rel)
        if rel_schema is None:
            return None
        return self.rel_schema(rel_schema.entity, rel_schema.reciprocal)

    def resolve(self, entity: str, reference: str, by_entity: bool = True) -> Resolution:
        """Resolve a relation reference to a relation key.

        A declared relation key resolves to itself. Otherwise, when
        ``by_entity`` is set, ``reference`` is read as a target entity name
        and must match exactly one of the entity's relations.

        Args:
            entity: The entity owning the relation.
            reference: A relation key or a related entity name.
            by_entity: Whether to fall back to entity-name matching.

        Returns:
            A Resolution describing the outcome.
        """
        if self.is_rel(entity, reference):
            return Resolution(ResolutionStatus.FOUND, reference)

        if not by_entity:
            return Resolution(ResolutionStatus.NOT_FOUND)

        candidates = self._graph.get_relations_to(entity, reference)
        if len(candidates) == 1:
            return Resolution(ResolutionStatus.FOUND, candidates[0])
        if len(candidates) > 1:
            return Resolution(ResolutionStatus.AMBIGUOUS, candidates=tuple(candidates))
        return Resolution(ResolutionStatus.NOT_FOUND)
