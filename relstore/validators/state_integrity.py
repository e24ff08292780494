"""State integrity validator."""

from typing import TYPE_CHECKING

from ..schema.models import Cardinality
from ..state.models import State
from ..state.relations import read_relation
from .base import ValidationResult

if TYPE_CHECKING:
    from ..schema.reader import ModelSchemaReader


def check_state_integrity(reader: "ModelSchemaReader", state: State) -> ValidationResult:
    """Check that a state satisfies the store invariants.

    This validator checks:
    - ``ids[entity]`` lists exactly the resources of the entity, once each
    - relation values have the shape their cardinality declares
    - every relation to an existing resource is mirrored by its reciprocal

    References to resources that do not exist are reported as warnings.

    Args:
        reader: Schema reader for the state's schema.
        state: The state to check.

    Returns:
        ValidationResult with errors for broken invariants.
    """
    result = ValidationResult()

    for entity in state.entities:
        if not reader.has_entity(entity):
            result.add_warning(
                code="UNKNOWN_ENTITY",
                message=f"Entity '{entity}' is not declared in the schema",
                entity=entity,
            )

        ids = state.get_ids(entity)
        resources = state.get_resources(entity)

        seen: set[str] = set()
        for id_ in ids:
            if id_ in seen:
                result.add_error(
                    code="DUPLICATE_ID",
                    message=f"Id '{id_}' appears more than once in ids",
                    entity=entity,
                    resource=id_,
                )
            seen.add(id_)

        if seen != set(resources):
            result.add_error(
                code="IDS_MISMATCH",
                message="Ordered ids do not match the stored resources",
                entity=entity,
                missing_from_ids=sorted(set(resources) - seen),
                missing_from_resources=sorted(seen - set(resources)),
            )

        for id_, resource in resources.items():
            _check_relations(reader, state, entity, id_, resource, result)

    return result


def _check_relations(reader, state, entity, id_, resource, result) -> None:
    for rel in reader.rel_keys(entity):
        if rel not in resource:
            continue

        rel_schema = reader.rel_schema(entity, rel)
        raw = resource[rel]

        if rel_schema.cardinality == Cardinality.MANY:
            valid_shape = isinstance(raw, list)
            if valid_shape and len(set(raw)) != len(raw):
                result.add_error(
                    code="DUPLICATE_REL_ID",
                    message=f"Relation '{rel}' lists an id more than once",
                    entity=entity,
                    resource=id_,
                    rel=rel,
                )
        else:
            valid_shape = raw is None or isinstance(raw, str)

        if not valid_shape:
            result.add_error(
                code="INVALID_REL_VALUE",
                message=(
                    f"Relation '{rel}' holds a {type(raw).__name__}, expected "
                    f"{'a list of ids' if rel_schema.is_many else 'an id or null'}"
                ),
                entity=entity,
                resource=id_,
                rel=rel,
            )
            continue

        reciprocal = reader.rel_schema(rel_schema.entity, rel_schema.reciprocal)
        for rel_id in read_relation(rel_schema.cardinality, raw).ids:
            target = state.get_resource(rel_schema.entity, rel_id)
            if target is None:
                result.add_warning(
                    code="DANGLING_REFERENCE",
                    message=(
                        f"Relation '{rel}' references missing "
                        f"{rel_schema.entity} '{rel_id}'"
                    ),
                    entity=entity,
                    resource=id_,
                    rel=rel,
                    rel_id=rel_id,
                )
                continue

            back = read_relation(reciprocal.cardinality, target.get(rel_schema.reciprocal))
            if not back.holds(id_):
                result.add_error(
                    code="ASYMMETRIC_RELATION",
                    message=(
                        f"Relation '{rel}' references {rel_schema.entity} '{rel_id}' "
                        f"but '{rel_schema.reciprocal}' there does not reference back"
                    ),
                    entity=entity,
                    resource=id_,
                    rel=rel,
                    rel_id=rel_id,
                )
