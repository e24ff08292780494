"""Cascade tree walker: resources reachable from a root through a shape."""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from ..schema.reader import ModelSchemaReader
from .models import State
from .relations import read_relation
from .shapes import RemovalShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceNode:
    """A resource visited by the walker."""

    entity: str
    id: str
    resource: dict[str, Any]


def get_resource_tree(
    reader: ModelSchemaReader,
    state: State,
    entity: str,
    id: str,
    shape: RemovalShape | Mapping | None = None,
    by_entity: bool = True,
) -> list[ResourceNode]:
    """Collect the resources reachable from ``(entity, id)`` through ``shape``.

    The root comes first and descendants follow in pre-order, each relation's
    targets in their stored order. A resource reached a second time is
    skipped, so cyclic relation graphs and recursive shapes terminate and
    diamonds are counted once. A shape key that cannot be resolved on the
    current entity (unknown or ambiguous) is not followed; the node itself is
    still part of the tree.

    Args:
        reader: Schema reader used to resolve shape keys.
        state: The state to walk.
        entity: Root entity.
        id: Root id.
        shape: Removal shape; None walks the root only.
        by_entity: Whether shape keys may name related entities.

    Returns:
        Visited resources in order. Empty if the root does not exist.
    """
    shape = RemovalShape.coerce(shape)
    nodes: list[ResourceNode] = []
    visited: set[tuple[str, str]] = set()

    # Popping the stack in reverse push order reproduces recursive pre-order.
    stack: list[tuple[str, str, RemovalShape]] = [(entity, id, shape)]
    while stack:
        current_entity, current_id, node_shape = stack.pop()
        if (current_entity, current_id) in visited:
            continue

        resource = state.get_resource(current_entity, current_id)
        if resource is None:
            continue

        visited.add((current_entity, current_id))
        nodes.append(ResourceNode(current_entity, current_id, resource))

        pending: list[tuple[str, str, RemovalShape]] = []
        for reference, child in node_shape.children.items():
            resolution = reader.resolve(current_entity, reference, by_entity)
            if not resolution.found:
                logger.debug(
                    "Not following '%s' from %s %s: %s",
                    reference,
                    current_entity,
                    current_id,
                    resolution.status.value,
                )
                continue

            rel_schema = reader.rel_schema(current_entity, resolution.rel)
            value = read_relation(rel_schema.cardinality, resource.get(resolution.rel))
            for rel_id in value.ids:
                pending.append((rel_schema.entity, rel_id, child))

        stack.extend(reversed(pending))

    return nodes
