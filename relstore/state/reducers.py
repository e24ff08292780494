"""
Reducers: pure fold of an ordered op sequence over a State.

Ops are grouped by entity. An entity that no op addresses keeps its ``ids``
list and ``resources`` dict by identity, and inside a touched entity only the
resources an op addresses are copied. Callers can therefore detect change
with ``is``.
"""

from typing import Any, Iterable

from ..schema.reader import ModelSchemaReader
from .models import Resource, State
from .ops import (
    AddRelId,
    AddResource,
    EditResource,
    MoveRelId,
    MoveResource,
    Op,
    RemoveRelId,
    RemoveResource,
)
from .relations import Ordered, Single, insert_at, move_within, read_relation


# ---------------------------------------------------------------------------
# Entity ids
# ---------------------------------------------------------------------------


def reduce_ids(ids: list[str], ops: Iterable[Op]) -> list[str]:
    """Apply the id-affecting ops of one entity to its ordered id list."""
    result = ids
    for op in ops:
        if isinstance(op, AddResource):
            if op.id not in result:
                result = insert_at(result, op.id, op.index)
        elif isinstance(op, RemoveResource):
            if op.id in result:
                result = [id_ for id_ in result if id_ != op.id]
        elif isinstance(op, MoveResource):
            moved = move_within(result, op.src, op.dest)
            if moved is not None:
                result = moved
    return result


# ---------------------------------------------------------------------------
# Entity resources
# ---------------------------------------------------------------------------


class _ResourcesWriter:
    """Copy-on-write view over one entity's resources dict."""

    def __init__(self, resources: dict[str, Resource]):
        self.resources = resources
        self._copied_map = False
        self._copied: set[str] = set()

    def _own_map(self) -> dict[str, Resource]:
        if not self._copied_map:
            self.resources = dict(self.resources)
            self._copied_map = True
        return self.resources

    def create(self, id: str, data: dict[str, Any]) -> None:
        self._own_map()[id] = dict(data)
        self._copied.add(id)

    def delete(self, id: str) -> None:
        if id in self.resources:
            del self._own_map()[id]
            self._copied.discard(id)

    def writable(self, id: str) -> Resource | None:
        if id not in self.resources:
            return None
        if id not in self._copied:
            self._own_map()[id] = dict(self.resources[id])
            self._copied.add(id)
        return self.resources[id]


def reduce_resources(
    reader: ModelSchemaReader,
    entity: str,
    resources: dict[str, Resource],
    ops: Iterable[Op],
) -> dict[str, Resource]:
    """Apply the ops of one entity to its resources dict."""
    writer = _ResourcesWriter(resources)

    for op in ops:
        if isinstance(op, AddResource):
            if op.id not in writer.resources:
                writer.create(op.id, op.data)
        elif isinstance(op, RemoveResource):
            writer.delete(op.id)
        elif isinstance(op, EditResource):
            resource = writer.writable(op.id)
            if resource is not None:
                resource.update(op.data)
        elif isinstance(op, (AddRelId, RemoveRelId, MoveRelId)):
            _reduce_rel(reader, entity, writer, op)

    return writer.resources


def _reduce_rel(
    reader: ModelSchemaReader,
    entity: str,
    writer: _ResourcesWriter,
    op: AddRelId | RemoveRelId | MoveRelId,
) -> None:
    rel_schema = reader.rel_schema(entity, op.rel)
    if rel_schema is None or op.id not in writer.resources:
        return

    current = read_relation(rel_schema.cardinality, writer.resources[op.id].get(op.rel))
    updated = _next_relation(current, op)
    if updated is None:
        return

    # A missing key is written even when the value is unchanged so the key
    # exists after an attach.
    if updated == current and op.rel in writer.resources[op.id]:
        return

    writer.writable(op.id)[op.rel] = updated.raw()


def _next_relation(current: Single | Ordered, op: Op) -> Single | Ordered | None:
    if isinstance(current, Single):
        if isinstance(op, AddRelId):
            return Single(op.rel_id)
        if isinstance(op, RemoveRelId):
            if op.rel_id is None or current.holds(op.rel_id):
                return Single()
            return current
        # Moving within a one-relation is meaningless.
        return None

    if isinstance(op, AddRelId):
        if current.holds(op.rel_id):
            return current
        return Ordered(tuple(insert_at(list(current.ids), op.rel_id, op.index)))
    if isinstance(op, RemoveRelId):
        if op.rel_id is None:
            return Ordered()
        return Ordered(tuple(id_ for id_ in current.ids if id_ != op.rel_id))
    moved = move_within(list(current.ids), op.src, op.dest)
    return None if moved is None else Ordered(tuple(moved))


# ---------------------------------------------------------------------------
# Whole state
# ---------------------------------------------------------------------------


def apply_ops(reader: ModelSchemaReader, state: State, ops: Iterable[Op]) -> State:
    """Fold ops over a state and return the next state.

    Args:
        reader: Schema reader used to interpret relation cardinalities.
        state: The current state; it is never modified.
        ops: Ops in application order.

    Returns:
        The next State. Returns ``state`` itself when ``ops`` is empty.
    """
    by_entity: dict[str, list[Op]] = {}
    for op in ops:
        by_entity.setdefault(op.entity, []).append(op)

    if not by_entity:
        return state

    resources = dict(state.resources)
    ids = dict(state.ids)

    for entity, entity_ops in by_entity.items():
        creates = any(isinstance(op, AddResource) for op in entity_ops)
        if entity not in state.resources and not creates:
            continue

        resources[entity] = reduce_resources(
            reader, entity, state.resources.get(entity, {}), entity_ops
        )
        if any(op.touches_ids for op in entity_ops) or entity not in ids:
            ids[entity] = reduce_ids(state.ids.get(entity, []), entity_ops)

    return State(resources=resources, ids=ids)
