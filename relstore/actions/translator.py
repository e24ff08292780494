"""
Op translator: turns one action into an ordered op log.

Every business rule lives here: existence checks, relation resolution,
cardinality handling, idempotent attach, self-healing of one-sided relations
and cascading removal. Invalid parts of an action are skipped (the matching
hook is called) and the rest of the action still applies; nothing here raises
for bad input.

Ops are applied to a working state as soon as they are emitted, so later
rules of the same action (and later actions of a batch) see the effect of
earlier ones. The final working state is exactly what folding the op log over
the input state produces.
"""

import logging
from typing import Any

from pydantic import BaseModel

from ..options import Options
from ..schema.reader import ModelSchemaReader
from ..state.models import State
from ..state.ops import (
    AddRelId,
    AddResource,
    EditResource,
    MoveRelId,
    MoveResource,
    Op,
    RemoveRelId,
    RemoveResource,
)
from ..state.reducers import apply_ops
from ..state.relations import (
    Ordered,
    RelationValue,
    Single,
    clamp_move_dest,
    read_relation,
)
from ..state.tree import get_resource_tree
from .models import (
    ActionType,
    AddAction,
    AttachAction,
    BatchAction,
    DetachAction,
    EditAction,
    MoveAction,
    MoveAttachedAction,
    RemoveAction,
)

logger = logging.getLogger(__name__)


class _OpLog:
    """Ops emitted so far, and the state they produce."""

    def __init__(self, reader: ModelSchemaReader, state: State):
        self._reader = reader
        self.state = state
        self.ops: list[Op] = []

    def emit(self, op: Op) -> None:
        self.ops.append(op)
        self.state = apply_ops(self._reader, self.state, [op])


class OpTranslator:
    """Translate actions into ops against a state."""

    def __init__(self, reader: ModelSchemaReader, options: Options | None = None):
        self._reader = reader
        self._options = options or Options()
        self._handlers = {
            ActionType.ADD: self._add,
            ActionType.REMOVE: self._remove,
            ActionType.EDIT: self._edit,
            ActionType.MOVE: self._move,
            ActionType.ATTACH: self._attach,
            ActionType.DETACH: self._detach,
            ActionType.MOVE_ATTACHED: self._move_attached,
            ActionType.BATCH: self._batch,
        }

    def translate(self, state: State, action: BaseModel) -> tuple[State, list[Op]]:
        """Derive the ops for ``action`` and the state they lead to.

        Args:
            state: The current state.
            action: A parsed action model.

        Returns:
            Tuple of (next state, ops in application order).
        """
        log = _OpLog(self._reader, state)
        self._dispatch(log, action)
        return log.state, log.ops

    def _dispatch(self, log: _OpLog, action: BaseModel) -> None:
        self._handlers[ActionType(action.type)](log, action)

    # -------------------------------------------------------------------------
    # Action handlers
    # -------------------------------------------------------------------------

    def _add(self, log: _OpLog, action: AddAction) -> None:
        if not self._check_entity(log.state, action.entity):
            return
        if log.state.has_resource(action.entity, action.id):
            logger.debug("Not adding %s '%s': it already exists", action.entity, action.id)
            return

        data = self._plain_data(action.entity, action.data)
        log.emit(AddResource(action.entity, action.id, data, action.index))

        for attachable in action.attach:
            self._attach_pair(
                log,
                action.entity,
                action.id,
                attachable.rel,
                attachable.id,
                attachable.index,
                attachable.reciprocal_index,
            )

    def _remove(self, log: _OpLog, action: RemoveAction) -> None:
        if not self._check_entity(log.state, action.entity):
            return
        if not self._check_exists(log.state, action.entity, action.id):
            return

        # The tree is taken before anything is detached; detaching the root
        # first would cut every path the shape describes.
        victims = get_resource_tree(
            self._reader,
            log.state,
            action.entity,
            action.id,
            action.removal_shape,
            by_entity=self._options.resolve_rel_from_entity,
        )

        for node in victims:
            self._detach_all(log, node.entity, node.id)
            log.emit(RemoveResource(node.entity, node.id))

    def _edit(self, log: _OpLog, action: EditAction) -> None:
        if not self._check_entity(log.state, action.entity):
            return
        if not self._check_exists(log.state, action.entity, action.id):
            return

        data = self._plain_data(action.entity, action.data)
        if data:
            log.emit(EditResource(action.entity, action.id, data))

    def _move(self, log: _OpLog, action: MoveAction) -> None:
        if not self._check_entity(log.state, action.entity):
            return

        ids = log.state.get_ids(action.entity)
        dest = self._move_dest(action.entity, len(ids), action.src, action.dest)
        if dest is not None:
            log.emit(MoveResource(action.entity, action.src, dest))

    def _attach(self, log: _OpLog, action: AttachAction) -> None:
        if not self._check_entity(log.state, action.entity):
            return
        self._attach_pair(
            log,
            action.entity,
            action.id,
            action.rel,
            action.rel_id,
            action.index,
            action.reciprocal_index,
        )

    def _detach(self, log: _OpLog, action: DetachAction) -> None:
        if not self._check_entity(log.state, action.entity):
            return

        rel = self._resolve(action.entity, action.rel)
        if rel is None:
            return
        if not self._check_exists(log.state, action.entity, action.id):
            # The other side may still hold the missing id.
            target = self._reader.rel_schema(action.entity, rel).entity
            if not log.state.has_resource(target, action.rel_id):
                return

        self._unlink(log, action.entity, action.id, rel, action.rel_id)

    def _move_attached(self, log: _OpLog, action: MoveAttachedAction) -> None:
        if not self._check_entity(log.state, action.entity):
            return

        rel = self._resolve(action.entity, action.rel)
        if rel is None:
            return
        if not self._check_exists(log.state, action.entity, action.id):
            return

        resource = log.state.get_resource(action.entity, action.id)
        if rel not in resource:
            logger.debug("Not moving in %s '%s': no '%s' value", action.entity, action.id, rel)
            return

        current = self._relation(log.state, action.entity, action.id, rel)
        if not isinstance(current, Ordered):
            logger.debug("Not moving in '%s.%s': relation holds a single id", action.entity, rel)
            return

        dest = self._move_dest(f"{action.entity}.{rel}", len(current.ids), action.src, action.dest)
        if dest is not None:
            log.emit(MoveRelId(action.entity, action.id, rel, action.src, dest))

    def _batch(self, log: _OpLog, action: BatchAction) -> None:
        for sub_action in action.actions:
            self._dispatch(log, sub_action)

    # -------------------------------------------------------------------------
    # Relation rules
    # -------------------------------------------------------------------------

    def _attach_pair(
        self,
        log: _OpLog,
        entity: str,
        id: str,
        reference: str,
        rel_id: str,
        index: int | None,
        reciprocal_index: int | None,
    ) -> None:
        rel = self._resolve(entity, reference)
        if rel is None:
            return

        rel_schema = self._reader.rel_schema(entity, rel)
        if not self._check_exists(log.state, entity, id):
            return
        if not self._check_exists(log.state, rel_schema.entity, rel_id):
            return

        # Both sides are written independently, which also repairs a pair
        # that was attached on one side only.
        self._link(log, entity, id, rel, rel_id, index)
        self._link(log, rel_schema.entity, rel_id, rel_schema.reciprocal, id, reciprocal_index)

    def _link(
        self,
        log: _OpLog,
        entity: str,
        id: str,
        rel: str,
        rel_id: str,
        index: int | None,
    ) -> None:
        """Make ``entity.id`` hold ``rel_id`` under ``rel``."""
        current = self._relation(log.state, entity, id, rel)
        if current.holds(rel_id):
            return

        if isinstance(current, Single):
            # A one-relation is overwritten; its previous partner lets go too.
            if current.id is not None:
                self._unlink(log, entity, id, rel, current.id)
            index = None

        log.emit(AddRelId(entity, id, rel, rel_id, index))

    def _unlink(self, log: _OpLog, entity: str, id: str, rel: str, rel_id: str) -> None:
        """Clear the pair ``entity.id`` / ``rel_id`` on whichever sides hold it."""
        rel_schema = self._reader.rel_schema(entity, rel)

        if self._relation(log.state, entity, id, rel).holds(rel_id):
            log.emit(RemoveRelId(entity, id, rel, rel_id))

        target, reciprocal = rel_schema.entity, rel_schema.reciprocal
        if self._relation(log.state, target, rel_id, reciprocal).holds(id):
            log.emit(RemoveRelId(target, rel_id, reciprocal, id))

    def _detach_all(self, log: _OpLog, entity: str, id: str) -> None:
        for rel in self._reader.rel_keys(entity):
            for rel_id in self._relation(log.state, entity, id, rel).ids:
                self._unlink(log, entity, id, rel, rel_id)

    def _relation(self, state: State, entity: str, id: str, rel: str) -> RelationValue:
        rel_schema = self._reader.rel_schema(entity, rel)
        resource = state.get_resource(entity, id) or {}
        return read_relation(rel_schema.cardinality, resource.get(rel))

    # -------------------------------------------------------------------------
    # Guards
    # -------------------------------------------------------------------------

    def _check_entity(self, state: State, entity: str) -> bool:
        if self._reader.has_entity(entity) or entity in state.ids:
            return True
        logger.debug("Skipping action on unknown entity '%s'", entity)
        self._options.on_invalid_entity(entity)
        return False

    def _check_exists(self, state: State, entity: str, id: str) -> bool:
        if state.has_resource(entity, id):
            return True
        logger.debug("Skipping action part: %s '%s' does not exist", entity, id)
        self._options.on_nonexistent_resource(entity, id)
        return False

    def _resolve(self, entity: str, reference: str) -> str | None:
        resolution = self._reader.resolve(
            entity, reference, by_entity=self._options.resolve_rel_from_entity
        )
        if resolution.found:
            return resolution.rel
        logger.debug(
            "Cannot resolve relation '%s' on '%s': %s",
            reference,
            entity,
            resolution.status.value,
        )
        self._options.on_invalid_rel(entity, reference)
        return None

    def _plain_data(self, entity: str, data: dict[str, Any]) -> dict[str, Any]:
        """Drop relation keys from attribute data."""
        plain = {}
        for key, value in data.items():
            if self._reader.is_rel(entity, key):
                logger.debug("Ignoring relation data '%s' on '%s'", key, entity)
                self._options.on_invalid_rel_data(entity, key)
                continue
            plain[key] = value
        return plain

    def _move_dest(self, target: str, length: int, src: int, dest: int) -> int | None:
        """Clamp ``dest``; None when the move is out of range or does nothing."""
        if not 0 <= src < length:
            logger.debug("Not moving in '%s': index %d out of range", target, src)
            return None
        dest = clamp_move_dest(length, dest)
        return None if dest == src else dest
