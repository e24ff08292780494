"""Engine: the reducer entry point of the store.

``Engine.apply(state, action)`` returns the next state. ``Engine.derive``
also returns the op log that produced it, which callers can keep for auditing
or feed to undo tooling.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from pydantic import BaseModel

from .actions.models import parse_action
from .actions.translator import OpTranslator
from .options import Options
from .schema.models import ModelSchema
from .schema.reader import ModelSchemaReader
from .state.models import State
from .state.ops import Op, op_from_dict
from .state.reducers import apply_ops
from .state.shapes import RemovalShape
from .state.tree import ResourceNode, get_resource_tree
from .validators.base import ValidationResult
from .validators.state_integrity import check_state_integrity

logger = logging.getLogger(__name__)

StateLike = State | Mapping | None


@dataclass(frozen=True)
class Derivation:
    """The next state and the ops that lead to it."""

    state: State
    ops: list[Op] = field(default_factory=list)


class Engine:
    """A relational store reducer bound to one schema.

    The engine holds no state of its own: every call takes the current state
    and returns a new one.

    Args:
        schema: A schema reader, a ModelSchema or a raw schema mapping.
        options: Resolution switch and invalid-input hooks.

    Raises:
        SchemaValidationError: If the schema is malformed.
    """

    def __init__(
        self,
        schema: ModelSchemaReader | ModelSchema | Mapping,
        options: Options | None = None,
    ):
        if isinstance(schema, ModelSchemaReader):
            self.reader = schema
        else:
            self.reader = ModelSchemaReader(schema)
        self.options = options or Options()
        self._translator = OpTranslator(self.reader, self.options)

    def derive(self, state: StateLike, action: BaseModel | Mapping) -> Derivation:
        """Translate an action and apply it.

        Args:
            state: The current state; None is the empty state.
            action: An action model or its mapping form.

        Returns:
            The next state and the op log.

        Raises:
            ActionValidationError: If ``action`` is not a valid action.
        """
        state = State.from_dict(state)
        action = parse_action(action)

        next_state, ops = self._translator.translate(state, action)
        logger.debug("Derived %d op(s) from '%s' action", len(ops), action.type)
        return Derivation(next_state, ops)

    def apply(self, state: StateLike, action: BaseModel | Mapping) -> State:
        """Apply an action and return the next state."""
        return self.derive(state, action).state

    __call__ = apply

    def apply_ops(self, state: StateLike, ops: Iterable[Op | Mapping[str, Any]]) -> State:
        """Fold already-resolved ops (or their mapping form) over a state."""
        resolved = [op if isinstance(op, Op) else op_from_dict(dict(op)) for op in ops]
        return apply_ops(self.reader, State.from_dict(state), resolved)

    def get_resource_tree(
        self,
        state: StateLike,
        entity: str,
        id: str,
        shape: RemovalShape | Mapping | None = None,
    ) -> list[ResourceNode]:
        """Resources a removal of ``(entity, id)`` with ``shape`` would take."""
        return get_resource_tree(
            self.reader,
            State.from_dict(state),
            entity,
            id,
            shape,
            by_entity=self.options.resolve_rel_from_entity,
        )

    def check(self, state: StateLike) -> ValidationResult:
        """Check a state against the store invariants."""
        return check_state_integrity(self.reader, State.from_dict(state))


def apply(
    schema: ModelSchemaReader | ModelSchema | Mapping,
    state: StateLike,
    action: BaseModel | Mapping,
    options: Options | None = None,
) -> State:
    """One-shot form of ``Engine(schema, options).apply(state, action)``."""
    return Engine(schema, options).apply(state, action)
