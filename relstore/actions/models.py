"""Pydantic models for caller-facing actions."""

from enum import Enum
from typing import Annotated, Any, Iterable, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from ..state.shapes import RemovalShape
from .errors import ActionValidationError


class ActionType(str, Enum):
    """Kinds of action accepted by the engine."""

    ADD = "add"
    REMOVE = "remove"
    EDIT = "edit"
    MOVE = "move"
    ATTACH = "attach"
    DETACH = "detach"
    MOVE_ATTACHED = "move_attached"
    BATCH = "batch"


class _Model(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, extra="forbid", arbitrary_types_allowed=True
    )


class Attachable(_Model):
    """A resource to attach while adding another one."""

    rel: str
    id: str
    index: int | None = None
    reciprocal_index: int | None = Field(default=None, alias="reciprocalIndex")


class AddAction(_Model):
    """Create a resource, optionally attached to existing resources."""

    type: Literal["add"] = "add"
    entity: str
    id: str
    data: dict[str, Any] = Field(default_factory=dict)
    attach: list[Attachable] = Field(default_factory=list)
    index: int | None = None

    @field_validator("data", "attach", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return {} if info.field_name == "data" else []
        return value


class RemoveAction(_Model):
    """Remove a resource and cascade through ``removal_shape``."""

    type: Literal["remove"] = "remove"
    entity: str
    id: str
    removal_shape: RemovalShape | None = Field(
        default=None,
        validation_alias=AliasChoices("removal_shape", "removalShape", "removalSchema"),
    )

    @field_validator("removal_shape", mode="before")
    @classmethod
    def coerce_shape(cls, value: Any) -> RemovalShape | None:
        if value is None:
            return None
        return RemovalShape.coerce(value)


class EditAction(_Model):
    """Shallow-merge plain attribute data into a resource."""

    type: Literal["edit"] = "edit"
    entity: str
    id: str
    data: dict[str, Any]


class MoveAction(_Model):
    """Move the id at ``src`` to ``dest`` in an entity's ordered ids."""

    type: Literal["move"] = "move"
    entity: str
    src: int
    dest: int


class AttachAction(_Model):
    """Relate two resources on both sides."""

    type: Literal["attach"] = "attach"
    entity: str
    id: str
    rel: str
    rel_id: str = Field(alias="relId")
    index: int | None = None
    reciprocal_index: int | None = Field(default=None, alias="reciprocalIndex")


class DetachAction(_Model):
    """Unrelate two resources on both sides."""

    type: Literal["detach"] = "detach"
    entity: str
    id: str
    rel: str
    rel_id: str = Field(alias="relId")


class MoveAttachedAction(_Model):
    """Reorder one entry of a resource's many-relation."""

    type: Literal["move_attached"] = "move_attached"
    entity: str
    id: str
    rel: str
    src: int
    dest: int


ConcreteAction = Annotated[
    Union[
        AddAction,
        RemoveAction,
        EditAction,
        MoveAction,
        AttachAction,
        DetachAction,
        MoveAttachedAction,
    ],
    Field(discriminator="type"),
]


class BatchAction(_Model):
    """Apply actions in order, as if dispatched one after another."""

    type: Literal["batch"] = "batch"
    actions: list[ConcreteAction] = Field(default_factory=list)


Action = Annotated[
    Union[
        AddAction,
        RemoveAction,
        EditAction,
        MoveAction,
        AttachAction,
        DetachAction,
        MoveAttachedAction,
        BatchAction,
    ],
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter = TypeAdapter(Action)


def parse_action(data: Any) -> BaseModel:
    """Validate a mapping (or an action model) into an action model.

    Raises:
        ActionValidationError: If the data is not a valid action.
    """
    try:
        return _action_adapter.validate_python(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise ActionValidationError(
            f"Action validation failed with {len(errors)} error(s)", errors
        ) from e


def parse_actions(items: Iterable[Any]) -> list[BaseModel]:
    """Validate a sequence of actions."""
    return [parse_action(item) for item in items]
