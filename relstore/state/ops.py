"""Ops: atomic, already-resolved units of work the reducers act upon."""

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar


class OpType(str, Enum):
    """Kinds of op understood by the reducers."""

    ADD_RESOURCE = "ADD_RESOURCE"
    REMOVE_RESOURCE = "REMOVE_RESOURCE"
    EDIT_RESOURCE = "EDIT_RESOURCE"
    MOVE_RESOURCE = "MOVE_RESOURCE"
    ADD_REL_ID = "ADD_REL_ID"
    REMOVE_REL_ID = "REMOVE_REL_ID"
    MOVE_REL_ID = "MOVE_REL_ID"


@dataclass(frozen=True)
class Op:
    """Base class for ops. Every op addresses a single entity."""

    op_type: ClassVar[OpType]

    entity: str

    @property
    def touches_ids(self) -> bool:
        """Whether the op changes the entity's ordered id list."""
        return self.op_type in _IDS_OPS

    def to_dict(self) -> dict[str, Any]:
        return {"op_type": self.op_type.value, **asdict(self)}


@dataclass(frozen=True)
class AddResource(Op):
    op_type: ClassVar[OpType] = OpType.ADD_RESOURCE

    id: str
    data: dict[str, Any] = field(default_factory=dict)
    index: int | None = None


@dataclass(frozen=True)
class RemoveResource(Op):
    op_type: ClassVar[OpType] = OpType.REMOVE_RESOURCE

    id: str


@dataclass(frozen=True)
class EditResource(Op):
    op_type: ClassVar[OpType] = OpType.EDIT_RESOURCE

    id: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MoveResource(Op):
    op_type: ClassVar[OpType] = OpType.MOVE_RESOURCE

    src: int
    dest: int


@dataclass(frozen=True)
class AddRelId(Op):
    op_type: ClassVar[OpType] = OpType.ADD_REL_ID

    id: str
    rel: str
    rel_id: str
    index: int | None = None


@dataclass(frozen=True)
class RemoveRelId(Op):
    """Remove ``rel_id`` from a relation; ``None`` clears the whole relation."""

    op_type: ClassVar[OpType] = OpType.REMOVE_REL_ID

    id: str
    rel: str
    rel_id: str | None = None


@dataclass(frozen=True)
class MoveRelId(Op):
    op_type: ClassVar[OpType] = OpType.MOVE_REL_ID

    id: str
    rel: str
    src: int
    dest: int


_IDS_OPS = {OpType.ADD_RESOURCE, OpType.REMOVE_RESOURCE, OpType.MOVE_RESOURCE}

OP_CLASSES: dict[OpType, type[Op]] = {
    cls.op_type: cls
    for cls in (
        AddResource,
        RemoveResource,
        EditResource,
        MoveResource,
        AddRelId,
        RemoveRelId,
        MoveRelId,
    )
}


def op_from_dict(data: dict[str, Any]) -> Op:
    """Rebuild an op from its ``to_dict`` form.

    Raises:
        ValueError: If the op type is unknown or fields are missing.
    """
    data = dict(data)
    op_type = OpType(data.pop("op_type"))
    cls = OP_CLASSES[op_type]
    names = {f.name for f in fields(cls)}
    unknown = set(data) - names
    if unknown:
        raise ValueError(f"Unknown fields for {op_type.value}: {sorted(unknown)}")
    try:
        return cls(**data)
    except TypeError as e:
        raise ValueError(f"Invalid {op_type.value} op: {e}") from e
