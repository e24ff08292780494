"""State layer: normalized state, ops, reducers and the cascade walker."""

from .models import Resource, State, empty_state
from .ops import (
    AddRelId,
    AddResource,
    EditResource,
    MoveRelId,
    MoveResource,
    Op,
    OpType,
    RemoveRelId,
    RemoveResource,
    op_from_dict,
)
from .reducers import apply_ops, reduce_ids, reduce_resources
from .relations import Ordered, RelationValue, Single, read_relation
from .shapes import RemovalShape, ShapeError
from .tree import ResourceNode, get_resource_tree

__all__ = [
    "Resource",
    "State",
    "empty_state",
    "AddRelId",
    "AddResource",
    "EditResource",
    "MoveRelId",
    "MoveResource",
    "Op",
    "OpType",
    "RemoveRelId",
    "RemoveResource",
    "op_from_dict",
    "apply_ops",
    "reduce_ids",
    "reduce_resources",
    "Ordered",
    "RelationValue",
    "Single",
    "read_relation",
    "RemovalShape",
    "ShapeError",
    "ResourceNode",
    "get_resource_tree",
]
