"""Graph layer for representing schemas as networkx graphs."""

from .schema_graph import SchemaGraph
from .builder import build_graph

__all__ = [
    "SchemaGraph",
    "build_graph",
]
