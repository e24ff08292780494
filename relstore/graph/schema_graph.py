"""SchemaGraph wrapper around networkx for relstore schemas."""

from typing import Any, Iterator

import networkx as nx

from ..schema.models import Cardinality


def _node_id(entity: str) -> str:
    return f"entity:{entity}"


class SchemaGraph:
    """A graph representation of a relstore schema.

    Wraps a networkx MultiDiGraph: one node per entity and one edge per
    declared relation key, keyed by that relation key. Two relation keys
    between the same pair of entities (or a pair of self-referential keys)
    become parallel edges.
    """

    def __init__(self):
        """Initialize an empty schema graph."""
        self._graph = nx.MultiDiGraph()

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Node management
    # -------------------------------------------------------------------------

    def add_entity(self, name: str, **attrs: Any) -> str:
        """Add an entity node to the graph.

        Args:
            name: The entity name.
            **attrs: Additional attributes for the node.

        Returns:
            The node ID.
        """
        node_id = _node_id(name)
        self._graph.add_node(node_id, name=name, **attrs)
        return node_id

    def add_relation(
        self,
        from_entity: str,
        rel: str,
        to_entity: str,
        cardinality: Cardinality,
        reciprocal: str,
    ) -> None:
        """Add a relation edge keyed by its relation key.

        Target entities that were never declared get a node marked
        ``declared=False`` so validators can report them.
        """
        to_id = _node_id(to_entity)
        if not self._graph.has_node(to_id):
            self.add_entity(to_entity, declared=False)

        self._graph.add_edge(
            _node_id(from_entity),
            to_id,
            key=rel,
            rel=rel,
            cardinality=cardinality,
            reciprocal=reciprocal,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_entity_names(self) -> list[str]:
        """Get the names of all declared entities."""
        return [
            data["name"]
            for _, data in self._graph.nodes(data=True)
            if data.get("declared", True)
        ]

    def has_entity(self, name: str) -> bool:
        node_id = _node_id(name)
        return self._graph.has_node(node_id) and self._graph.nodes[node_id].get(
            "declared", True
        )

    def get_relation(self, entity: str, rel: str) -> dict[str, Any] | None:
        """Get a relation edge by its owning entity and relation key."""
        node_id = _node_id(entity)
        if not self._graph.has_node(node_id):
            return None

        for _, target, key, data in self._graph.out_edges(
            node_id, keys=True, data=True
        ):
            if key == rel:
                return {**data, "entity": self._graph.nodes[target]["name"]}
        return None

    def get_relations_to(self, entity: str, target: str) -> list[str]:
        """Get the relation keys on ``entity`` that point at ``target``."""
        from_id = _node_id(entity)
        to_id = _node_id(target)
        if not self._graph.has_node(from_id) or not self._graph.has_edge(from_id, to_id):
            return []
        return list(self._graph.get_edge_data(from_id, to_id).keys())

    def has_any_relations(self, entity: str) -> bool:
        """Check if an entity has any relations (in or out)."""
        node_id = _node_id(entity)
        if not self._graph.has_node(node_id):
            return False
        return self._graph.degree(node_id) > 0

    def iter_relations(self) -> Iterator[tuple[str, str, str, dict[str, Any]]]:
        """Iterate over all relation edges.

        Yields:
            Tuples of (from_entity, rel, to_entity, edge data).
        """
        for source, target, key, data in self._graph.edges(keys=True, data=True):
            yield (
                self._graph.nodes[source]["name"],
                key,
                self._graph.nodes[target]["name"],
                data,
            )
