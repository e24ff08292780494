"""Removal shapes: recursive trees of relation references.

A shape tells a cascade which relations to follow from a resource. Each node
maps relation references (relation keys or related entity names) to child
nodes. A node may appear among its own descendants, which expresses "repeat
this shape at every depth"::

    tree = RemovalShape.recursive("childIds")

The mapping form is plain nested dicts. A node may be named with ``"$name"``
and a child may refer back to an enclosing named node with ``{"$ref": name}``::

    {"$name": "tree", "childIds": {"$ref": "tree"}}
"""

from typing import Any, Mapping


class ShapeError(ValueError):
    """Raised when a shape mapping cannot be parsed."""


class RemovalShape:
    """One node of a removal shape."""

    def __init__(
        self,
        children: Mapping[str, "RemovalShape | Mapping | None"] | None = None,
        name: str | None = None,
    ):
        self.name = name
        self.children: dict[str, RemovalShape] = {}
        for reference, child in (children or {}).items():
            self.children[reference] = RemovalShape.coerce(child)

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name else ""
        return f"RemovalShape({label}{list(self.children)})"

    def add(self, reference: str, child: "RemovalShape | None" = None) -> "RemovalShape":
        """Add a child under ``reference`` and return it."""
        if child is None:
            child = RemovalShape()
        self.children[reference] = child
        return child

    @classmethod
    def recursive(cls, *references: str, name: str = "self") -> "RemovalShape":
        """Build a node that follows ``references`` to itself at every depth."""
        node = cls(name=name)
        for reference in references:
            node.children[reference] = node
        return node

    @classmethod
    def coerce(cls, value: "RemovalShape | Mapping | None") -> "RemovalShape":
        """Turn None, a mapping or a shape into a shape."""
        if value is None:
            return cls()
        if isinstance(value, RemovalShape):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        raise ShapeError(f"Expected a mapping or RemovalShape, got {type(value).__name__}")

    @classmethod
    def from_dict(cls, data: Mapping) -> "RemovalShape":
        """Parse the mapping form, resolving ``$ref`` to enclosing ``$name`` nodes.

        Raises:
            ShapeError: On unknown references or directives.
        """
        return cls._parse(data, {})

    @classmethod
    def _parse(cls, data: Any, scope: dict[str, "RemovalShape"]) -> "RemovalShape":
        if data is None:
            return cls()
        if isinstance(data, RemovalShape):
            return data
        if not isinstance(data, Mapping):
            raise ShapeError(f"Expected a mapping, got {type(data).__name__}")

        if "$ref" in data:
            if len(data) != 1:
                raise ShapeError("A '$ref' node cannot declare other keys")
            ref = data["$ref"]
            if ref not in scope:
                raise ShapeError(f"Unknown shape reference '{ref}'")
            return scope[ref]

        name = data.get("$name")
        node = cls(name=name)
        inner = {**scope, name: node} if name else scope

        for reference, child in data.items():
            if reference == "$name":
                continue
            if reference.startswith("$"):
                raise ShapeError(f"Unknown shape directive '{reference}'")
            node.children[reference] = cls._parse(child, inner)

        return node

    def to_dict(self) -> dict[str, Any]:
        """Dump to the mapping form. Cycles become ``$ref`` entries."""
        names: dict[int, str] = {}
        return self._dump({}, names)

    def _dump(self, path: dict[int, dict], names: dict[int, str]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name:
            out["$name"] = self.name
        path = {**path, id(self): out}

        for reference, child in self.children.items():
            if id(child) in path:
                ref = child._ref_name(names)
                path[id(child)]["$name"] = ref
                out[reference] = {"$ref": ref}
            else:
                out[reference] = child._dump(path, names)

        return out

    def _ref_name(self, names: dict[int, str]) -> str:
        if id(self) not in names:
            names[id(self)] = self.name or f"shape{len(names)}"
        return names[id(self)]
