"""Relation values, interpreted through the schema's declared cardinality."""

from dataclasses import dataclass
from typing import Any, Union

from ..schema.models import Cardinality


@dataclass(frozen=True)
class Single:
    """Value of a ``one`` relation: at most one id."""

    id: str | None = None

    @property
    def ids(self) -> tuple[str, ...]:
        return () if self.id is None else (self.id,)

    def holds(self, rel_id: str) -> bool:
        return self.id is not None and self.id == rel_id

    def raw(self) -> str | None:
        return self.id


@dataclass(frozen=True)
class Ordered:
    """Value of a ``many`` relation: an ordered tuple of distinct ids."""

    ids: tuple[str, ...] = ()

    def holds(self, rel_id: str) -> bool:
        return rel_id in self.ids

    def raw(self) -> list[str]:
        return list(self.ids)


RelationValue = Union[Single, Ordered]


def read_relation(cardinality: Cardinality, raw: Any) -> RelationValue:
    """Interpret a stored attribute value as a relation value.

    The cardinality decides the variant. Stored data of the wrong shape is
    coerced: a bare id under a ``many`` relation becomes a one-item list and a
    list under a ``one`` relation keeps its first id.
    """
    if cardinality == Cardinality.MANY:
        if raw is None:
            return Ordered()
        if isinstance(raw, str):
            return Ordered((raw,))
        return Ordered(tuple(dict.fromkeys(raw)))

    if isinstance(raw, (list, tuple)):
        return Single(raw[0] if raw else None)
    return Single(raw)


def insert_at(items: list, item: Any, index: int | None) -> list:
    """Return a copy of ``items`` with ``item`` inserted.

    ``None`` appends; other indices are clamped into ``[0, len(items)]``.
    """
    result = list(items)
    if index is None:
        result.append(item)
    else:
        result.insert(max(0, min(index, len(result))), item)
    return result


def move_within(items: list, src: int, dest: int) -> list | None:
    """Return a copy of ``items`` with the entry at ``src`` moved to ``dest``.

    Returns None when ``src`` is out of range. ``dest`` is clamped into the
    list bounds.
    """
    if not 0 <= src < len(items):
        return None
    result = list(items)
    item = result.pop(src)
    result.insert(max(0, min(dest, len(result))), item)
    return result


def clamp_move_dest(length: int, dest: int) -> int:
    return max(0, min(dest, length - 1))
