"""The normalized store state."""

from dataclasses import dataclass, field
from typing import Any, Mapping

Resource = dict[str, Any]


@dataclass(frozen=True)
class State:
    """A normalized snapshot of every resource, grouped by entity.

    ``resources`` maps entity -> id -> resource and ``ids`` maps entity -> the
    canonical order of its ids. A State is never mutated in place; reducers
    return a new State that shares every untouched entity with the old one.
    """

    resources: dict[str, dict[str, Resource]] = field(default_factory=dict)
    ids: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: "Mapping | State | None") -> "State":
        """Build a State from its ``{"resources": ..., "ids": ...}`` form.

        ``None`` is the empty state.
        """
        if data is None:
            return cls()
        if isinstance(data, State):
            return data

        resources = data.get("resources") or {}
        ids = data.get("ids") or {}
        return cls(
            resources={
                entity: {id_: dict(resource or {}) for id_, resource in by_id.items()}
                for entity, by_id in resources.items()
            },
            ids={entity: list(entity_ids) for entity, entity_ids in ids.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "resources": {
                entity: {id_: dict(resource) for id_, resource in by_id.items()}
                for entity, by_id in self.resources.items()
            },
            "ids": {entity: list(entity_ids) for entity, entity_ids in self.ids.items()},
        }

    @property
    def entities(self) -> list[str]:
        """Entities present in the state, in first-seen order."""
        return list(dict.fromkeys([*self.ids, *self.resources]))

    def get_ids(self, entity: str) -> list[str]:
        return self.ids.get(entity, [])

    def get_resources(self, entity: str) -> dict[str, Resource]:
        return self.resources.get(entity, {})

    def has_resource(self, entity: str, id: str) -> bool:
        return id in self.resources.get(entity, {})

    def get_resource(self, entity: str, id: str) -> Resource | None:
        return self.resources.get(entity, {}).get(id)


def empty_state() -> State:
    """The initial state: no entities, no resources."""
    return State()
