"""Pydantic models for relstore schemas."""

from enum import Enum

from pydantic import BaseModel, model_validator


class Cardinality(str, Enum):
    """How many ids a relation key holds."""

    ONE = "one"
    MANY = "many"


class RelSchema(BaseModel):
    """A relation declared on an entity.

    ``entity`` is the target entity and ``reciprocal`` is the relation key on
    the target that stores the reverse direction.
    """

    entity: str
    cardinality: Cardinality
    reciprocal: str

    @model_validator(mode="before")
    @classmethod
    def normalize_rel(cls, data: dict) -> dict:
        """Accept target aliases and case-insensitive cardinalities."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        for alias in ("targetEntity", "target_entity", "target"):
            if alias in data and "entity" not in data:
                data["entity"] = data.pop(alias)

        cardinality = data.get("cardinality")
        if isinstance(cardinality, str):
            data["cardinality"] = cardinality.lower()

        return data

    @property
    def is_many(self) -> bool:
        return self.cardinality == Cardinality.MANY


class ModelSchema(BaseModel):
    """Root model: entity name -> relation key -> RelSchema."""

    entities: dict[str, dict[str, RelSchema]]

    @model_validator(mode="before")
    @classmethod
    def normalize_entities(cls, data: dict) -> dict:
        """Treat empty entity declarations as entities without relations."""
        if not isinstance(data, dict):
            return data

        entities = data.get("entities")
        if isinstance(entities, dict):
            data = dict(data)
            data["entities"] = {
                name: ({} if rels is None else rels) for name, rels in entities.items()
            }
        return data

    @classmethod
    def from_mapping(cls, mapping: dict) -> "ModelSchema":
        """Build a schema from the bare ``entity -> rel -> {...}`` mapping."""
        return cls.model_validate({"entities": mapping})

    def get_entity(self, name: str) -> dict[str, RelSchema] | None:
        """Get the relations declared for an entity."""
        return self.entities.get(name)

    def get_all_entity_names(self) -> list[str]:
        """Get all entity names."""
        return list(self.entities.keys())

    def to_mapping(self) -> dict:
        """Dump back to the bare mapping form."""
        return {
            entity: {
                rel: rel_schema.model_dump(mode="json")
                for rel, rel_schema in rels.items()
            }
            for entity, rels in self.entities.items()
        }
