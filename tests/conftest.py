"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from relstore.engine import Engine
from relstore.options import Options
from relstore.schema.loader import parse_schema_from_string
from relstore.schema.reader import ModelSchemaReader
from relstore.state.models import State


FORUM_SCHEMA = {
    "account": {
        "profileId": {"entity": "profile", "cardinality": "one", "reciprocal": "accountId"},
    },
    "profile": {
        "accountId": {"entity": "account", "cardinality": "one", "reciprocal": "profileId"},
        "postIds": {"entity": "post", "cardinality": "many", "reciprocal": "profileId"},
    },
    "post": {
        "profileId": {"entity": "profile", "cardinality": "one", "reciprocal": "postIds"},
        "categoryIds": {"entity": "category", "cardinality": "many", "reciprocal": "postIds"},
        "tagIds": {"entity": "tag", "cardinality": "many", "reciprocal": "postIds"},
        "parentId": {"entity": "post", "cardinality": "one", "reciprocal": "childIds"},
        "childIds": {"entity": "post", "cardinality": "many", "reciprocal": "parentId"},
    },
    "category": {
        "postIds": {"entity": "post", "cardinality": "many", "reciprocal": "categoryIds"},
    },
    "tag": {
        "postIds": {"entity": "post", "cardinality": "many", "reciprocal": "tagIds"},
    },
}

FORUM_ENTITIES = ["account", "profile", "post", "category", "tag"]


def forum_state(resources: dict | None = None, ids: dict | None = None) -> State:
    """Build a forum state; every entity is present, empty unless given."""
    resources = resources or {}
    ids = ids or {}
    return State(
        resources={entity: resources.get(entity, {}) for entity in FORUM_ENTITIES},
        ids={entity: ids.get(entity, []) for entity in FORUM_ENTITIES},
    )


class HookRecorder:
    """Collects hook calls as (hook name, args) tuples."""

    def __init__(self):
        self.calls: list[tuple] = []

    def options(self, **kwargs) -> Options:
        return Options(
            on_invalid_entity=lambda *args: self.calls.append(("invalid_entity", args)),
            on_invalid_rel=lambda *args: self.calls.append(("invalid_rel", args)),
            on_invalid_rel_data=lambda *args: self.calls.append(("invalid_rel_data", args)),
            on_nonexistent_resource=lambda *args: self.calls.append(
                ("nonexistent_resource", args)
            ),
            **kwargs,
        )

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def forum_reader() -> ModelSchemaReader:
    return ModelSchemaReader(FORUM_SCHEMA)


@pytest.fixture
def forum(forum_reader) -> Engine:
    """Engine over the forum schema with default options."""
    return Engine(forum_reader)


@pytest.fixture
def empty_forum() -> State:
    return forum_state()


@pytest.fixture
def hooks() -> HookRecorder:
    return HookRecorder()


@pytest.fixture
def blog_schema_yaml() -> str:
    """Return a minimal author/article schema."""
    return """
author:
  articleIds:
    entity: article
    cardinality: many
    reciprocal: authorId

article:
  authorId:
    entity: author
    cardinality: one
    reciprocal: articleIds
"""


@pytest.fixture
def blog_schema(blog_schema_yaml):
    return parse_schema_from_string(blog_schema_yaml)


@pytest.fixture
def forum_schema() -> dict:
    """Return the forum schema mapping."""
    return FORUM_SCHEMA


@pytest.fixture
def make_state():
    """Return a builder for forum states with every entity present."""
    return forum_state
