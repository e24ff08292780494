"""Tests for schema validators."""

from relstore.graph.builder import build_graph
from relstore.schema.models import ModelSchema
from relstore.validators.orphan_detector import check_isolated_entities
from relstore.validators.reciprocity import check_reciprocal_integrity


def _rel(entity, cardinality, reciprocal):
    return {"entity": entity, "cardinality": cardinality, "reciprocal": reciprocal}


def _check(mapping):
    schema = ModelSchema.from_mapping(mapping)
    return check_reciprocal_integrity(schema, build_graph(schema))


class TestReciprocalIntegrity:
    def test_forum_is_valid(self, forum_schema):
        result = _check(forum_schema)

        assert result.is_valid
        assert result.issues == []

    def test_missing_target_entity(self):
        result = _check({"author": {"articleIds": _rel("article", "many", "authorId")}})

        assert [e.code for e in result.errors] == ["MISSING_RECIPROCAL"]
        assert result.errors[0].location == "author.articleIds"
        assert result.errors[0].details["target_entity"] == "article"

    def test_missing_reciprocal_key(self):
        result = _check(
            {
                "author": {"articleIds": _rel("article", "many", "authorId")},
                "article": {},
            }
        )

        assert [e.code for e in result.errors] == ["MISSING_RECIPROCAL"]

    def test_target_mismatch(self):
        result = _check(
            {
                "author": {"articleIds": _rel("article", "many", "authorId")},
                "editor": {"articleIds": _rel("article", "many", "authorId")},
                "article": {"authorId": _rel("author", "one", "articleIds")},
            }
        )

        codes = [e.code for e in result.errors]
        assert codes == ["RECIPROCAL_TARGET_MISMATCH"]
        assert result.errors[0].entity == "editor"

    def test_asymmetric_reciprocal(self):
        result = _check(
            {
                "author": {"articleIds": _rel("article", "many", "authorId")},
                "article": {"authorId": _rel("author", "one", "writerIds")},
            }
        )

        codes = sorted(e.code for e in result.errors)
        assert codes == ["ASYMMETRIC_RECIPROCAL", "MISSING_RECIPROCAL"]

    def test_self_referential_pair(self):
        result = _check(
            {
                "node": {
                    "parentId": _rel("node", "one", "childIds"),
                    "childIds": _rel("node", "many", "parentId"),
                }
            }
        )

        assert result.is_valid


class TestIsolatedEntities:
    def test_isolated_entity_warns(self):
        schema = ModelSchema.from_mapping({"setting": {}})
        result = check_isolated_entities(build_graph(schema))

        assert not result.has_errors
        assert [w.code for w in result.warnings] == ["ISOLATED_ENTITY"]
        assert result.warnings[0].entity == "setting"

    def test_related_entities_do_not_warn(self, forum_schema):
        schema = ModelSchema.from_mapping(forum_schema)

        assert check_isolated_entities(build_graph(schema)).issues == []
