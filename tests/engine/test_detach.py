"""Tests for the detach action."""

import pytest

from relstore.engine import Engine


def _detach(entity, id, rel, rel_id):
    return {"type": "detach", "entity": entity, "id": id, "rel": rel, "relId": rel_id}


class TestDetach:
    def test_one_cardinality(self, forum, make_state):
        state = make_state(
            {"account": {"a1": {"profileId": "p1"}}, "profile": {"p1": {"accountId": "a1"}}},
            {"account": ["a1"], "profile": ["p1"]},
        )

        result = forum.apply(state, _detach("account", "a1", "profileId", "p1"))

        assert result.resources["account"]["a1"] == {"profileId": None}
        assert result.resources["profile"]["p1"] == {"accountId": None}

    def test_many_cardinality(self, forum, make_state):
        state = make_state(
            {
                "post": {"o1": {"categoryIds": ["c1", "c2"]}},
                "category": {"c1": {"postIds": ["o1"]}, "c2": {"postIds": ["o1"]}},
            },
            {"post": ["o1"], "category": ["c1", "c2"]},
        )

        result = forum.apply(state, _detach("category", "c1", "postIds", "o1"))

        assert result.resources["post"]["o1"] == {"categoryIds": ["c2"]}
        assert result.resources["category"]["c1"] == {"postIds": []}
        assert result.resources["category"]["c2"] is state.resources["category"]["c2"]

    def test_entity_name(self, forum, make_state):
        state = make_state(
            {"post": {"o1": {"tagIds": ["t1"]}}, "tag": {"t1": {"postIds": ["o1"]}}},
            {"post": ["o1"], "tag": ["t1"]},
        )

        result = forum.apply(state, _detach("post", "o1", "tag", "t1"))

        assert result.resources["post"]["o1"] == {"tagIds": []}
        assert result.resources["tag"]["t1"] == {"postIds": []}

    def test_ambiguous_entity(self, forum_reader, make_state, hooks):
        state = make_state(
            {"post": {"o1": {"childIds": ["o2"]}, "o2": {"parentId": "o1"}}},
            {"post": ["o1", "o2"]},
        )
        engine = Engine(forum_reader, hooks.options())

        assert engine.apply(state, _detach("post", "o1", "post", "o2")) is state
        assert hooks.calls == [("invalid_rel", ("post", "post"))]


class TestDetachNoop:
    @pytest.fixture
    def state(self, make_state):
        return make_state(
            {
                "account": {"a1": {"profileId": "p1"}, "a200": {"profileId": None}},
                "profile": {"p1": {"accountId": "a1"}},
            },
            {"account": ["a1", "a200"], "profile": ["p1"]},
        )

    @pytest.mark.parametrize(
        "action",
        [
            _detach("account", "a9000", "profileId", "p1"),
            _detach("profile", "p9000", "accountId", "a1"),
        ],
    )
    def test_missing_resource(self, forum, state, action):
        assert forum.apply(state, action) is state

    @pytest.mark.parametrize(
        "action",
        [
            _detach("account", "a200", "profileId", "p1"),
            _detach("profile", "p1", "accountId", "a200"),
        ],
    )
    def test_missing_attachment(self, forum, state, action):
        derivation = forum.derive(state, action)

        assert derivation.ops == []
        assert derivation.state is state


class TestDetachPartial:
    @pytest.mark.parametrize(
        "action",
        [
            _detach("post", "o1", "categoryIds", "c1"),
            _detach("category", "c1", "postIds", "o1"),
        ],
    )
    def test_target_missing(self, forum_reader, make_state, hooks, action):
        state = make_state({"post": {"o1": {"categoryIds": ["c1"]}}}, {"post": ["o1"]})
        engine = Engine(forum_reader, hooks.options())

        result = engine.apply(state, action)

        assert result.resources["post"]["o1"] == {"categoryIds": []}
        assert not result.has_resource("category", "c1")

    def test_missing_id_still_reports(self, forum_reader, make_state, hooks):
        state = make_state({"post": {"o1": {"categoryIds": ["c1"]}}}, {"post": ["o1"]})
        engine = Engine(forum_reader, hooks.options())

        engine.apply(state, _detach("category", "c1", "postIds", "o1"))

        assert hooks.calls == [("nonexistent_resource", ("category", "c1"))]

    @pytest.mark.parametrize(
        "action",
        [
            _detach("post", "o1", "categoryIds", "c1"),
            _detach("category", "c1", "postIds", "o1"),
        ],
    )
    def test_one_sided_pair_is_cleared(self, forum, make_state, action):
        state = make_state(
            {"post": {"o1": {"categoryIds": ["c1"]}}, "category": {"c1": {"postIds": []}}},
            {"post": ["o1"], "category": ["c1"]},
        )

        result = forum.apply(state, action)

        assert result == make_state(
            {"post": {"o1": {"categoryIds": []}}, "category": {"c1": {"postIds": []}}},
            {"post": ["o1"], "category": ["c1"]},
        )
