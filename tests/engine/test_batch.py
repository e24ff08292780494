"""Tests for batch actions."""

from relstore.engine import Engine


def _batch(*actions):
    return {"type": "batch", "actions": list(actions)}


def _detach(entity, id, rel, rel_id):
    return {"type": "detach", "entity": entity, "id": id, "rel": rel, "relId": rel_id}


class TestBatch:
    def test_add_actions(self, forum, empty_forum):
        result = forum.apply(
            empty_forum,
            _batch(
                {"type": "add", "entity": "account", "id": "a1"},
                {"type": "add", "entity": "account", "id": "a2", "index": 0},
            ),
        )

        assert result.ids["account"] == ["a2", "a1"]

    def test_remove_actions(self, forum, make_state, empty_forum):
        state = make_state({"account": {"a1": {}, "a2": {}}}, {"account": ["a1", "a2"]})

        result = forum.apply(
            state,
            _batch(
                {"type": "remove", "entity": "account", "id": "a1"},
                {"type": "remove", "entity": "account", "id": "a2"},
            ),
        )

        assert result == empty_forum

    def test_later_actions_see_earlier_ones(self, forum, empty_forum):
        result = forum.apply(
            empty_forum,
            _batch(
                {"type": "add", "entity": "post", "id": "o1"},
                {"type": "add", "entity": "tag", "id": "t1"},
                {"type": "attach", "entity": "post", "id": "o1", "rel": "tag", "relId": "t1"},
            ),
        )

        assert result.resources["post"]["o1"] == {"tagIds": ["t1"]}
        assert result.resources["tag"]["t1"] == {"postIds": ["o1"]}

    def test_detach_actions(self, forum, make_state):
        state = make_state(
            {
                "post": {"o1": {"categoryIds": ["c1", "c2"]}},
                "category": {"c1": {"postIds": ["o1"]}, "c2": {"postIds": ["o1"]}},
            },
            {"post": ["o1"], "category": ["c1", "c2"]},
        )

        result = forum.apply(
            state,
            _batch(
                _detach("post", "o1", "categoryIds", "c1"),
                _detach("category", "c2", "postIds", "o1"),
            ),
        )

        assert result.resources["post"]["o1"] == {"categoryIds": []}
        assert result.resources["category"] == {"c1": {"postIds": []}, "c2": {"postIds": []}}

    def test_move_attached_actions(self, forum, make_state):
        state = make_state(
            {
                "post": {"o1": {"categoryIds": ["c1", "c2", "c3", "c4", "c5"]}},
                "category": {f"c{n}": {"postIds": ["o1"]} for n in range(1, 6)},
            },
            {"post": ["o1"], "category": ["c1", "c2", "c3", "c4", "c5"]},
        )
        move = {"type": "move_attached", "entity": "post", "id": "o1", "rel": "categoryIds"}

        result = forum.apply(
            state, _batch({**move, "src": 1, "dest": 3}, {**move, "src": 0, "dest": 1})
        )

        assert result.resources["post"]["o1"]["categoryIds"] == ["c3", "c1", "c4", "c2", "c5"]

    def test_remove_undoes_earlier_attach(self, forum, make_state):
        state = make_state({"profile": {"p1": {}}}, {"profile": ["p1"]})

        derivation = forum.derive(
            state,
            _batch(
                {
                    "type": "add",
                    "entity": "post",
                    "id": "o1",
                    "attach": [{"rel": "profile", "id": "p1"}],
                },
                {"type": "remove", "entity": "post", "id": "o1"},
            ),
        )

        assert derivation.state.resources["profile"]["p1"] == {"postIds": []}
        assert derivation.state.ids["post"] == []
        assert len(derivation.ops) == 6

    def test_invalid_parts_are_skipped(self, forum_reader, empty_forum, hooks):
        engine = Engine(forum_reader, hooks.options())

        result = engine.apply(
            empty_forum,
            _batch(
                {"type": "add", "entity": "comment", "id": "x1"},
                {"type": "edit", "entity": "tag", "id": "t9", "data": {"name": "x"}},
                {"type": "add", "entity": "tag", "id": "t1"},
            ),
        )

        assert result.ids["tag"] == ["t1"]
        assert "comment" not in result.ids
        assert hooks.names() == ["invalid_entity", "nonexistent_resource"]

    def test_empty_batch(self, forum, empty_forum):
        derivation = forum.derive(empty_forum, _batch())

        assert derivation.ops == []
        assert derivation.state is empty_forum
