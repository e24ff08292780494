"""Tests for the op translator."""

import pytest

from relstore.actions.models import parse_action
from relstore.actions.translator import OpTranslator
from relstore.state.ops import (
    AddRelId,
    AddResource,
    EditResource,
    MoveRelId,
    MoveResource,
    RemoveRelId,
    RemoveResource,
)
from relstore.state.reducers import apply_ops


@pytest.fixture
def translator(forum_reader):
    return OpTranslator(forum_reader)


@pytest.fixture
def linked(make_state):
    """a1 owns p1; o1 is written by p1 and tagged t1; p2 is free."""
    return make_state(
        {
            "account": {"a1": {"profileId": "p1"}},
            "profile": {"p1": {"accountId": "a1", "postIds": ["o1"]}, "p2": {}},
            "post": {"o1": {"profileId": "p1", "tagIds": ["t1"]}},
            "tag": {"t1": {"postIds": ["o1"]}},
        },
        {"account": ["a1"], "profile": ["p1", "p2"], "post": ["o1"], "tag": ["t1"]},
    )


def _translate(translator, state, action):
    return translator.translate(state, parse_action(action))


class TestTranslate:
    def test_add_ops(self, translator, linked):
        _, ops = _translate(
            translator,
            linked,
            {
                "type": "add",
                "entity": "post",
                "id": "o2",
                "data": {"title": "x"},
                "attach": [{"rel": "profileId", "id": "p1"}],
                "index": 0,
            },
        )

        assert ops == [
            AddResource("post", "o2", {"title": "x"}, 0),
            AddRelId("post", "o2", "profileId", "p1"),
            AddRelId("profile", "p1", "postIds", "o2"),
        ]

    def test_attach_overwrites_one_relation(self, translator, linked):
        state, ops = _translate(
            translator,
            linked,
            {"type": "attach", "entity": "account", "id": "a1", "rel": "profile", "relId": "p2"},
        )

        assert ops == [
            RemoveRelId("account", "a1", "profileId", "p1"),
            RemoveRelId("profile", "p1", "accountId", "a1"),
            AddRelId("account", "a1", "profileId", "p2"),
            AddRelId("profile", "p2", "accountId", "a1"),
        ]
        assert state.resources["profile"]["p1"]["accountId"] is None

    def test_attach_again_emits_nothing(self, translator, linked):
        state, ops = _translate(
            translator,
            linked,
            {"type": "attach", "entity": "post", "id": "o1", "rel": "tagIds", "relId": "t1"},
        )

        assert ops == []
        assert state is linked

    def test_attach_repairs_one_sided_pair(self, translator, make_state):
        state = make_state(
            {"post": {"o1": {"tagIds": ["t1"]}}, "tag": {"t1": {"postIds": []}}},
            {"post": ["o1"], "tag": ["t1"]},
        )

        _, ops = _translate(
            translator,
            state,
            {"type": "attach", "entity": "post", "id": "o1", "rel": "tagIds", "relId": "t1"},
        )

        assert ops == [AddRelId("tag", "t1", "postIds", "o1")]

    def test_detach_ops(self, translator, linked):
        _, ops = _translate(
            translator,
            linked,
            {"type": "detach", "entity": "tag", "id": "t1", "rel": "post", "relId": "o1"},
        )

        assert ops == [
            RemoveRelId("tag", "t1", "postIds", "o1"),
            RemoveRelId("post", "o1", "tagIds", "t1"),
        ]

    def test_remove_detaches_before_removing(self, translator, linked):
        _, ops = _translate(
            translator, linked, {"type": "remove", "entity": "tag", "id": "t1"}
        )

        assert ops == [
            RemoveRelId("tag", "t1", "postIds", "o1"),
            RemoveRelId("post", "o1", "tagIds", "t1"),
            RemoveResource("tag", "t1"),
        ]

    def test_edit_and_move_ops(self, translator, linked):
        _, edit_ops = _translate(
            translator,
            linked,
            {"type": "edit", "entity": "post", "id": "o1", "data": {"title": "y"}},
        )
        _, move_ops = _translate(
            translator, linked, {"type": "move", "entity": "profile", "src": 1, "dest": 0}
        )

        assert edit_ops == [EditResource("post", "o1", {"title": "y"})]
        assert move_ops == [MoveResource("profile", 1, 0)]

    def test_move_attached_clamps_dest(self, translator, make_state):
        state = make_state({"post": {"o1": {"tagIds": ["t1", "t2", "t3"]}}}, {"post": ["o1"]})

        _, ops = _translate(
            translator,
            state,
            {
                "type": "move_attached",
                "entity": "post",
                "id": "o1",
                "rel": "tag",
                "src": 0,
                "dest": 9,
            },
        )

        assert ops == [MoveRelId("post", "o1", "tagIds", 0, 2)]

    def test_relation_data_only_edit_emits_nothing(self, translator, linked):
        _, ops = _translate(
            translator,
            linked,
            {"type": "edit", "entity": "post", "id": "o1", "data": {"tagIds": []}},
        )

        assert ops == []

    def test_state_equals_fold_of_ops(self, translator, linked, forum_reader):
        state, ops = _translate(
            translator,
            linked,
            {
                "type": "batch",
                "actions": [
                    {
                        "type": "remove",
                        "entity": "profile",
                        "id": "p1",
                        "removalShape": {"post": {}},
                    },
                    {
                        "type": "attach",
                        "entity": "account",
                        "id": "a1",
                        "rel": "profileId",
                        "relId": "p2",
                    },
                ],
            },
        )

        assert apply_ops(forum_reader, linked, ops) == state
        assert state.ids["post"] == []
        assert state.resources["account"]["a1"] == {"profileId": "p2"}
        assert state.resources["tag"]["t1"] == {"postIds": []}
