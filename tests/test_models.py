"""Tests for the Thing / Relation / Operation model."""

import dataclasses

import pytest

from jsonld_things.models import Operation, Relation, Thing


class TestOperation:
    def test_defaults(self):
        op = Operation()
        assert (op.id, op.target, op.method, op.expects, op.types) == ("", "", "", "", [])

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Operation(id="op").method = "GET"

    @pytest.mark.parametrize(
        "target, expected",
        [
            ("/blogs/new", "https://ex.org/blogs/new"),
            ("new", "https://ex.org/api/new"),
            ("https://other.org/x", "https://other.org/x"),
        ],
    )
    def test_resolve_target(self, target, expected):
        op = Operation(id="op", target=target)
        assert op.resolve_target("https://ex.org/api/blogs") == expected

    def test_hashable(self):
        a = Operation(id="op", method="GET", types=["X"])
        b = Operation(id="op", method="GET", types=["X"])
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_resolve_target_without_base(self):
        assert Operation(target="/blogs").resolve_target(None) == "/blogs"

    def test_to_dict(self):
        op = Operation(id="op", target="t", method="POST", expects="e", types=["X"])
        assert op.to_dict() == {
            "@id": "op",
            "@type": ["X"],
            "target": "t",
            "method": "POST",
            "expects": "e",
        }


class TestRelation:
    def test_bare_reference(self):
        relation = Relation(id="https://ex.org/a")
        assert relation.thing is None
        assert not relation.is_resolved

    def test_resolved(self):
        relation = Relation(id="a", thing=Thing(id="a"))
        assert relation.is_resolved
        assert relation.thing.id == relation.id

    def test_hashable_with_embedded_thing(self):
        relation = Relation(id="a", thing=Thing(id="a", attributes={"v": [1]}))
        assert len({relation, Relation(id="a", thing=Thing(id="a", attributes={"v": [1]}))}) == 1


class TestThing:
    def test_defaults(self):
        thing = Thing()
        assert thing.id == ""
        assert thing.types == []
        assert thing.attributes == {}
        assert thing.operations == {}

    def test_hash_uses_id(self):
        thing = Thing(id="a", types=["T"], attributes={"tags": [{"x": 1}]})
        assert hash(thing) == hash(Thing(id="a"))
        assert thing != Thing(id="a")

    def test_usable_in_sets(self):
        things = {Thing(id="a", attributes={"v": 1}), Thing(id="a", attributes={"v": 1})}
        assert len(things) == 1

    def test_get_operation_case_insensitive(self):
        post = Operation(id="create", method="POST")
        thing = Thing(operations={"read": Operation(id="read", method="GET"), "create": post})
        assert thing.get_operation("post") is post
        assert thing.get_operation("DELETE") is None

    def test_to_dict_collapses_relations(self):
        bob = Thing(id="bob", attributes={"name": "Bob"})
        thing = Thing(
            id="post",
            types=["BlogPosting"],
            attributes={
                "author": Relation(id="bob", thing=bob),
                "tags": [{"label": "x"}],
                "comments": [Relation(id="c1")],
                "view": {"next": Relation(id="p2")},
            },
            operations={"op": Operation(id="op", method="DELETE")},
        )
        assert thing.to_dict() == {
            "@id": "post",
            "@type": ["BlogPosting"],
            "author": {"@id": "bob"},
            "tags": [{"label": "x"}],
            "comments": [{"@id": "c1"}],
            "view": {"next": {"@id": "p2"}},
            "operation": [
                {"@id": "op", "@type": [], "target": "", "method": "DELETE", "expects": ""},
            ],
        }

    def test_to_dict_without_operations(self):
        assert Thing(id="a").to_dict() == {"@id": "a", "@type": []}
