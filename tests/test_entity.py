"""
Tests for Entity and EntityCollection.
"""

import pytest

from relata.entity import Entity, EntityCollection


class SubclassedAccount(Entity):
    entity_type = "Account"


class TestEntity:

    def test_has_id(self):
        assert Entity("Account", id="a1").has_id() is True
        assert Entity("Account", id=0).has_id() is True
        assert Entity("Account").has_id() is False
        assert Entity("Account", id="").has_id() is False

    def test_attributes(self):
        e = Entity("Account", id="a1", name="Acme")
        assert e.get("name") == "Acme"
        assert e.get("id") == "a1"
        assert e.get("missing", 5) == 5
        e.set("name", "Globex")
        e.set("id", "a2")
        assert e.to_dict() == {"id": "a2", "name": "Globex"}
        assert e.has("name") and e.has("id") and not e.has("industry")

    def test_requires_entity_type(self):
        with pytest.raises(ValueError):
            Entity()

    def test_class_level_entity_type(self):
        e = SubclassedAccount(id="a1")
        assert e.entity_type == "Account"
        assert e == Entity("Account", id="a1")

    def test_equality_by_type_and_id(self):
        assert Entity("Account", id="a1") == Entity("Account", id="a1")
        assert Entity("Account", id="a1") != Entity("Contact", id="a1")
        assert Entity("Account", id="a1") != "a1"

    def test_unsaved_equality_is_identity(self):
        a = Entity("Account")
        assert a == a
        assert a != Entity("Account")

    def test_hashable(self):
        assert len({Entity("Account", id="a1"), Entity("Account", id="a1")}) == 1

    def test_repr(self):
        assert repr(Entity("Account", id="a1")) == "<Account id='a1'>"


class TestEntityCollection:

    def test_empty(self):
        c = EntityCollection()
        assert len(c) == 0
        assert not c
        assert list(c) == []

    def test_list_behaviour(self):
        a, b = Entity("Contact", id="1"), Entity("Contact", id="2")
        c = EntityCollection([a])
        c.append(b)
        assert c[0] is a
        assert c[-1] is b
        assert b in c
        assert c.ids() == ["1", "2"]
        assert isinstance(c[0:1], EntityCollection)
        assert c == [a, b]

    def test_constructor_copies_input(self):
        rows = [Entity("Contact", id="1")]
        c = EntityCollection(rows)
        rows.append(Entity("Contact", id="2"))
        assert len(c) == 1

    def test_snapshot(self):
        c = EntityCollection([Entity("Contact", id="1")], entity_type="Contact")
        s = c.snapshot()
        assert s is not c
        assert s == c
        assert s.entity_type == "Contact"
        s.append(Entity("Contact", id="2"))
        assert len(c) == 1

    def test_snapshot_shares_elements(self):
        e = Entity("Contact", id="1")
        s = EntityCollection([e]).snapshot()
        assert s[0] is e

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(EntityCollection())

    def test_repr(self):
        assert repr(EntityCollection(entity_type="Contact")) == "<EntityCollection[Contact] size=0>"
