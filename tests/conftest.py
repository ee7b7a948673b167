"""
Shared test fixtures and helpers for the relata test suite.
"""

from typing import Any, Dict, List, Optional

import pytest

from relata.catalog import MetadataRelationCatalog
from relata.entity import Entity, EntityCollection
from relata.metadata import Metadata, MetadataLoader


# ============================================================================
# Metadata
# ============================================================================


CRM_METADATA: Dict[str, Any] = {
    "entityDefs": {
        "Account": {
            "fields": {
                "name": {"type": "varchar"},
                "description": {"type": "text"},
                "status": {"type": "enum", "options": ["New", "Active", "Closed"]},
                "assignedUser": {"type": "link"},
            },
            "links": {
                "contacts": {"type": "hasMany", "entity": "Contact", "orderBy": "name", "order": "desc"},
                "opportunities": {"type": "hasMany", "entity": "Opportunity"},
                "teams": {"type": "manyMany", "entity": "Team", "orderBy": "name"},
                "tasks": {"type": "hasChildren", "entity": "Task", "orderBy": "dateStart", "order": "Asc"},
                "assignedUser": {"type": "belongsTo", "entity": "User"},
                "parent": {"type": "belongsToParent"},
                "billingProfile": {"type": "hasOne", "entity": "BillingProfile"},
            },
            "collection": {"orderBy": "name"},
        },
    },
}


@pytest.fixture
def metadata() -> Metadata:
    return MetadataLoader.load(overrides=CRM_METADATA, env_prefix="RELATA_TEST_UNUSED_")


@pytest.fixture
def catalog(metadata) -> MetadataRelationCatalog:
    return MetadataRelationCatalog(metadata)


# ============================================================================
# Fake loader
# ============================================================================


class FakeLoader:
    """RelationLoader double recording every call."""

    def __init__(
        self,
        one: Optional[Dict[str, Any]] = None,
        many: Optional[Dict[str, Any]] = None,
        error: Optional[Exception] = None,
    ):
        self.one = one or {}
        self.many = many or {}
        self.error = error
        self.calls: List[tuple] = []

    async def fetch_one(self, entity, relation):
        self.calls.append(("one", entity, relation))
        if self.error is not None:
            raise self.error
        return self.one.get(relation)

    async def fetch_many(self, entity, relation, order=None):
        self.calls.append(("many", entity, relation, order))
        if self.error is not None:
            raise self.error
        return self.many.get(relation, EntityCollection())


@pytest.fixture
def account() -> Entity:
    return Entity("Account", id="acc-1", name="Acme")


@pytest.fixture
def draft_account() -> Entity:
    return Entity("Account", name="Draft")


@pytest.fixture
def user() -> Entity:
    return Entity("User", id="u-1", userName="admin")


@pytest.fixture
def contacts() -> EntityCollection:
    return EntityCollection(
        [Entity("Contact", id="c-1"), Entity("Contact", id="c-2")],
        entity_type="Contact",
    )


@pytest.fixture
def loader(user, contacts) -> FakeLoader:
    return FakeLoader(one={"assignedUser": user}, many={"contacts": contacts})


# ============================================================================
# Query doubles
# ============================================================================


class FakeQuery:
    """Chainable relation query double; ``order`` returns a new instance."""

    def __init__(self, rows, orders=None, log=None):
        self.rows = rows
        self.orders = list(orders or [])
        self.log = log if log is not None else []

    def order(self, *fields):
        new = FakeQuery(self.rows, self.orders + list(fields), self.log)
        self.log.append(new)
        return new

    async def first(self):
        return self.rows[0] if self.rows else None

    async def all(self):
        return list(self.rows)


class FakeSelectBuilder:
    def __init__(self):
        self.selected = None
        self.calls = 0

    def select(self, items):
        self.selected = items
        self.calls += 1
        return self


@pytest.fixture
def make_loader():
    """Factory for FakeLoader instances with custom results."""
    return FakeLoader


@pytest.fixture
def make_query():
    return FakeQuery


@pytest.fixture
def select_builder() -> FakeSelectBuilder:
    return FakeSelectBuilder()
