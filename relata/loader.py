"""
Relata Relation Loaders - fetch related entities for an owning entity.

A loader is the only place where queries run. ``QueryRelationLoader``
adapts any chainable relation query (``order()`` returning a new query,
async ``first()`` / ``all()`` terminals) to the loader contract:

    def source(entity, relation):
        return Contact.query().filter(account_id=entity.id)

    loader = QueryRelationLoader(source)
    contacts = await loader.fetch_many(account, "contacts", OrderItem.parse("-name"))
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, Protocol

from .entity import Entity, EntityCollection
from .order import OrderItem

logger = logging.getLogger("relata.loader")

__all__ = ["RelationLoader", "RelationQuery", "QueryRelationLoader"]


class RelationLoader(Protocol):
    """Contract consumed by RelationAccessor."""

    async def fetch_one(self, entity: Entity, relation: str) -> Optional[Entity]:
        ...

    async def fetch_many(
        self,
        entity: Entity,
        relation: str,
        order: Optional[OrderItem] = None,
    ) -> EntityCollection:
        ...


class RelationQuery(Protocol):
    """Chainable query over the related side of one relation."""

    def order(self, *fields: Any) -> RelationQuery:
        ...

    async def first(self) -> Optional[Entity]:
        ...

    async def all(self) -> Iterable[Entity]:
        ...


class QueryRelationLoader:
    """RelationLoader driving relation queries built by ``source``."""

    def __init__(self, source: Callable[[Entity, str], RelationQuery]):
        self._source = source

    async def fetch_one(self, entity: Entity, relation: str) -> Optional[Entity]:
        logger.debug("Fetching %s.%s (one) for id=%r", entity.entity_type, relation, entity.id)
        return await self._source(entity, relation).first()

    async def fetch_many(
        self,
        entity: Entity,
        relation: str,
        order: Optional[OrderItem] = None,
    ) -> EntityCollection:
        query = self._source(entity, relation)
        if order is not None:
            query = query.order(order.as_query_spec())

        logger.debug(
            "Fetching %s.%s (many) for id=%r order=%s",
            entity.entity_type, relation, entity.id,
            order.as_query_spec() if order else None,
        )
        result = await query.all()

        if not isinstance(result, EntityCollection):
            result = EntityCollection(result)
        return result
