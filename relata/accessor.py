"""
Relata Relation Accessor - resolves related data for one owning entity.

Two independent stores per accessor:
- overrides: values recorded with ``set_override``; always win on read
- loaded:    values fetched lazily on first read

Usage:
    relations = RelationAccessor.for_entity(contact, catalog=catalog, loader=loader)

    account = await relations.get_single("account")
    opportunities = await relations.get_multiple("opportunities")

    relations.set_override("account", other_account)
    relations.reset("account")
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from .catalog import RelationCatalog
from .entity import Entity, EntityCollection
from .faults import (
    AlreadyBoundFault,
    EntityNotBoundFault,
    RelationKindMismatchFault,
    RelationNotSetFault,
    RelationTypeMismatchFault,
    UnknownRelationFault,
    UnsupportedRelationOperationFault,
)
from .loader import RelationLoader

logger = logging.getLogger("relata.relations")

__all__ = ["RelationAccessor"]


RelationValue = Union[Entity, EntityCollection, None]


class RelationAccessor:
    """
    Relation access for a single owning entity.

    Request-scoped: create one per entity instance and do not share it
    between tasks. A fetch writes the loaded store only after the loader
    returns, so a failed fetch leaves nothing cached.
    """

    def __init__(self, catalog: RelationCatalog, loader: RelationLoader):
        self._catalog = catalog
        self._loader = loader
        self._entity: Optional[Entity] = None
        self._loaded: Dict[str, RelationValue] = {}
        self._overrides: Dict[str, RelationValue] = {}

    @classmethod
    def for_entity(
        cls,
        entity: Entity,
        *,
        catalog: RelationCatalog,
        loader: RelationLoader,
    ) -> RelationAccessor:
        accessor = cls(catalog, loader)
        accessor.bind(entity)
        return accessor

    # ── Binding ──────────────────────────────────────────────────────

    def bind(self, entity: Entity) -> None:
        """Associate the owning entity. Allowed once."""
        if self._entity is not None:
            raise AlreadyBoundFault(self._entity.entity_type)
        self._entity = entity

    @property
    def is_bound(self) -> bool:
        return self._entity is not None

    @property
    def entity(self) -> Entity:
        return self._require_entity()

    def _require_entity(self, relation: Optional[str] = None) -> Entity:
        if self._entity is None:
            raise EntityNotBoundFault(relation)
        return self._entity

    # ── Reset ────────────────────────────────────────────────────────

    def reset(self, relation: str) -> None:
        self._loaded.pop(relation, None)
        self._overrides.pop(relation, None)

    def reset_all(self) -> None:
        self._loaded = {}
        self._overrides = {}

    # ── Overrides ────────────────────────────────────────────────────

    def is_overridden(self, relation: str) -> bool:
        """True if a value was set explicitly, including ``None``."""
        return relation in self._overrides

    def get_override(self, relation: str) -> RelationValue:
        if relation not in self._overrides:
            raise RelationNotSetFault(relation)
        return self._overrides[relation]

    def set_override(self, relation: str, value: RelationValue) -> None:
        """
        Record an explicit value for a relation, bypassing lazy fetch.

        Raises:
            UnknownRelationFault: relation is not declared for the entity type
            RelationTypeMismatchFault: value shape does not match the kind
            UnsupportedRelationOperationFault: kind is not settable
        """
        entity = self._require_entity(relation)
        kind = self._catalog.kind_of(entity.entity_type, relation)

        if kind is None:
            raise UnknownRelationFault(entity.entity_type, relation)

        if kind.is_many and not isinstance(value, EntityCollection):
            raise RelationTypeMismatchFault(relation, "EntityCollection", _describe(value))

        if not kind.is_settable:
            raise UnsupportedRelationOperationFault(relation, kind.value)

        if value is not None and not isinstance(value, Entity):
            raise RelationTypeMismatchFault(relation, "Entity or None", _describe(value))

        self._overrides[relation] = value

    # ── Reads ────────────────────────────────────────────────────────

    async def get_single(self, relation: str) -> Optional[Entity]:
        value = await self._resolve(relation)
        if isinstance(value, EntityCollection):
            raise RelationKindMismatchFault(relation, "not an entity, use get_multiple instead")
        return value

    async def get_multiple(self, relation: str) -> EntityCollection:
        value = await self._resolve(relation)
        if not isinstance(value, EntityCollection):
            raise RelationKindMismatchFault(relation, "not a collection, use get_single instead")
        return value

    async def _resolve(self, relation: str) -> RelationValue:
        if relation in self._overrides:
            return self._overrides[relation]

        if relation not in self._loaded:
            entity = self._require_entity(relation)
            self._loaded[relation] = await self._fetch(entity, relation)
        else:
            logger.debug("Relation cache hit: %s.%s", self._entity.entity_type, relation)

        value = self._loaded[relation]
        # Single entities are shared by reference; only collections are copied.
        if isinstance(value, EntityCollection):
            return value.snapshot()
        return value

    async def _fetch(self, entity: Entity, relation: str) -> RelationValue:
        kind = self._catalog.kind_of(entity.entity_type, relation)

        if kind is not None and kind.is_many:
            return await self._fetch_many(entity, relation)
        return await self._fetch_one(entity, relation)

    async def _fetch_one(self, entity: Entity, relation: str) -> Optional[Entity]:
        if not entity.has_id():
            return None
        return await self._loader.fetch_one(entity, relation)

    async def _fetch_many(self, entity: Entity, relation: str) -> EntityCollection:
        if not entity.has_id():
            return EntityCollection()

        order = self._catalog.order_params(entity.entity_type, relation)
        collection = await self._loader.fetch_many(entity, relation, order)

        if not isinstance(collection, EntityCollection):
            collection = EntityCollection(collection)
        return collection

    def __repr__(self) -> str:
        owner = repr(self._entity) if self._entity is not None else "unbound"
        return (
            f"<RelationAccessor {owner} loaded={sorted(self._loaded)} "
            f"overrides={sorted(self._overrides)}>"
        )


def _describe(value: Any) -> str:
    if value is None:
        return "None"
    return type(value).__name__
