"""
Relata Relation Catalog - relation kind and ordering lookup.

The accessor only needs two answers from the catalog: what kind a relation
is, and how a multi-valued relation should be ordered. The default
implementation reads them from entity metadata
(``entityDefs.<entityType>.links.<relation>``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

from .faults import MetadataInvalidFault
from .kinds import RelationKind
from .metadata import Metadata
from .order import Direction, OrderItem

__all__ = ["RelationCatalog", "RelationDefs", "MetadataRelationCatalog"]


class RelationCatalog(Protocol):
    """Contract consumed by RelationAccessor."""

    def kind_of(self, entity_type: str, relation: str) -> Optional[RelationKind]:
        ...

    def order_params(self, entity_type: str, relation: str) -> Optional[OrderItem]:
        ...


@dataclass(frozen=True)
class RelationDefs:
    """Declared definition of one relation."""

    name: str
    kind: RelationKind
    params: Dict[str, Any] = field(default_factory=dict)

    def get_param(self, name: str, default: Any = None) -> Any:
        return self.params.get(name, default)

    def get_order(self, default: Direction = Direction.ASC) -> Optional[OrderItem]:
        """Ordering directive, or None when the relation declares no orderBy."""
        order_by = self.get_param("orderBy")
        if not order_by:
            return None
        return OrderItem(order_by, Direction.normalize(self.get_param("order"), default))


class MetadataRelationCatalog:
    """RelationCatalog backed by entity metadata."""

    def __init__(self, metadata: Metadata):
        self.metadata = metadata
        self._default_direction = Direction.normalize(metadata.get_settings().default_order)

    def relation_defs(self, entity_type: str, relation: str) -> Optional[RelationDefs]:
        params = self.metadata.get(["entityDefs", entity_type, "links", relation])
        if params is None:
            return None

        path = f"entityDefs.{entity_type}.links.{relation}"
        if not isinstance(params, dict):
            raise MetadataInvalidFault(path, "relation definition must be a mapping")

        kind = RelationKind.parse(params.get("type"))
        if kind is None:
            raise MetadataInvalidFault(
                path,
                f"unknown relation type {params.get('type')!r}; "
                f"expected one of {', '.join(RelationKind.values())}",
            )

        return RelationDefs(name=relation, kind=kind, params=dict(params))

    def has_relation(self, entity_type: str, relation: str) -> bool:
        return self.relation_defs(entity_type, relation) is not None

    def kind_of(self, entity_type: str, relation: str) -> Optional[RelationKind]:
        defs = self.relation_defs(entity_type, relation)
        return defs.kind if defs else None

    def order_params(self, entity_type: str, relation: str) -> Optional[OrderItem]:
        defs = self.relation_defs(entity_type, relation)
        if defs is None:
            return None
        return defs.get_order(self._default_direction)
