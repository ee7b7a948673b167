"""
Relata - relation resolution and lazy loading for entity ORMs.

Usage:
    from relata import (
        Entity, EntityCollection, MetadataLoader,
        MetadataRelationCatalog, QueryRelationLoader, RelationAccessor,
    )

    metadata = MetadataLoader.load(["metadata/*.yaml"])
    catalog = MetadataRelationCatalog(metadata)
    loader = QueryRelationLoader(relation_query)

    relations = RelationAccessor.for_entity(account, catalog=catalog, loader=loader)
    contacts = await relations.get_multiple("contacts")

Public API:
    - RelationAccessor: per-entity relation cache with explicit overrides
    - RelationKind: closed set of relation types
    - Entity / EntityCollection: owning entity and collection values
    - MetadataRelationCatalog / RelationCatalog: relation metadata lookup
    - QueryRelationLoader / RelationLoader: fetching related entities
    - Metadata / MetadataLoader / Settings: layered metadata and settings
    - OrderItem / Direction / ItemConverterFactory: ordering helpers
    - SelectApplier / SearchParams: select attribute resolution
    - Faults: AlreadyBoundFault, UnknownRelationFault, etc.
"""

from .accessor import RelationAccessor
from .catalog import MetadataRelationCatalog, RelationCatalog, RelationDefs
from .entity import Entity, EntityCollection
from .kinds import MANY_KINDS, SETTABLE_KINDS, RelationKind
from .loader import QueryRelationLoader, RelationLoader, RelationQuery
from .metadata import Metadata, MetadataLoader, Settings
from .order import (
    Direction,
    EnumItemConverter,
    ItemConverter,
    ItemConverterFactory,
    OrderItem,
)
from .select import SearchParams, SelectApplier, SelectMetadataProvider
from .faults import (
    Fault,
    FaultDomain,
    Severity,
    ConfigInvalidFault,
    MetadataInvalidFault,
    RelationFault,
    AlreadyBoundFault,
    EntityNotBoundFault,
    RelationNotSetFault,
    UnknownRelationFault,
    RelationTypeMismatchFault,
    UnsupportedRelationOperationFault,
    RelationKindMismatchFault,
    OrderConverterNotFoundFault,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "RelationAccessor",
    "RelationKind",
    "MANY_KINDS",
    "SETTABLE_KINDS",
    "Entity",
    "EntityCollection",
    # Collaborators
    "RelationCatalog",
    "RelationDefs",
    "MetadataRelationCatalog",
    "RelationLoader",
    "RelationQuery",
    "QueryRelationLoader",
    # Metadata
    "Metadata",
    "MetadataLoader",
    "Settings",
    # Query helpers
    "Direction",
    "OrderItem",
    "ItemConverter",
    "EnumItemConverter",
    "ItemConverterFactory",
    "SearchParams",
    "SelectApplier",
    "SelectMetadataProvider",
    # Faults
    "Fault",
    "FaultDomain",
    "Severity",
    "ConfigInvalidFault",
    "MetadataInvalidFault",
    "RelationFault",
    "AlreadyBoundFault",
    "EntityNotBoundFault",
    "RelationNotSetFault",
    "UnknownRelationFault",
    "RelationTypeMismatchFault",
    "UnsupportedRelationOperationFault",
    "RelationKindMismatchFault",
    "OrderConverterNotFoundFault",
]
