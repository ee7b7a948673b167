"""
Relata Faults - Structured fault handling.

Every contract violation in relata is raised as a typed fault carrying a
stable code, a domain and a severity, so callers can tell programmer errors
from failures coming out of their own loaders.

Core exports:
- Fault: Base fault class
- FaultDomain: Domain enumeration
- Severity: Severity levels

Domain faults live in faults.domains.
"""

from .core import (
    DOMAIN_DEFAULTS,
    Fault,
    FaultDomain,
    Severity,
)

from .domains import (
    ConfigFault,
    ConfigInvalidFault,
    MetadataFault,
    MetadataInvalidFault,
    RelationFault,
    AlreadyBoundFault,
    EntityNotBoundFault,
    RelationNotSetFault,
    UnknownRelationFault,
    RelationTypeMismatchFault,
    UnsupportedRelationOperationFault,
    RelationKindMismatchFault,
    QueryFault,
    OrderConverterNotFoundFault,
)

__all__ = [
    # Core types
    "DOMAIN_DEFAULTS",
    "Fault",
    "FaultDomain",
    "Severity",

    # Config / metadata
    "ConfigFault",
    "ConfigInvalidFault",
    "MetadataFault",
    "MetadataInvalidFault",

    # Relations
    "RelationFault",
    "AlreadyBoundFault",
    "EntityNotBoundFault",
    "RelationNotSetFault",
    "UnknownRelationFault",
    "RelationTypeMismatchFault",
    "UnsupportedRelationOperationFault",
    "RelationKindMismatchFault",

    # Query
    "QueryFault",
    "OrderConverterNotFoundFault",
]
