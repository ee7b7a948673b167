"""
Relata Faults - Domain-specific fault types.

Provides concrete fault classes for each domain:
- CONFIG faults
- METADATA faults
- RELATION faults
- QUERY faults
"""

from typing import Any, Optional
from .core import Fault, FaultDomain, Severity


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=severity,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class ConfigInvalidFault(ConfigFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str, **kwargs):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Invalid config for '{key}': {reason}",
            metadata={"key": key, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# METADATA Faults
# ============================================================================

class MetadataFault(Fault):
    """Base class for entity/select metadata faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.METADATA,
            severity=severity,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class MetadataInvalidFault(MetadataFault):
    """A metadata entry is malformed or points at something unusable."""

    def __init__(self, path: str, reason: str, **kwargs):
        super().__init__(
            code="METADATA_INVALID",
            message=f"Invalid metadata at '{path}': {reason}",
            metadata={"path": path, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# RELATION Faults
# ============================================================================

class RelationFault(Fault):
    """
    Base class for relation access faults.

    All of these are contract violations by the caller. They are fatal
    and never retried.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.RELATION,
            severity=Severity.FATAL,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class AlreadyBoundFault(RelationFault):
    """Accessor already has an owning entity."""

    def __init__(self, entity_type: str, **kwargs):
        super().__init__(
            code="ENTITY_ALREADY_BOUND",
            message=f"Entity is already set (bound to '{entity_type}')",
            metadata={"entity_type": entity_type, **kwargs.get("metadata", {})},
        )


class EntityNotBoundFault(RelationFault):
    """Accessor used before an owning entity was bound."""

    def __init__(self, relation: Optional[str] = None, **kwargs):
        suffix = f" (relation '{relation}')" if relation else ""
        super().__init__(
            code="ENTITY_NOT_BOUND",
            message=f"No entity set{suffix}",
            metadata={"relation": relation, **kwargs.get("metadata", {})},
        )


class RelationNotSetFault(RelationFault):
    """No explicit value was recorded for the relation."""

    def __init__(self, relation: str, **kwargs):
        super().__init__(
            code="RELATION_NOT_SET",
            message=f"Relation '{relation}' is not set",
            metadata={"relation": relation, **kwargs.get("metadata", {})},
        )


class UnknownRelationFault(RelationFault):
    """Relation is not declared for the entity type."""

    def __init__(self, entity_type: str, relation: str, **kwargs):
        super().__init__(
            code="RELATION_UNKNOWN",
            message=f"Relation '{relation}' does not exist on '{entity_type}'",
            metadata={"entity_type": entity_type, "relation": relation, **kwargs.get("metadata", {})},
        )


class RelationTypeMismatchFault(RelationFault):
    """Value passed for a relation has the wrong shape for its kind."""

    def __init__(self, relation: str, expected: str, actual: str, **kwargs):
        super().__init__(
            code="RELATION_TYPE_MISMATCH",
            message=f"Relation '{relation}' expects {expected}, got {actual}",
            metadata={
                "relation": relation,
                "expected": expected,
                "actual": actual,
                **kwargs.get("metadata", {}),
            },
        )


class UnsupportedRelationOperationFault(RelationFault):
    """Operation is not supported for the relation kind."""

    def __init__(self, relation: str, kind: str, operation: str = "set", **kwargs):
        super().__init__(
            code="RELATION_UNSUPPORTED",
            message=f"Relation type '{kind}' is not supported for {operation} ('{relation}')",
            metadata={
                "relation": relation,
                "kind": kind,
                "operation": operation,
                **kwargs.get("metadata", {}),
            },
        )


class RelationKindMismatchFault(RelationFault):
    """Single/multiple getter used on a relation of the other shape."""

    def __init__(self, relation: str, hint: str, **kwargs):
        super().__init__(
            code="RELATION_KIND_MISMATCH",
            message=f"Relation '{relation}': {hint}",
            metadata={"relation": relation, **kwargs.get("metadata", {})},
        )


# ============================================================================
# QUERY Faults
# ============================================================================

class QueryFault(Fault):
    """Base class for query building faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.QUERY,
            severity=severity,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class OrderConverterNotFoundFault(QueryFault):
    """No order item converter is registered for a field."""

    def __init__(self, entity_type: str, field: str, **kwargs):
        super().__init__(
            code="ORDER_CONVERTER_NOT_FOUND",
            message=f"No order item converter for '{entity_type}.{field}'",
            metadata={"entity_type": entity_type, "field": field, **kwargs.get("metadata", {})},
        )
