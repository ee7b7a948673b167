"""
Relata Relation Kinds - closed enumeration of relation types.

Values match the strings used in entity metadata
(``entityDefs.<Type>.links.<name>.type``).

Usage:
    from relata.kinds import RelationKind

    kind = RelationKind.parse("hasMany")
    kind.is_many       # True
    kind.is_settable   # False
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional


__all__ = [
    "RelationKind",
    "MANY_KINDS",
    "SETTABLE_KINDS",
]


class RelationKind(str, Enum):
    """
    How an owning entity relates to its related entities.

    Members are defined as NAME = "metadataValue", "Human Label".
    """

    def __new__(cls, value: str, label: str | None = None):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj._label = label
        return obj

    def __init__(self, value: str, label: str | None = None):
        if label is not None:
            self._label = label
        else:
            self._label = self.name.replace("_", " ").title()

    BELONGS_TO = "belongsTo", "Belongs To"
    BELONGS_TO_PARENT = "belongsToParent", "Belongs To Parent"
    HAS_ONE = "hasOne", "Has One"
    MANY_MANY = "manyMany", "Many-to-Many"
    HAS_MANY = "hasMany", "Has Many"
    HAS_CHILDREN = "hasChildren", "Has Children"

    @property
    def label(self) -> str:
        return self._label

    @property
    def is_many(self) -> bool:
        """Multi-valued kinds resolve to a collection."""
        return self in MANY_KINDS

    @property
    def is_settable(self) -> bool:
        """Only single-valued kinds accept an explicit value."""
        return self in SETTABLE_KINDS

    @classmethod
    def values(cls) -> List[str]:
        return [m.value for m in cls]

    @classmethod
    def parse(cls, value: Any) -> Optional[RelationKind]:
        """Return the kind for a metadata string, or None if unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    def __str__(self) -> str:
        return str(self.value)


MANY_KINDS = frozenset({
    RelationKind.MANY_MANY,
    RelationKind.HAS_MANY,
    RelationKind.HAS_CHILDREN,
})

SETTABLE_KINDS = frozenset({
    RelationKind.BELONGS_TO,
    RelationKind.BELONGS_TO_PARENT,
    RelationKind.HAS_ONE,
})
