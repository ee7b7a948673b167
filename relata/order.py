"""
Relata Ordering - direction normalization, order items and per-field
order item converters.

Usage:
    item = OrderItem.parse("-createdAt")        # createdAt DESC
    item.as_query_spec()                        # "-createdAt"

    factory = ItemConverterFactory(metadata)
    if factory.has("Case", "status"):
        items = factory.create("Case", "status").convert(OrderItem("status"))
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Type

from .faults import MetadataInvalidFault, OrderConverterNotFoundFault
from .metadata import Metadata

logger = logging.getLogger("relata.order")

__all__ = [
    "Direction",
    "OrderItem",
    "ItemConverter",
    "EnumItemConverter",
    "ItemConverterFactory",
]


class Direction(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def normalize(cls, value: Any, default: Optional[Direction] = None) -> Direction:
        """
        Case-insensitive parse. Anything other than DESC is ascending.

        ``None`` maps to ``default`` (ASC when not given).
        """
        if value is None:
            return default or cls.ASC
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.DESC if value else cls.ASC
        return cls.DESC if str(value).strip().upper() == cls.DESC.value else cls.ASC


@dataclass(frozen=True)
class OrderItem:
    """A single ORDER BY entry: field (or expression) plus direction."""

    field: str
    direction: Direction = Direction.ASC

    @classmethod
    def parse(cls, spec: str) -> OrderItem:
        """Parse ``"field"`` / ``"-field"`` query specs."""
        if spec.startswith("-"):
            return cls(spec[1:], Direction.DESC)
        return cls(spec, Direction.ASC)

    @classmethod
    def create(cls, field: str, direction: Any = None) -> OrderItem:
        return cls(field, Direction.normalize(direction))

    @property
    def is_desc(self) -> bool:
        return self.direction is Direction.DESC

    def as_query_spec(self) -> str:
        """Render in the ``order("-field")`` convention of query builders."""
        return f"-{self.field}" if self.is_desc else self.field


class ItemConverter:
    """
    Converts one order item into the ordering actually applied for a field.

    Subclasses are looked up through metadata and constructed with the
    entity type and the metadata they were resolved from.
    """

    def __init__(self, entity_type: str, metadata: Metadata):
        self.entity_type = entity_type
        self.metadata = metadata

    def convert(self, item: OrderItem) -> List[OrderItem]:
        return [item]


class EnumItemConverter(ItemConverter):
    """Orders an enum field by position in its declared option list."""

    def convert(self, item: OrderItem) -> List[OrderItem]:
        options = self.metadata.get(
            ["entityDefs", self.entity_type, "fields", item.field, "options"]
        )
        if not options:
            return [item]

        values = [str(o) for o in options]
        if item.is_desc:
            values.reverse()

        quoted = ", ".join("'" + v.replace("'", "\\'") + "'" for v in values)
        return [OrderItem(f"POSITION_IN_LIST:({item.field}, {quoted})", Direction.ASC)]


class ItemConverterFactory:
    """
    Resolves order item converters from metadata.

    Lookup order:
    1. ``selectDefs.<entityType>.orderItemConverterClassNameMap.<field>``
    2. ``app.select.orderItemConverterClassNameMap.<fieldType>``
    """

    def __init__(self, metadata: Metadata):
        self.metadata = metadata

    def has(self, entity_type: str, field: str) -> bool:
        return bool(self._get_class_name(entity_type, field))

    def create(self, entity_type: str, field: str) -> ItemConverter:
        class_name = self._get_class_name(entity_type, field)
        if not class_name:
            raise OrderConverterNotFoundFault(entity_type, field)

        converter_cls = self._resolve_class(class_name, entity_type, field)
        return converter_cls(entity_type=entity_type, metadata=self.metadata)

    def convert(self, entity_type: str, items: Iterable[OrderItem]) -> List[OrderItem]:
        """Expand items through their converters where one is registered."""
        result: List[OrderItem] = []
        for item in items:
            if self.has(entity_type, item.field):
                result.extend(self.create(entity_type, item.field).convert(item))
            else:
                result.append(item)
        return result

    def _get_class_name(self, entity_type: str, field: str) -> Any:
        class_name = self.metadata.get(
            ["selectDefs", entity_type, "orderItemConverterClassNameMap", field]
        )
        if class_name:
            return class_name

        field_type = self.metadata.get(["entityDefs", entity_type, "fields", field, "type"])
        if not field_type:
            return None

        return self.metadata.get(
            ["app", "select", "orderItemConverterClassNameMap", field_type]
        )

    def _resolve_class(self, class_name: Any, entity_type: str, field: str) -> Type[ItemConverter]:
        if isinstance(class_name, type):
            return class_name

        path = f"selectDefs.{entity_type}.orderItemConverterClassNameMap.{field}"
        try:
            if ":" in class_name:
                module_path, attr = class_name.split(":", 1)
            else:
                module_path, attr = class_name.rsplit(".", 1)
            module = importlib.import_module(module_path)
            converter_cls = getattr(module, attr)
        except (ImportError, AttributeError, ValueError) as e:
            raise MetadataInvalidFault(path, f"cannot import '{class_name}': {e}") from e

        if not (isinstance(converter_cls, type) and issubclass(converter_cls, ItemConverter)):
            raise MetadataInvalidFault(path, f"'{class_name}' is not an ItemConverter")

        logger.debug("Resolved order converter %s for %s.%s", class_name, entity_type, field)
        return converter_cls
