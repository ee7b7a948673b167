"""
Relata Select - resolves the attribute list a query should select.

Given the attributes a caller asked for, the applier adds what the rest of
the system needs to work with the result: the id, ACL attributes, the
attributes behind the current ordering and declared dependencies. Long text
attributes are truncated in the query when a maximum length is known.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Union

from .metadata import Metadata

logger = logging.getLogger("relata.select")

__all__ = [
    "SearchParams",
    "SelectBuilder",
    "SelectMetadataProvider",
    "SelectApplier",
    "ATTRIBUTE_TYPE_ID",
    "ATTRIBUTE_TYPE_TEXT",
]


ATTRIBUTE_TYPE_ID = "id"
ATTRIBUTE_TYPE_TEXT = "text"

SelectItem = Union[str, List[str]]


@dataclass
class SearchParams:
    """Caller-supplied search parameters relevant to selection."""

    select: Optional[List[str]] = None
    order_by: Optional[str] = None
    max_text_attribute_length: Optional[int] = None


class SelectBuilder(Protocol):
    def select(self, items: List[SelectItem]) -> Any:
        ...


class SelectMetadataProvider:
    """Select-related questions answered from entity metadata."""

    def __init__(self, metadata: Metadata):
        self.metadata = metadata

    def _field_defs(self, entity_type: str, attribute: str) -> Optional[Dict[str, Any]]:
        return self.metadata.get(["entityDefs", entity_type, "fields", attribute])

    def has_attribute(self, entity_type: str, attribute: str) -> bool:
        if attribute == "id":
            return self.metadata.has(["entityDefs", entity_type])
        return self._field_defs(entity_type, attribute) is not None

    def get_attribute_type(self, entity_type: str, attribute: str) -> Optional[str]:
        if attribute == "id":
            return ATTRIBUTE_TYPE_ID
        defs = self._field_defs(entity_type, attribute) or {}
        return defs.get("type")

    def is_attribute_not_storable(self, entity_type: str, attribute: str) -> bool:
        defs = self._field_defs(entity_type, attribute) or {}
        return bool(defs.get("notStorable", False))

    def get_acl_attribute_list(self, entity_type: str) -> List[str]:
        return list(self.metadata.get(["selectDefs", entity_type, "aclAttributeList"], []) or [])

    def get_acl_portal_attribute_list(self, entity_type: str) -> List[str]:
        return list(
            self.metadata.get(["selectDefs", entity_type, "aclPortalAttributeList"], []) or []
        )

    def get_select_attributes_dependency_map(self, entity_type: str) -> Dict[str, List[str]]:
        return dict(
            self.metadata.get(["selectDefs", entity_type, "selectAttributesDependencyMap"], {})
            or {}
        )

    def get_default_order_by(self, entity_type: str) -> Optional[str]:
        return self.metadata.get(["entityDefs", entity_type, "collection", "orderBy"])

    def get_attribute_list_for_field(self, entity_type: str, field: str) -> List[str]:
        """Attributes a field is stored in; link fields span several."""
        field_type = self.get_attribute_type(entity_type, field)
        if field_type == "link":
            return [f"{field}Id", f"{field}Name"]
        if field_type == "linkParent":
            return [f"{field}Id", f"{field}Type", f"{field}Name"]
        return [field]

    def get_max_text_attribute_length(self) -> Optional[int]:
        return self.metadata.get_settings().max_text_attribute_length


class SelectApplier:
    """Applies the resolved select list to a query builder."""

    def __init__(
        self,
        entity_type: str,
        metadata_provider: SelectMetadataProvider,
        *,
        is_portal: bool = False,
    ):
        self.entity_type = entity_type
        self.metadata_provider = metadata_provider
        self.is_portal = is_portal

    def apply(self, builder: SelectBuilder, params: SearchParams) -> None:
        if params.select is None:
            return

        attributes = self.get_select_attribute_list(params)
        items = self.prepare_attribute_list(attributes, params)
        logger.debug("Select for %s: %s", self.entity_type, items)
        builder.select(items)

    def get_select_attribute_list(self, params: SearchParams) -> List[str]:
        provider = self.metadata_provider
        passed = list(params.select or [])
        result: List[str] = []

        def add(attribute: str) -> None:
            if attribute in result:
                return
            if not provider.has_attribute(self.entity_type, attribute):
                return
            result.append(attribute)

        if "id" not in passed:
            result.append("id")

        if self.is_portal:
            acl_attributes = provider.get_acl_portal_attribute_list(self.entity_type)
        else:
            acl_attributes = provider.get_acl_attribute_list(self.entity_type)

        for attribute in acl_attributes:
            add(attribute)

        for attribute in passed:
            add(attribute)

        order_by = params.order_by or provider.get_default_order_by(self.entity_type)
        if order_by:
            for attribute in provider.get_attribute_list_for_field(self.entity_type, order_by):
                add(attribute)

        dependency_map = provider.get_select_attributes_dependency_map(self.entity_type)
        for attribute, dependants in dependency_map.items():
            if attribute not in result:
                continue
            for dependant in dependants:
                if dependant not in result:
                    result.append(dependant)

        return result

    def prepare_attribute_list(
        self,
        attributes: List[str],
        params: SearchParams,
    ) -> List[SelectItem]:
        provider = self.metadata_provider
        max_length = params.max_text_attribute_length
        if max_length is None:
            max_length = provider.get_max_text_attribute_length()

        items: List[SelectItem] = []
        for attribute in attributes:
            if (
                max_length is not None
                and provider.get_attribute_type(self.entity_type, attribute) == ATTRIBUTE_TYPE_TEXT
                and not provider.is_attribute_not_storable(self.entity_type, attribute)
            ):
                items.append([f"LEFT:({attribute}, {max_length})", attribute])
                continue
            items.append(attribute)
        return items
