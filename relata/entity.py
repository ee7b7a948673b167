"""
Relata Entities - the owning side and the collections relations resolve to.

Usage:
    from relata.entity import Entity, EntityCollection

    account = Entity("Account", id="a1", name="Acme")
    account.has_id()          # True
    draft = Entity("Account", name="Draft")
    draft.has_id()            # False

    contacts = EntityCollection([Entity("Contact", id="c1")])
    copy = contacts.snapshot()
    copy is contacts          # False
    copy == contacts          # True
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional


__all__ = ["Entity", "EntityCollection"]


class Entity:
    """
    A typed record with an optional persisted identity.

    Subclasses may pin ``entity_type`` as a class attribute instead of
    passing it to the constructor.
    """

    entity_type: str = ""

    def __init__(self, entity_type: Optional[str] = None, id: Any = None, **attributes: Any):
        if entity_type is not None:
            self.entity_type = entity_type
        if not self.entity_type:
            raise ValueError(f"{self.__class__.__name__} requires an entity_type")
        self.id = id
        self._attributes: Dict[str, Any] = dict(attributes)

    def has_id(self) -> bool:
        """True once the entity has a persisted identity."""
        return self.id is not None and self.id != ""

    def get(self, name: str, default: Any = None) -> Any:
        if name == "id":
            return self.id
        return self._attributes.get(name, default)

    def set(self, name: str, value: Any) -> None:
        if name == "id":
            self.id = value
            return
        self._attributes[name] = value

    def has(self, name: str) -> bool:
        return name == "id" or name in self._attributes

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, **self._attributes}

    def __repr__(self) -> str:
        return f"<{self.entity_type} id={self.id!r}>"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Entity):
            return False
        if self.entity_type != other.entity_type:
            return False
        if not self.has_id() or not other.has_id():
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        if not self.has_id():
            return id(self)
        return hash((self.entity_type, self.id))


class EntityCollection:
    """
    Ordered collection of entities.

    Behaves like a list for iteration, indexing and appending.
    ``snapshot()`` returns a new collection holding the same elements;
    relation caches hand out snapshots so a caller mutating the returned
    collection never touches the cached one.
    """

    def __init__(self, entities: Optional[Iterable[Entity]] = None, entity_type: Optional[str] = None):
        self._entities: List[Entity] = list(entities) if entities is not None else []
        self.entity_type = entity_type

    def snapshot(self) -> EntityCollection:
        """Fresh collection instance with the same elements."""
        return EntityCollection(self._entities, entity_type=self.entity_type)

    def append(self, entity: Entity) -> None:
        self._entities.append(entity)

    def extend(self, entities: Iterable[Entity]) -> None:
        self._entities.extend(entities)

    def remove(self, entity: Entity) -> None:
        self._entities.remove(entity)

    def clear(self) -> None:
        self._entities.clear()

    def ids(self) -> List[Any]:
        return [e.id for e in self._entities]

    def to_list(self) -> List[Entity]:
        return list(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __bool__(self) -> bool:
        return bool(self._entities)

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            return EntityCollection(self._entities[index], entity_type=self.entity_type)
        return self._entities[index]

    def __contains__(self, entity: Any) -> bool:
        return entity in self._entities

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, EntityCollection):
            return self._entities == other._entities
        if isinstance(other, list):
            return self._entities == other
        return NotImplemented

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        label = self.entity_type or "Entity"
        return f"<EntityCollection[{label}] size={len(self._entities)}>"
