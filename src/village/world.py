from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .exceptions import UnknownPlacedObject
from .placement import Vector3

logger = logging.getLogger(__name__)


class ObjectState(str, Enum):
    PLACED = "placed"
    PENDING_DELETION = "pending_deletion"


def new_instance_id() -> str:
    return uuid.uuid4().hex


@dataclass
class PlacedObject:
    """A bought and placed village object.

    original_cost is the price actually paid; refunds are based on it even if
    the catalog price changes later.
    """

    catalog_id: str
    position: Vector3
    original_cost: int
    rotation: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    state: ObjectState = ObjectState.PLACED
    instance_id: str = field(default_factory=new_instance_id)

    def to_record(self) -> Dict[str, Any]:
        return {
            "catalogId": self.catalog_id,
            "x": self.position.x,
            "y": self.position.y,
            "z": self.position.z,
            "rotationZ": self.rotation,
            "scaleX": self.scale_x,
            "scaleY": self.scale_y,
            "originalCost": self.original_cost,
        }

    @staticmethod
    def from_record(data: Dict[str, Any]) -> "PlacedObject":
        return PlacedObject(
            catalog_id=str(data["catalogId"]),
            position=Vector3(float(data["x"]), float(data["y"]), float(data["z"])),
            original_cost=int(data["originalCost"]),
            rotation=float(data["rotationZ"]),
            scale_x=float(data["scaleX"]),
            scale_y=float(data["scaleY"]),
        )


class WorldState:
    """Placed objects in insertion order, keyed by instance id."""

    def __init__(self, objects: Iterable[PlacedObject] = ()) -> None:
        self._objects: Dict[str, PlacedObject] = {}
        for obj in objects:
            self.add(obj)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[PlacedObject]:
        return iter(list(self._objects.values()))

    def __contains__(self, instance_id: object) -> bool:
        return instance_id in self._objects

    def get(self, instance_id: str) -> Optional[PlacedObject]:
        return self._objects.get(instance_id)

    def require(self, instance_id: str) -> PlacedObject:
        obj = self._objects.get(instance_id)
        if obj is None:
            raise UnknownPlacedObject(f"No placed object with id {instance_id!r}")
        return obj

    def add(self, obj: PlacedObject) -> PlacedObject:
        if obj.instance_id in self._objects:
            raise ValueError(f"Duplicate instance id: {obj.instance_id}")
        self._objects[obj.instance_id] = obj
        logger.debug("World: added %s (%s)", obj.instance_id, obj.catalog_id)
        return obj

    def insert(self, index: int, obj: PlacedObject) -> None:
        items = list(self._objects.items())
        items.insert(index, (obj.instance_id, obj))
        self._objects = dict(items)

    def remove(self, instance_id: str) -> Tuple[PlacedObject, int]:
        """Remove an object; returns it with its former index (for rollback)."""
        obj = self.require(instance_id)
        index = list(self._objects).index(instance_id)
        del self._objects[instance_id]
        logger.debug("World: removed %s (%s)", instance_id, obj.catalog_id)
        return obj, index

    def snapshot(self) -> Tuple[PlacedObject, ...]:
        return tuple(self._objects.values())

    def records(self) -> List[Dict[str, Any]]:
        return [obj.to_record() for obj in self._objects.values()]

    def replace_all(self, objects: Iterable[PlacedObject]) -> None:
        self._objects = {}
        for obj in objects:
            self.add(obj)

    def clear(self) -> None:
        self._objects.clear()
