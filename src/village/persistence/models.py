from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..world import PlacedObject


@dataclass(frozen=True)
class SaveRecord:
    """Persisted village state: the ledger balance and every placed object.

    Object order is the world's insertion order; it is preserved on reload
    but carries no other meaning.
    """

    balance: int
    objects: Tuple[PlacedObject, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "objects": [obj.to_record() for obj in self.objects],
            "balance": self.balance,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "SaveRecord":
        return SaveRecord(
            balance=int(data["balance"]),
            objects=tuple(PlacedObject.from_record(raw) for raw in data.get("objects", [])),
        )


@dataclass
class LoadReport:
    """Outcome of a load, for logging and user feedback."""

    found: bool = False
    corrupt: bool = False
    balance: int = 0
    loaded: int = 0
    skipped: List[str] = field(default_factory=list)
    error: str = ""
