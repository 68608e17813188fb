from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

import yaml

from .exceptions import CatalogError, UnknownCatalogEntry
from .schemas import describe_errors, schema_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogEntry:
    """Definition of a purchasable village object.

    refund_ratio is kept as a Fraction so refunds are computed exactly.
    footprint is a sizing hint for the presentation layer and is not
    interpreted by the core.
    """

    id: str
    display_name: str
    cost: int
    refund_ratio: Fraction
    footprint: Tuple[float, float] = (1.0, 1.0)

    def __post_init__(self) -> None:
        if not self.id:
            raise CatalogError("CatalogEntry.id must be a non-empty string")
        if isinstance(self.cost, bool) or not isinstance(self.cost, int) or self.cost <= 0:
            raise CatalogError(f"CatalogEntry '{self.id}' cost must be a positive integer")
        ratio = _as_fraction(self.refund_ratio)
        if not (0 < ratio <= 1):
            raise CatalogError(f"CatalogEntry '{self.id}' refund_ratio must be in (0, 1]")
        object.__setattr__(self, "refund_ratio", ratio)
        object.__setattr__(self, "footprint", tuple(float(v) for v in self.footprint))

    def refund_for(self, original_cost: int) -> int:
        """Refund owed for an object bought at original_cost."""
        return (original_cost * self.refund_ratio.numerator) // self.refund_ratio.denominator


def _as_fraction(value: Union[Fraction, float, int, str]) -> Fraction:
    if isinstance(value, Fraction):
        return value
    # str() keeps 0.1 as 1/10 rather than the binary float expansion
    return Fraction(str(value))


class Catalog(Mapping[str, CatalogEntry]):
    """Read-only table of catalog entries keyed by id, in definition order."""

    def __init__(self, entries: Iterable[CatalogEntry]) -> None:
        table: Dict[str, CatalogEntry] = {}
        for entry in entries:
            if entry.id in table:
                raise CatalogError(f"Duplicate catalog id: {entry.id}")
            table[entry.id] = entry
        self._entries = MappingProxyType(table)

    def __getitem__(self, catalog_id: str) -> CatalogEntry:
        return self._entries[catalog_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def require(self, catalog_id: str) -> CatalogEntry:
        entry = self._entries.get(catalog_id)
        if entry is None:
            raise UnknownCatalogEntry(f"Unknown catalog entry: {catalog_id!r}")
        return entry

    @classmethod
    def from_dict(cls, data: Any) -> "Catalog":
        errors = schema_errors(data, "catalog")
        if errors:
            raise CatalogError(f"Catalog validation failed: {describe_errors(errors)}")
        entries = [
            CatalogEntry(
                id=raw["id"],
                display_name=raw["display_name"],
                cost=raw["cost"],
                refund_ratio=_as_fraction(raw["refund_ratio"]),
                footprint=tuple(raw.get("footprint", (1.0, 1.0))),
            )
            for raw in data["entries"]
        ]
        return cls(entries)


def load_catalog(path: Optional[Union[str, Path]] = None) -> Catalog:
    """Load a catalog from YAML.

    If path is None, loads the embedded default resource at
    village/data/catalog.yaml.
    """
    if path is None:
        text = resources.files("village.data").joinpath("catalog.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded catalog resource")
    else:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        logger.debug("Loaded catalog from path: %s", path)

    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise CatalogError(f"Failed to parse catalog: {e}") from e
    catalog = Catalog.from_dict(raw)
    logger.info("Catalog loaded with %d entries", len(catalog))
    return catalog


__all__ = [
    "Catalog",
    "CatalogEntry",
    "load_catalog",
]
