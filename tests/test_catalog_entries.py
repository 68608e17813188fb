from fractions import Fraction
from pathlib import Path

import pytest

from village.catalog import Catalog, CatalogEntry, load_catalog
from village.exceptions import CatalogError, UnknownCatalogEntry


def test_embedded_catalog_loads():
    catalog = load_catalog()
    assert "house" in catalog
    house = catalog["house"]
    assert house.cost == 100
    assert house.refund_ratio == Fraction(1, 2)


def test_refund_ratio_from_decimal_is_exact():
    entry = CatalogEntry(id="fence", display_name="Fence", cost=5, refund_ratio=0.8)
    assert entry.refund_ratio == Fraction(4, 5)
    assert entry.refund_for(5) == 4


def test_refund_floors():
    entry = CatalogEntry(id="well", display_name="Well", cost=3, refund_ratio=Fraction(1, 2))
    assert entry.refund_for(3) == 1
    assert entry.refund_for(1) == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"cost": 0, "refund_ratio": 0.5},
        {"cost": -10, "refund_ratio": 0.5},
        {"cost": 10, "refund_ratio": 0},
        {"cost": 10, "refund_ratio": 1.5},
    ],
)
def test_invalid_entries_rejected(kwargs):
    with pytest.raises(CatalogError):
        CatalogEntry(id="x", display_name="X", **kwargs)


def test_catalog_is_read_only_and_rejects_duplicates(catalog):
    with pytest.raises(TypeError):
        catalog["house"] = catalog["well"]  # type: ignore[index]
    with pytest.raises(CatalogError):
        Catalog([catalog["house"], catalog["house"]])


def test_require_unknown_raises(catalog):
    with pytest.raises(UnknownCatalogEntry):
        catalog.require("castle")


def test_load_catalog_from_yaml(tmp_path: Path):
    path = tmp_path / "catalog.yaml"
    path.write_text(
        "entries:\n"
        "  - id: hut\n"
        "    display_name: Hut\n"
        "    cost: 12\n"
        "    refund_ratio: 0.25\n",
        encoding="utf-8",
    )
    catalog = load_catalog(path)
    assert list(catalog) == ["hut"]
    assert catalog["hut"].refund_for(12) == 3


def test_load_catalog_schema_errors(tmp_path: Path):
    path = tmp_path / "catalog.yaml"
    path.write_text("entries:\n  - id: hut\n    cost: '12'\n", encoding="utf-8")
    with pytest.raises(CatalogError) as exc:
        load_catalog(path)
    assert "validation failed" in str(exc.value)
