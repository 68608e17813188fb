import sys
from fractions import Fraction
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from village.catalog import Catalog, CatalogEntry  # noqa: E402
from village.config import VillageConfig  # noqa: E402


@pytest.fixture()
def catalog() -> Catalog:
    return Catalog(
        [
            CatalogEntry(id="house", display_name="House", cost=100, refund_ratio=Fraction(1, 2), footprint=(2, 2)),
            CatalogEntry(id="well", display_name="Well", cost=40, refund_ratio=Fraction(1, 2)),
            CatalogEntry(id="tree", display_name="Tree", cost=10, refund_ratio=Fraction(1)),
            CatalogEntry(id="fence", display_name="Fence", cost=5, refund_ratio=Fraction(4, 5)),
        ]
    )


@pytest.fixture()
def config(tmp_path: Path) -> VillageConfig:
    return VillageConfig(starting_balance=100, grid_size=0.5, save_dir=tmp_path / "saves")
